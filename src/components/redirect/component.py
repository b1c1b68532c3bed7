"""
Redirect component - redirect annotations to redirect directives.

Parses the redirect annotation groups of routing resources into
RedirectConfig values for the configuration generator.

Invariants:
- I1: Code is always legal for the selected redirect class
- I2: A present target URL is http or https, otherwise the parse is INVALID
- I3: Permanent redirect takes precedence over temporal redirect
- I4: A bad resource never stops a batch
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._impl import RedirectParser
from .models import (
    ParseBatchInput,
    ParseRedirectInput,
    RedirectBatchOutput,
    RedirectConfig,
    RedirectParseOutput,
    RedirectValidateOutput,
    RiskLevel,
    SkippedResource,
    ValidateAnnotationsInput,
)
from .ports import AnnotationAccessorPort

if TYPE_CHECKING:
    from src.rules.models import Rules

logger = logging.getLogger(__name__)


def _resource_name(resource: object, index: int) -> str:
    """Best-effort identifier for logs and batch output."""
    key = getattr(resource, "key", None)
    if key:
        return str(key)
    name = getattr(resource, "name", None)
    return str(name) if name else f"resource[{index}]"


def create_redirect_parser(
    accessor: AnnotationAccessorPort | None = None,
    rules: Rules | None = None,
) -> RedirectParser:
    """
    Create a redirect parser.

    Args:
        accessor: Annotation accessor. Built from the rules' prefix if None.
        rules: Optional rules supplying the prefix and risk ceiling.
    """
    if accessor is None:
        from src.adapters.annotations import PrefixedAnnotationAccessor

        if rules is None:
            accessor = PrefixedAnnotationAccessor()
        else:
            accessor = PrefixedAnnotationAccessor(rules.annotations.prefix)

    max_risk = rules.annotations.risk_level if rules is not None else RiskLevel.CRITICAL
    return RedirectParser(accessor=accessor, max_risk=max_risk)


# --- Component Entry Points ---


def run_parse(
    inp: ParseRedirectInput,
    *,
    accessor: AnnotationAccessorPort | None = None,
    rules: Rules | None = None,
) -> RedirectParseOutput:
    """
    Parse one resource's redirect annotations.

    Args:
        inp: Input containing the resource.
        accessor: Optional annotation accessor port.
        rules: Optional rules for configuration.

    Returns:
        RedirectParseOutput; success is False only for INVALID results.
        An ABSENT result is a success with no config.
    """
    parser = create_redirect_parser(accessor, rules)
    result = parser.parse(inp.resource)

    return RedirectParseOutput(
        result=result,
        errors=list(result.errors) if result.invalid else [],
        success=not result.invalid,
    )


def run_validate(
    inp: ValidateAnnotationsInput,
    *,
    accessor: AnnotationAccessorPort | None = None,
    rules: Rules | None = None,
) -> RedirectValidateOutput:
    """
    Check a raw annotation map against the annotation risk ceiling.

    Args:
        inp: Input containing the prefixed annotation map.
        accessor: Optional annotation accessor port.
        rules: Optional rules for configuration.

    Returns:
        RedirectValidateOutput with any risk errors.
    """
    parser = create_redirect_parser(accessor, rules)
    errors = parser.validate(inp.annotations)

    return RedirectValidateOutput(errors=errors, success=len(errors) == 0)


def run_batch(
    inp: ParseBatchInput,
    *,
    accessor: AnnotationAccessorPort | None = None,
    rules: Rules | None = None,
) -> RedirectBatchOutput:
    """
    Parse many resources, skipping the ones with invalid annotations.

    Resources without redirect annotations are left out of the output.

    Args:
        inp: Input containing the resources.
        accessor: Optional annotation accessor port.
        rules: Optional rules for configuration.

    Returns:
        RedirectBatchOutput with configs keyed by resource name.
    """
    parser = create_redirect_parser(accessor, rules)

    configs: dict[str, RedirectConfig] = {}
    skipped: list[SkippedResource] = []

    for index, resource in enumerate(inp.resources):
        name = _resource_name(resource, index)
        result = parser.parse(resource)

        if result.invalid:
            logger.warning(
                "Skipping redirect for %s: %s",
                name,
                "; ".join(e.message for e in result.errors),
            )
            skipped.append(SkippedResource(name=name, errors=list(result.errors)))
            continue

        if result.config is not None:
            if name in configs:
                logger.warning("Duplicate resource %s, keeping the last redirect", name)
            configs[name] = result.config

    return RedirectBatchOutput(
        configs=configs,
        skipped=tuple(skipped),
        errors=[e for s in skipped for e in s.errors],
        success=len(skipped) == 0,
    )


def run(
    inp: ParseRedirectInput | ValidateAnnotationsInput | ParseBatchInput,
    *,
    accessor: AnnotationAccessorPort | None = None,
    rules: Rules | None = None,
) -> RedirectParseOutput | RedirectValidateOutput | RedirectBatchOutput:
    """
    Main entry point for the redirect component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ParseRedirectInput):
        return run_parse(inp, accessor=accessor, rules=rules)
    elif isinstance(inp, ValidateAnnotationsInput):
        return run_validate(inp, accessor=accessor, rules=rules)
    elif isinstance(inp, ParseBatchInput):
        return run_batch(inp, accessor=accessor, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
