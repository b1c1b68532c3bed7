"""
RedirectParser - redirect annotations to a typed redirect directive.

Reads the permanent, temporal, www and relative redirect annotation groups
from a resource and assembles a RedirectConfig.

Key behaviors:
- Permanent redirect wins when both target annotations are present
- Status codes outside the class's legal set fall back to the class default
- Only http and https targets are accepted
- Missing annotations are reported as ABSENT, not as an error
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from urllib.parse import urlsplit

from .models import (
    AnnotationField,
    ParseResult,
    ParseStatus,
    RedirectClass,
    RedirectConfig,
    RedirectValidationError,
    RiskLevel,
)
from .ports import AnnotatedResource, AnnotationAccessorPort

logger = logging.getLogger(__name__)

# --- Annotation Names ---

PERMANENT_REDIRECT = "permanent-redirect"
PERMANENT_REDIRECT_CODE = "permanent-redirect-code"
TEMPORAL_REDIRECT = "temporal-redirect"
TEMPORAL_REDIRECT_CODE = "temporal-redirect-code"
FROM_TO_WWW_REDIRECT = "from-to-www-redirect"
RELATIVE_REDIRECTS = "relative-redirects"

# --- Status Codes ---

DEFAULT_PERMANENT_REDIRECT_CODE = 301
DEFAULT_TEMPORAL_REDIRECT_CODE = 302

VALID_CODES: dict[RedirectClass, frozenset[int]] = {
    RedirectClass.PERMANENT: frozenset({301, 308}),
    RedirectClass.TEMPORAL: frozenset({302, 303, 307}),
}

DEFAULT_CODES: dict[RedirectClass, int] = {
    RedirectClass.PERMANENT: DEFAULT_PERMANENT_REDIRECT_CODE,
    RedirectClass.TEMPORAL: DEFAULT_TEMPORAL_REDIRECT_CODE,
}

ALLOWED_SCHEMES = ("http", "https")

_TRUE_VALUES = frozenset({"1", "t", "true", "y", "yes"})
_FALSE_VALUES = frozenset({"0", "f", "false", "n", "no"})
_CODE_PATTERN = re.compile(r"[+-]?[0-9]+")

# --- Annotation Registry ---

REDIRECT_ANNOTATIONS: dict[str, AnnotationField] = {
    FROM_TO_WWW_REDIRECT: AnnotationField(
        validator="bool",
        risk=RiskLevel.LOW,
        documentation=(
            "Redirect from www.domain.com to domain.com or vice versa. "
            "The direction depends on the host configured on the resource."
        ),
    ),
    TEMPORAL_REDIRECT: AnnotationField(
        validator="url",
        risk=RiskLevel.MEDIUM,
        documentation=(
            "Return a temporal redirect (302 by default) to this URL instead "
            "of sending the request upstream."
        ),
    ),
    TEMPORAL_REDIRECT_CODE: AnnotationField(
        validator="int",
        risk=RiskLevel.LOW,
        documentation="Status code used for temporal redirects (302, 303 or 307).",
    ),
    PERMANENT_REDIRECT: AnnotationField(
        validator="url",
        risk=RiskLevel.MEDIUM,
        documentation=(
            "Return a permanent redirect (301 by default) to this URL instead "
            "of sending the request upstream."
        ),
    ),
    PERMANENT_REDIRECT_CODE: AnnotationField(
        validator="int",
        risk=RiskLevel.LOW,
        documentation="Status code used for permanent redirects (301 or 308).",
    ),
    RELATIVE_REDIRECTS: AnnotationField(
        validator="bool",
        risk=RiskLevel.LOW,
        documentation="Issue redirects with a Location that omits scheme and host.",
    ),
}


# --- Validation Functions ---


def validate_url(raw: str) -> RedirectValidationError | None:
    """Check that raw parses as a URL with an http or https scheme."""
    try:
        parsed = urlsplit(raw)
    except ValueError as e:
        return RedirectValidationError(
            code="invalid_url",
            message=f"cannot parse redirect target: {e}",
        )

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        return RedirectValidationError(
            code="invalid_protocol",
            message=f"only http and https are valid protocols ({parsed.scheme})",
        )

    return None


def resolve_code(requested: int | None, redirect_class: RedirectClass) -> int:
    """Map a requested status code onto the legal set of its class."""
    if requested is not None and requested in VALID_CODES[redirect_class]:
        return requested

    default = DEFAULT_CODES[redirect_class]
    if requested is not None:
        logger.debug(
            "Status code %s is not a %s redirect code, using %s",
            requested,
            redirect_class.value,
            default,
        )
    return default


def parse_code(raw: str | None) -> int | None:
    """Parse a status code annotation, None when missing or malformed."""
    if raw is None:
        return None
    if not _CODE_PATTERN.fullmatch(raw):
        logger.debug("Ignoring non-numeric status code %r", raw)
        return None
    return int(raw)


def parse_bool(raw: str) -> bool | None:
    """Parse a boolean literal, None when it is not one."""
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def check_annotation_risk(
    annotations: Mapping[str, str],
    max_risk: RiskLevel,
    key_for: Callable[[str], str],
) -> list[RedirectValidationError]:
    """Reject present annotations whose risk exceeds max_risk."""
    errors: list[RedirectValidationError] = []

    for name, meta in REDIRECT_ANNOTATIONS.items():
        if key_for(name) not in annotations:
            continue
        if meta.risk.value > max_risk.value:
            errors.append(
                RedirectValidationError(
                    code="annotation_too_risky",
                    message=(
                        f"annotation {name} is too risky for environment "
                        f"({meta.risk.name} > {max_risk.name})"
                    ),
                    field=name,
                )
            )

    return errors


# --- Redirect Parser ---


class RedirectParser:
    """
    Redirect annotation parser.

    Stateless apart from its injected accessor and risk ceiling, so one
    instance can be shared across threads.
    """

    def __init__(
        self,
        accessor: AnnotationAccessorPort,
        max_risk: RiskLevel = RiskLevel.CRITICAL,
    ) -> None:
        self._accessor = accessor
        self._max_risk = max_risk

    def _get_bool(
        self,
        resource: AnnotatedResource,
        name: str,
    ) -> tuple[bool | None, list[RedirectValidationError]]:
        raw = self._accessor.get(resource, name)
        if raw is None:
            return None, []

        value = parse_bool(raw)
        if value is None:
            return None, [
                RedirectValidationError(
                    code="invalid_content",
                    message=f"annotation {name} contains invalid value {raw!r}",
                    field=name,
                )
            ]
        return value, []

    def _get_www(self, resource: AnnotatedResource) -> bool | None:
        """Read from-to-www-redirect; a malformed value counts as unset."""
        value, errors = self._get_bool(resource, FROM_TO_WWW_REDIRECT)
        if errors:
            logger.warning("%s, treating it as false", errors[0].message)
        return value

    def _build(
        self,
        resource: AnnotatedResource,
        target: str,
        target_name: str,
        code_name: str,
        redirect_class: RedirectClass,
        from_to_www: bool,
        relative: bool,
    ) -> ParseResult:
        error = validate_url(target)
        if error is not None:
            return ParseResult(
                status=ParseStatus.INVALID,
                errors=[RedirectValidationError(error.code, error.message, target_name)],
            )

        code = resolve_code(
            parse_code(self._accessor.get(resource, code_name)),
            redirect_class,
        )

        return ParseResult(
            status=ParseStatus.OK,
            config=RedirectConfig(
                url=target,
                code=code,
                from_to_www=from_to_www,
                relative_redirects=relative,
            ),
        )

    def parse(self, resource: AnnotatedResource) -> ParseResult:
        """
        Parse a resource's redirect annotations.

        Precedence: permanent-redirect, then temporal-redirect, then the
        bare relative-redirects / from-to-www-redirect flags.

        Returns:
            ParseResult with status OK, ABSENT or INVALID.
        """
        relative, errors = self._get_bool(resource, RELATIVE_REDIRECTS)
        if errors:
            return ParseResult(status=ParseStatus.INVALID, errors=errors)

        # Permanent redirects never carry the www flag
        permanent = self._accessor.get(resource, PERMANENT_REDIRECT)
        if permanent is not None:
            return self._build(
                resource,
                permanent,
                PERMANENT_REDIRECT,
                PERMANENT_REDIRECT_CODE,
                RedirectClass.PERMANENT,
                from_to_www=False,
                relative=bool(relative),
            )

        from_to_www = self._get_www(resource)

        temporal = self._accessor.get(resource, TEMPORAL_REDIRECT)
        if temporal is not None:
            return self._build(
                resource,
                temporal,
                TEMPORAL_REDIRECT,
                TEMPORAL_REDIRECT_CODE,
                RedirectClass.TEMPORAL,
                from_to_www=bool(from_to_www),
                relative=bool(relative),
            )

        if relative is not None or from_to_www is not None:
            return ParseResult(
                status=ParseStatus.OK,
                config=RedirectConfig(
                    from_to_www=bool(from_to_www),
                    relative_redirects=bool(relative),
                ),
            )

        return ParseResult(
            status=ParseStatus.ABSENT,
            errors=[
                RedirectValidationError(
                    code="annotation_absent",
                    message="no redirect annotations present",
                )
            ],
        )

    def validate(self, annotations: Mapping[str, str]) -> list[RedirectValidationError]:
        """Check raw annotations against the configured risk ceiling."""
        return check_annotation_risk(annotations, self._max_risk, self._accessor.key_for)

    def get_documentation(self) -> dict[str, AnnotationField]:
        """Describe every redirect annotation."""
        return dict(REDIRECT_ANNOTATIONS)
