from collections.abc import Callable
from pathlib import Path

import pytest

from src.adapters.annotations import (
    DEFAULT_ANNOTATION_PREFIX,
    PrefixedAnnotationAccessor,
    RoutingResource,
)
from src.components.redirect import RedirectParser
from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def accessor() -> PrefixedAnnotationAccessor:
    return PrefixedAnnotationAccessor(DEFAULT_ANNOTATION_PREFIX)


@pytest.fixture
def parser(accessor: PrefixedAnnotationAccessor) -> RedirectParser:
    return RedirectParser(accessor=accessor)


@pytest.fixture
def make_resource() -> Callable[..., RoutingResource]:
    """
    Build a resource from unprefixed annotation names.

    make_resource(**{"permanent-redirect": "http://x"}) stores the value
    under "<default prefix>/permanent-redirect".
    """

    def _make(name: str = "demo", namespace: str = "default", **annotations: str) -> RoutingResource:
        return RoutingResource(
            name=name,
            namespace=namespace,
            annotations={f"{DEFAULT_ANNOTATION_PREFIX}/{k}": v for k, v in annotations.items()},
        )

    return _make


@pytest.fixture
def rules() -> Rules:
    """Rules loaded from the project's rules.yaml."""
    rules_path = PROJECT_ROOT / "rules.yaml"
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)
