"""
Redirect component port definitions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from .models import AnnotationField, ParseResult, RedirectValidationError


class AnnotatedResource(Protocol):
    """Routing resource carrying string annotations."""

    @property
    def annotations(self) -> Mapping[str, str]:
        """Raw annotation map, keys include the prefix."""
        ...


class AnnotationAccessorPort(Protocol):
    """Reads one annotation by its unprefixed name."""

    def key_for(self, name: str) -> str:
        """Full annotation key, prefix included."""
        ...

    def get(self, resource: AnnotatedResource, name: str) -> str | None:
        """Return the annotation value, or None when not present."""
        ...


class AnnotationParserPort(Protocol):
    """Shared interface for every annotation group parser."""

    def parse(self, resource: AnnotatedResource) -> ParseResult:
        """Parse a resource's annotations into a typed configuration."""
        ...

    def validate(self, annotations: Mapping[str, str]) -> list[RedirectValidationError]:
        """Check raw annotations against the group's registry."""
        ...

    def get_documentation(self) -> dict[str, AnnotationField]:
        """Describe the annotations this parser understands."""
        ...
