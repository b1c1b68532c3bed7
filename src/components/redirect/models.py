"""
Redirect component input/output models.

Key behaviors:
- RedirectConfig is immutable and compared by value
- ParseResult separates "nothing configured" from "configured but invalid"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# --- Redirect Class ---


class RedirectClass(Enum):
    """Family of HTTP redirect status codes."""

    PERMANENT = "permanent"
    TEMPORAL = "temporal"


class RiskLevel(Enum):
    """How much damage a misused annotation can do."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @classmethod
    def from_name(cls, name: str) -> RiskLevel:
        return cls[name.strip().upper()]


# --- Validation Error ---


@dataclass(frozen=True)
class RedirectValidationError:
    """Redirect annotation validation error."""

    code: str
    message: str
    field: str | None = None


# --- Redirect Config ---


@dataclass(frozen=True)
class RedirectConfig:
    """Resolved redirect directive for a single resource."""

    url: str = ""
    code: int = 0
    from_to_www: bool = False
    relative_redirects: bool = False

    def equal(self, other: RedirectConfig | None) -> bool:
        """Value comparison that tolerates None."""
        if other is None:
            return False
        return self == other

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "code": self.code,
            "fromToWWW": self.from_to_www,
            "relative": self.relative_redirects,
        }


# --- Parse Result ---


class ParseStatus(Enum):
    """Outcome of parsing a resource's redirect annotations."""

    OK = "ok"
    ABSENT = "absent"
    INVALID = "invalid"


@dataclass(frozen=True)
class ParseResult:
    """Tagged outcome of a single parse."""

    status: ParseStatus
    config: RedirectConfig | None = None
    errors: list[RedirectValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.OK

    @property
    def absent(self) -> bool:
        return self.status is ParseStatus.ABSENT

    @property
    def invalid(self) -> bool:
        return self.status is ParseStatus.INVALID


# --- Annotation Registry ---


@dataclass(frozen=True)
class AnnotationField:
    """Metadata describing one recognised annotation."""

    validator: str
    risk: RiskLevel
    documentation: str
    scope: str = "location"


# --- Input Models ---


@dataclass(frozen=True)
class ParseRedirectInput:
    """Input for parsing one resource."""

    resource: Any


@dataclass(frozen=True)
class ValidateAnnotationsInput:
    """Input for checking a raw, prefixed annotation map."""

    annotations: Mapping[str, str]


@dataclass(frozen=True)
class ParseBatchInput:
    """Input for parsing many resources in one pass."""

    resources: tuple[Any, ...]


# --- Output Models ---


@dataclass(frozen=True)
class RedirectParseOutput:
    """Output for a single parse."""

    result: ParseResult
    errors: list[RedirectValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class RedirectValidateOutput:
    """Output for annotation validation."""

    errors: list[RedirectValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class SkippedResource:
    """Resource whose redirect annotations were rejected."""

    name: str
    errors: list[RedirectValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class RedirectBatchOutput:
    """Output for a batch parse."""

    configs: dict[str, RedirectConfig] = field(default_factory=dict)
    skipped: tuple[SkippedResource, ...] = ()
    errors: list[RedirectValidationError] = field(default_factory=list)
    success: bool = True
