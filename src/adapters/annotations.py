"""
Annotation accessor adapter.

Reads namespaced annotations ("<prefix>/<name>") from a resource's
annotation map. The prefix is fixed when the accessor is built.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

DEFAULT_ANNOTATION_PREFIX = "nginx.ingress.kubernetes.io"


@dataclass(frozen=True)
class RoutingResource:
    """Minimal routing resource: identity plus annotations."""

    name: str
    namespace: str = "default"
    annotations: Mapping[str, str] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RoutingResource:
        annotations = data.get("annotations") or {}
        return cls(
            name=str(data["name"]),
            namespace=str(data.get("namespace") or "default"),
            annotations={str(k): str(v) for k, v in annotations.items() if v is not None},
        )


class PrefixedAnnotationAccessor:
    def __init__(self, prefix: str = DEFAULT_ANNOTATION_PREFIX) -> None:
        if not prefix or prefix.endswith("/"):
            raise ValueError(f"Invalid annotation prefix: {prefix!r}")
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def key_for(self, name: str) -> str:
        return f"{self._prefix}/{name}"

    def get(self, resource: Any, name: str) -> str | None:
        annotations = getattr(resource, "annotations", None) or {}
        value = annotations.get(self.key_for(name))
        if value is None:
            return None
        value = value.strip()
        return value or None
