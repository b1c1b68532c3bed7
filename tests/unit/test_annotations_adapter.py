"""
Tests for PrefixedAnnotationAccessor and RoutingResource.
"""

from __future__ import annotations

import pytest

from src.adapters.annotations import (
    DEFAULT_ANNOTATION_PREFIX,
    PrefixedAnnotationAccessor,
    RoutingResource,
)


class TestPrefixedAnnotationAccessor:
    """Test prefixed annotation lookup."""

    def test_key_for(self) -> None:
        accessor = PrefixedAnnotationAccessor("example.com")

        assert accessor.key_for("permanent-redirect") == "example.com/permanent-redirect"
        assert accessor.prefix == "example.com"

    def test_default_prefix(self) -> None:
        assert PrefixedAnnotationAccessor().prefix == DEFAULT_ANNOTATION_PREFIX

    def test_get_present(self) -> None:
        accessor = PrefixedAnnotationAccessor("example.com")
        resource = RoutingResource(
            name="web", annotations={"example.com/temporal-redirect": " https://a.com "}
        )

        assert accessor.get(resource, "temporal-redirect") == "https://a.com"

    def test_get_missing(self) -> None:
        accessor = PrefixedAnnotationAccessor("example.com")
        resource = RoutingResource(name="web", annotations={"other.com/temporal-redirect": "x"})

        assert accessor.get(resource, "temporal-redirect") is None

    def test_get_blank_is_missing(self) -> None:
        accessor = PrefixedAnnotationAccessor("example.com")
        resource = RoutingResource(name="web", annotations={"example.com/temporal-redirect": ""})

        assert accessor.get(resource, "temporal-redirect") is None

    def test_get_without_annotations(self) -> None:
        accessor = PrefixedAnnotationAccessor()

        assert accessor.get(object(), "permanent-redirect") is None

    @pytest.mark.parametrize("prefix", ["", "example.com/"])
    def test_invalid_prefix(self, prefix: str) -> None:
        with pytest.raises(ValueError, match="Invalid annotation prefix"):
            PrefixedAnnotationAccessor(prefix)


class TestRoutingResource:
    """Test resource construction."""

    def test_from_dict(self) -> None:
        resource = RoutingResource.from_dict(
            {
                "name": "web",
                "namespace": "shop",
                "annotations": {"example.com/relative-redirects": True, "example.com/code": 308},
            }
        )

        assert resource.key == "shop/web"
        assert resource.annotations == {
            "example.com/relative-redirects": "True",
            "example.com/code": "308",
        }

    def test_from_dict_drops_null_values(self) -> None:
        resource = RoutingResource.from_dict(
            {
                "name": "web",
                "annotations": {
                    f"{DEFAULT_ANNOTATION_PREFIX}/permanent-redirect": None,
                    f"{DEFAULT_ANNOTATION_PREFIX}/relative-redirects": "true",
                },
            }
        )

        assert resource.annotations == {f"{DEFAULT_ANNOTATION_PREFIX}/relative-redirects": "true"}
        assert PrefixedAnnotationAccessor().get(resource, "permanent-redirect") is None

    def test_from_dict_defaults(self) -> None:
        resource = RoutingResource.from_dict({"name": "web"})

        assert resource.namespace == "default"
        assert resource.annotations == {}

    def test_from_dict_requires_name(self) -> None:
        with pytest.raises(KeyError):
            RoutingResource.from_dict({"namespace": "shop"})
