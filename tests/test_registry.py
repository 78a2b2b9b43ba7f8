"""Tests for SlugRegistry."""

import pytest
from docnav.core.errors import DuplicateSlugError
from docnav.core.registry import SlugRegistry


class TestSlugRegistry:
    """Tests for slug registration."""

    def test__register__new_slug__contained(self) -> None:
        """Registered slug is reported as contained."""
        registry = SlugRegistry()

        registry.register("basics/routing")

        assert registry.contains("basics/routing")
        assert "basics/routing" in registry
        assert len(registry) == 1

    def test__register__duplicate__raises_and_keeps_size(self) -> None:
        """Reject a duplicate slug without changing the registry."""
        registry = SlugRegistry()
        registry.register("modes/webhook")

        with pytest.raises(DuplicateSlugError, match="modes/webhook") as exc_info:
            registry.register("modes/webhook")

        assert exc_info.value.slug == "modes/webhook"
        assert len(registry) == 1

    def test__contains__unknown__false(self) -> None:
        """Unregistered slug is not contained."""
        registry = SlugRegistry()
        registry.register("basics/routing")

        assert not registry.contains("basics/commands")

    def test__iter__preserves_registration_order(self) -> None:
        """Iterate in registration order."""
        registry = SlugRegistry()
        for slug in ["b", "a", "c"]:
            registry.register(slug)

        assert list(registry) == ["b", "a", "c"]
