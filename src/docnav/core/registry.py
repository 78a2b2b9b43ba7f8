"""Registry of canonical content keys."""

from collections.abc import Iterator

from docnav.core.errors import DuplicateSlugError
from docnav.core.types import Slug


class SlugRegistry:
    """Set of registered slugs with global uniqueness.

    Iteration yields slugs in registration order.
    """

    __slots__ = ("_slugs",)

    def __init__(self) -> None:
        self._slugs: dict[Slug, None] = {}

    def register(self, slug: str) -> Slug:
        """Register a slug.

        Args:
            slug: Canonical content key

        Returns:
            The registered slug

        Raises:
            DuplicateSlugError: If the slug is already registered
        """
        key = Slug(slug)
        if key in self._slugs:
            raise DuplicateSlugError(slug)
        self._slugs[key] = None
        return key

    def contains(self, slug: str) -> bool:
        return slug in self._slugs

    def __contains__(self, slug: object) -> bool:
        return slug in self._slugs

    def __len__(self) -> int:
        return len(self._slugs)

    def __iter__(self) -> Iterator[Slug]:
        return iter(self._slugs)
