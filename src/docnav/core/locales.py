"""Locales and per-node label translations."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from docnav.core.errors import DuplicateOverrideError, UnknownLocaleError
from docnav.core.tree import NavTree
from docnav.core.types import LocaleCode, NodeId


@dataclass(frozen=True)
class Locale:
    """Supported language/region variant."""

    code: LocaleCode
    label: str
    lang: str | None = None
    default: bool = False

    @property
    def html_lang(self) -> str:
        return self.lang or self.code

    def to_dict(self) -> dict[str, str | bool]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "label": self.label,
            "lang": self.html_lang,
            "default": self.default,
        }


class LocaleSet:
    """Fixed, ordered set of locales with exactly one default."""

    __slots__ = ("_default", "_locales")

    def __init__(self, locales: Iterable[Locale]) -> None:
        """Initialize locale set.

        Raises:
            ValueError: If codes repeat or there is not exactly one default
        """
        self._locales: dict[LocaleCode, Locale] = {}
        for locale in locales:
            if locale.code in self._locales:
                raise ValueError(f"Locale defined twice: {locale.code}")
            self._locales[locale.code] = locale

        defaults = [locale for locale in self._locales.values() if locale.default]
        if len(defaults) != 1:
            raise ValueError(
                f"Exactly one default locale required, found {len(defaults)}",
            )
        self._default = defaults[0]

    @property
    def default(self) -> Locale:
        return self._default

    @property
    def codes(self) -> list[LocaleCode]:
        return list(self._locales)

    def get(self, code: str) -> Locale:
        """Get locale by code.

        Raises:
            UnknownLocaleError: If the code is not configured
        """
        locale = self._locales.get(LocaleCode(code))
        if locale is None:
            raise UnknownLocaleError(code)
        return locale

    def non_default(self) -> list[Locale]:
        return [locale for locale in self._locales.values() if not locale.default]

    def __contains__(self, code: object) -> bool:
        return code in self._locales

    def __iter__(self) -> Iterator[Locale]:
        return iter(self._locales.values())

    def __len__(self) -> int:
        return len(self._locales)


def fallback_label(overrides: Mapping[LocaleCode, str], locale: str, default: str) -> str:
    """Pick the label for a locale.

    The only fallback is the default-locale label; another locale's
    translation is never used.
    """
    return overrides.get(LocaleCode(locale), default)


class LocaleCatalog:
    """Default labels and per-locale overrides, keyed by node id."""

    __slots__ = ("_defaults", "_locales", "_overrides")

    def __init__(
        self,
        locales: LocaleSet,
        defaults: Mapping[NodeId, str],
        overrides: Mapping[NodeId, Mapping[LocaleCode, str]] | None = None,
    ) -> None:
        """Initialize catalog.

        Overrides passed here are taken as-is; set_override() is the checked
        path. The validator reports anything the constructor let through.

        Args:
            locales: Configured locale set
            defaults: Default-locale label for each node
            overrides: Existing overrides per node and locale
        """
        self._locales = locales
        self._defaults = dict(defaults)
        self._overrides: dict[NodeId, dict[LocaleCode, str]] = {
            node: dict(labels) for node, labels in (overrides or {}).items()
        }

    @classmethod
    def from_tree(cls, tree: NavTree, locales: LocaleSet) -> "LocaleCatalog":
        """Create a catalog seeded with the tree's default labels."""
        return cls(locales, {node.id: node.label for node in tree.walk()})

    @property
    def locales(self) -> LocaleSet:
        return self._locales

    def set_override(self, node: NodeId, locale: str, label: str) -> None:
        """Set the translated label of a node.

        Raises:
            UnknownLocaleError: If the locale is not configured
            DuplicateOverrideError: If the node already has an override for the locale
        """
        if locale not in self._locales:
            raise UnknownLocaleError(locale)
        labels = self._overrides.setdefault(node, {})
        if locale in labels:
            raise DuplicateOverrideError(node, locale)
        labels[LocaleCode(locale)] = label

    def label_for(self, node: NodeId, locale: str) -> str:
        """Get the label of a node in a locale.

        Raises:
            KeyError: If the node has no default label in this catalog
        """
        return fallback_label(self._overrides.get(node, {}), locale, self._defaults[node])

    def default_label(self, node: NodeId) -> str | None:
        return self._defaults.get(node)

    def override_for(self, node: NodeId, locale: str) -> str | None:
        return self._overrides.get(node, {}).get(LocaleCode(locale))

    def has_override(self, node: NodeId, locale: str) -> bool:
        return locale in self._overrides.get(node, {})

    def overrides(self) -> Iterator[tuple[NodeId, LocaleCode, str]]:
        """Iterate over every override in insertion order."""
        for node, labels in self._overrides.items():
            for locale, label in labels.items():
                yield node, locale, label
