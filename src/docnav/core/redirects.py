"""Path redirect rules."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from docnav.core.registry import SlugRegistry
from docnav.core.validator import Violation, ViolationKind

_EXTERNAL_PREFIXES = ("http://", "https://")


@dataclass(frozen=True)
class RedirectRule:
    """Rewrite of a source path to a slug, locale prefix or URL."""

    source: str
    target: str

    @property
    def is_external(self) -> bool:
        return self.target.startswith(_EXTERNAL_PREFIXES)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"source": self.source, "target": self.target}


class RedirectTable:
    """Ordered redirect rules with longest-prefix lookup."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[RedirectRule] = ()) -> None:
        self._rules: list[RedirectRule] = []
        for rule in rules:
            self.add_rule(rule.source, rule.target)

    def add_rule(self, source: str, target: str) -> RedirectRule:
        """Add a rule.

        Args:
            source: Inbound path (e.g., "/" or "/old/guide")
            target: Slug, locale-prefixed slug, locale prefix or absolute URL

        Returns:
            The added rule
        """
        rule = RedirectRule(source=_normalize_path(source), target=target)
        self._rules.append(rule)
        return rule

    def validate(self, registry: SlugRegistry, locale_codes: Iterable[str] = ()) -> list[Violation]:
        """Check that every slug target is registered.

        A leading segment equal to one of locale_codes is a locale prefix and
        is not part of the slug. A target that is only a locale prefix is
        valid when that locale is given.

        Args:
            registry: Registered slugs
            locale_codes: Configured locale codes

        Returns:
            One dangling-redirect violation per unresolvable rule, in rule order
        """
        codes = set(locale_codes)
        violations: list[Violation] = []
        for rule in self._rules:
            if rule.is_external:
                continue
            slug = _target_slug(rule.target, codes)
            if slug is None or registry.contains(slug):
                continue
            violations.append(
                Violation(
                    kind=ViolationKind.DANGLING_REDIRECT,
                    message=f"Redirect {rule.source} -> {rule.target} targets unknown slug '{slug}'",
                    source=rule.source,
                    target=rule.target,
                ),
            )
        return violations

    def match(self, request_path: str, locale_codes: Iterable[str] = ()) -> RedirectRule | None:
        """Find the rule with the longest source matching the path.

        Sources match whole path segments. On equal sources the rule
        registered first wins. A rule never matches its own destination,
        and when locale_codes are given, a path under a locale prefix only
        matches rules whose source carries a locale prefix too.
        """
        path = _normalize_path(request_path)
        codes = set(locale_codes)
        localized = _head(path) in codes
        best: RedirectRule | None = None
        for rule in self._rules:
            if not _is_prefix(rule.source, path):
                continue
            if localized and _head(rule.source) not in codes:
                continue
            if not rule.is_external and _normalize_path(rule.target) == path:
                continue
            if best is None or len(rule.source) > len(best.source):
                best = rule
        return best

    def resolve(self, request_path: str, locale_codes: Iterable[str] = ()) -> str | None:
        """Get the redirect target for an inbound path, None if no rule matches."""
        rule = self.match(request_path, locale_codes)
        if rule is None:
            return None
        return rule.target

    def __iter__(self) -> Iterator[RedirectRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


def _normalize_path(path: str) -> str:
    """Normalize path to have a leading slash and no trailing slash."""
    stripped = path.strip("/")
    return f"/{stripped}" if stripped else "/"


def _is_prefix(source: str, path: str) -> bool:
    if source == "/":
        return True
    return path == source or path.startswith(f"{source}/")


def _target_slug(target: str, locale_codes: set[str]) -> str | None:
    """Extract the slug a target names, None for a bare locale prefix."""
    slug = target.strip("/")
    head, _, rest = slug.partition("/")
    if head in locale_codes:
        return rest or None
    return slug


def _head(path: str) -> str:
    return path.strip("/").partition("/")[0]
