"""Structural and semantic checks over a navigation tree and its catalog.

Checks run in a fixed order and every violation is collected, so one
report lists every defect found in a single pass:

1. Slug uniqueness
2. Default-label completeness
3. Override referential integrity (node and locale)
4. Translation coverage per non-default locale (advisory)
5. Default-locale overrides that diverge from the default label (advisory)
"""

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import TypedDict

from docnav.core.locales import LocaleCatalog, LocaleSet
from docnav.core.tree import NavTree
from docnav.core.types import LocaleCode, NodeId, Slug

logger = logging.getLogger(__name__)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


class ViolationKind(Enum):
    DUPLICATE_SLUG = "duplicate_slug"
    MISSING_DEFAULT_LABEL = "missing_default_label"
    ORPHANED_OVERRIDE = "orphaned_override"
    UNKNOWN_LOCALE = "unknown_locale"
    DANGLING_REDIRECT = "dangling_redirect"
    DEFAULT_LABEL_DIVERGENCE = "default_label_divergence"

    @property
    def severity(self) -> Severity:
        if self is ViolationKind.DEFAULT_LABEL_DIVERGENCE:
            return Severity.WARNING
        return Severity.ERROR


class ViolationDict(TypedDict, total=False):
    """Dictionary representation of a violation."""

    kind: str
    severity: str
    message: str
    node: int
    slug: str
    locale: str
    source: str
    target: str


@dataclass(frozen=True)
class Violation:
    """Single defect found in the navigation configuration."""

    kind: ViolationKind
    message: str
    node: NodeId | None = None
    slug: Slug | None = None
    locale: LocaleCode | None = None
    source: str | None = None
    target: str | None = None

    @property
    def fatal(self) -> bool:
        return self.kind.severity is Severity.ERROR

    def to_dict(self) -> ViolationDict:
        """Convert to dictionary for JSON serialization."""
        result: ViolationDict = {
            "kind": self.kind.value,
            "severity": self.kind.severity.value,
            "message": self.message,
        }
        if self.node is not None:
            result["node"] = self.node
        if self.slug is not None:
            result["slug"] = self.slug
        if self.locale is not None:
            result["locale"] = self.locale
        if self.source is not None:
            result["source"] = self.source
        if self.target is not None:
            result["target"] = self.target
        return result


@dataclass(frozen=True)
class LocaleCoverage:
    """Translation coverage of one non-default locale."""

    locale: LocaleCode
    total: int
    translated: int
    missing: tuple[NodeId, ...] = ()

    @property
    def ratio(self) -> float:
        if self.total == 0:
            return 1.0
        return self.translated / self.total

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "locale": self.locale,
            "total": self.total,
            "translated": self.translated,
            "ratio": round(self.ratio, 4),
            "missing": list(self.missing),
        }


@dataclass(frozen=True)
class ValidationReport:
    """Violations in check order plus the coverage summary."""

    violations: tuple[Violation, ...] = ()
    coverage: tuple[LocaleCoverage, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def errors(self) -> list[Violation]:
        return [v for v in self.violations if v.fatal]

    @property
    def warnings(self) -> list[Violation]:
        return [v for v in self.violations if not v.fatal]

    def extend(self, violations: list[Violation]) -> "ValidationReport":
        """Return a report with extra violations appended."""
        return ValidationReport(
            violations=self.violations + tuple(violations),
            coverage=self.coverage,
        )

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "valid": self.is_valid,
            "violations": [v.to_dict() for v in self.violations],
            "coverage": [c.to_dict() for c in self.coverage],
        }


def validate(tree: NavTree, catalog: LocaleCatalog, locales: LocaleSet) -> ValidationReport:
    """Validate a tree and its catalog against the configured locales.

    Args:
        tree: Navigation tree
        catalog: Label catalog for the tree's nodes
        locales: Configured locale set

    Returns:
        Report with every violation found and per-locale coverage
    """
    violations: list[Violation] = []
    violations.extend(_check_unique_slugs(tree))
    violations.extend(_check_default_labels(tree, catalog))
    violations.extend(_check_overrides(tree, catalog, locales))
    coverage = _coverage(tree, catalog, locales)
    violations.extend(_check_default_divergence(tree, catalog, locales))

    report = ValidationReport(violations=tuple(violations), coverage=tuple(coverage))
    logger.info(
        f"Validated {len(tree)} nodes: {len(report.errors)} error(s), "
        f"{len(report.warnings)} warning(s)",
    )
    return report


def _check_unique_slugs(tree: NavTree) -> list[Violation]:
    counts = Counter(tree.slugs())
    seen: set[Slug] = set()
    violations: list[Violation] = []
    for node in tree.walk():
        slug = node.slug
        if slug is None or counts[slug] < 2:
            continue
        if slug not in seen:
            seen.add(slug)
            continue
        violations.append(
            Violation(
                kind=ViolationKind.DUPLICATE_SLUG,
                message=f"Slug '{slug}' is used by {counts[slug]} items",
                node=node.id,
                slug=slug,
            ),
        )
    return violations


def _check_default_labels(tree: NavTree, catalog: LocaleCatalog) -> list[Violation]:
    """Flag nodes without a default label in the tree or in the catalog.

    Resolution reads the catalog copy, so both must be present.
    """
    violations: list[Violation] = []
    for node in tree.walk():
        description = f"{node.kind.value.capitalize()} {_describe(node.id, node.slug)}"
        if not node.label.strip():
            message = f"{description} has no default label"
        elif not (catalog.default_label(node.id) or "").strip():
            message = f"{description} has no default label in the catalog"
        else:
            continue
        violations.append(
            Violation(
                kind=ViolationKind.MISSING_DEFAULT_LABEL,
                message=message,
                node=node.id,
                slug=node.slug,
            ),
        )
    return violations


def _check_overrides(
    tree: NavTree,
    catalog: LocaleCatalog,
    locales: LocaleSet,
) -> list[Violation]:
    violations: list[Violation] = []
    for node_id, locale, label in catalog.overrides():
        slug: Slug | None = None
        if tree.contains(node_id):
            slug = tree.node(node_id).slug
        else:
            violations.append(
                Violation(
                    kind=ViolationKind.ORPHANED_OVERRIDE,
                    message=f"Override '{label}' for locale '{locale}' references missing node {node_id}",
                    node=node_id,
                    locale=locale,
                ),
            )
        if locale not in locales:
            violations.append(
                Violation(
                    kind=ViolationKind.UNKNOWN_LOCALE,
                    message=f"Override for {_describe(node_id, slug)} uses unknown locale '{locale}'",
                    node=node_id,
                    slug=slug,
                    locale=locale,
                ),
            )
    return violations


def _coverage(tree: NavTree, catalog: LocaleCatalog, locales: LocaleSet) -> list[LocaleCoverage]:
    nodes = list(tree.walk())
    result: list[LocaleCoverage] = []
    for locale in locales.non_default():
        missing = tuple(node.id for node in nodes if not catalog.has_override(node.id, locale.code))
        result.append(
            LocaleCoverage(
                locale=locale.code,
                total=len(nodes),
                translated=len(nodes) - len(missing),
                missing=missing,
            ),
        )
        logger.debug(f"Locale {locale.code}: {len(missing)} of {len(nodes)} labels fall back")
    return result


def _check_default_divergence(
    tree: NavTree,
    catalog: LocaleCatalog,
    locales: LocaleSet,
) -> list[Violation]:
    default = locales.default.code
    violations: list[Violation] = []
    for node in tree.walk():
        label = catalog.override_for(node.id, default)
        default_label = catalog.default_label(node.id)
        if label is None or default_label is None or label == default_label:
            continue
        violations.append(
            Violation(
                kind=ViolationKind.DEFAULT_LABEL_DIVERGENCE,
                message=(
                    f"Override '{label}' for default locale '{default}' differs from "
                    f"label '{default_label}' of {_describe(node.id, node.slug)}"
                ),
                node=node.id,
                slug=node.slug,
                locale=default,
            ),
        )
    return violations


def _describe(node_id: NodeId, slug: Slug | None) -> str:
    if slug is not None:
        return f"'{slug}'"
    return f"node {node_id}"
