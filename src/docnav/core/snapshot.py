"""Immutable navigation snapshots.

A snapshot bundles everything one configuration load produces. Readers
hold a reference to one snapshot for the duration of a request; reloads
build a new snapshot and swap it in as a unit.
"""

import logging
from dataclasses import dataclass, field

from docnav.core.locales import LocaleCatalog, LocaleSet
from docnav.core.redirects import RedirectTable
from docnav.core.registry import SlugRegistry
from docnav.core.resolver import ResolvedTree, resolve
from docnav.core.tree import NavTree
from docnav.core.validator import ValidationReport, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavSnapshot:
    """Validated navigation state of one configuration load."""

    locales: LocaleSet
    tree: NavTree
    catalog: LocaleCatalog
    registry: SlugRegistry
    redirects: RedirectTable
    report: ValidationReport
    version: int = 0
    _resolved: dict[str, ResolvedTree] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def create(
        cls,
        locales: LocaleSet,
        tree: NavTree,
        catalog: LocaleCatalog,
        registry: SlugRegistry,
        redirects: RedirectTable,
        *,
        version: int = 0,
    ) -> "NavSnapshot":
        """Validate the parts and bundle them into a snapshot.

        The report covers the tree, the catalog and the redirect table.
        """
        report = validate(tree, catalog, locales)
        report = report.extend(redirects.validate(registry, locales.codes))
        return cls(
            locales=locales,
            tree=tree,
            catalog=catalog,
            registry=registry,
            redirects=redirects,
            report=report,
            version=version,
        )

    @property
    def is_valid(self) -> bool:
        return self.report.is_valid

    def resolve(self, locale: str, *, allow_unvalidated: bool = False) -> ResolvedTree:
        """Resolve navigation for a locale against this snapshot's report.

        Results for valid snapshots are memoized per locale.
        """
        cached = self._resolved.get(locale)
        if cached is not None:
            return cached
        resolved = resolve(
            self.tree,
            self.catalog,
            locale,
            report=self.report,
            allow_unvalidated=allow_unvalidated,
        )
        if self.report.is_valid:
            self._resolved[locale] = resolved
        return resolved


class SnapshotStore:
    """Holder of the current snapshot.

    Replacement is a single reference assignment, so concurrent readers see
    either the old or the new snapshot, never a mix.
    """

    __slots__ = ("_current",)

    def __init__(self, snapshot: NavSnapshot) -> None:
        self._current = snapshot

    @property
    def current(self) -> NavSnapshot:
        return self._current

    def replace(self, snapshot: NavSnapshot) -> NavSnapshot:
        """Swap in a new snapshot with the next version number.

        Raises:
            ValueError: If the snapshot has fatal violations
        """
        if not snapshot.is_valid:
            raise ValueError(
                f"Refusing to replace navigation: {len(snapshot.report.errors)} fatal violation(s)",
            )
        versioned = NavSnapshot(
            locales=snapshot.locales,
            tree=snapshot.tree,
            catalog=snapshot.catalog,
            registry=snapshot.registry,
            redirects=snapshot.redirects,
            report=snapshot.report,
            version=self._current.version + 1,
        )
        self._current = versioned
        logger.info(f"Navigation snapshot replaced (version {versioned.version})")
        return versioned
