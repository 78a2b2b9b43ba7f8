"""Tests for navigation snapshots."""

import pytest
from docnav.core.errors import InvalidNavigationError
from docnav.core.locales import LocaleCatalog, LocaleSet
from docnav.core.redirects import RedirectTable
from docnav.core.snapshot import NavSnapshot, SnapshotStore
from docnav.core.tree import NavTreeBuilder
from docnav.core.validator import ViolationKind


def _snapshot(locales: LocaleSet, *, redirect_target: str = "en/", label: str = "Routing") -> NavSnapshot:
    builder = NavTreeBuilder()
    group = builder.add_group(None, "Basics")
    builder.add_item(group, label, "basics/routing")
    tree = builder.build()
    catalog = LocaleCatalog.from_tree(tree, locales)
    redirects = RedirectTable()
    redirects.add_rule("/", redirect_target)
    return NavSnapshot.create(locales, tree, catalog, builder.registry, redirects)


class TestNavSnapshot:
    """Tests for NavSnapshot."""

    def test__create__valid(self, locales: LocaleSet) -> None:
        """Locale-prefix redirects validate against configured locales."""
        snapshot = _snapshot(locales)

        assert snapshot.is_valid
        assert len(snapshot.report.coverage) == 1

    def test__create__dangling_redirect_in_report(self, locales: LocaleSet) -> None:
        """Redirect violations are part of the snapshot report."""
        snapshot = _snapshot(locales, redirect_target="basics/missing")

        assert not snapshot.is_valid
        assert [v.kind for v in snapshot.report.errors] == [ViolationKind.DANGLING_REDIRECT]

    def test__resolve__memoized(self, locales: LocaleSet) -> None:
        """Repeated resolution returns the same object."""
        snapshot = _snapshot(locales)

        assert snapshot.resolve("ru") is snapshot.resolve("ru")

    def test__resolve__invalid_snapshot__raises(self, locales: LocaleSet) -> None:
        snapshot = _snapshot(locales, redirect_target="basics/missing")

        with pytest.raises(InvalidNavigationError):
            snapshot.resolve("en")


class TestSnapshotStore:
    """Tests for SnapshotStore."""

    def test__replace__bumps_version(self, locales: LocaleSet) -> None:
        """Replacement swaps the whole snapshot and increments the version."""
        store = SnapshotStore(_snapshot(locales))
        old = store.current

        new = store.replace(_snapshot(locales, label="Routing Guide"))

        assert store.current is new
        assert new.version == old.version + 1
        assert store.current.resolve("en").items[0].children[0].label == "Routing Guide"
        assert old.resolve("en").items[0].children[0].label == "Routing"

    def test__replace__invalid__keeps_current(self, locales: LocaleSet) -> None:
        """Snapshots with fatal violations are refused."""
        store = SnapshotStore(_snapshot(locales))
        current = store.current

        with pytest.raises(ValueError, match="Refusing to replace"):
            store.replace(_snapshot(locales, redirect_target="basics/missing"))

        assert store.current is current
