"""Tests for configuration hot reload."""

import threading
from pathlib import Path

import pytest
from docnav.core.snapshot import SnapshotStore
from docnav.live import LiveReloadManager
from docnav.live.reload import create_live_reload_routes
from docnav.loader import load_snapshot
from watchfiles import Change


class TestLiveReloadManagerReload:
    """Tests for LiveReloadManager.reload()."""

    def test__valid_change__swaps_snapshot(self, config_file: Path) -> None:
        """Reload picks up edited labels and bumps the version."""
        store = SnapshotStore(load_snapshot(config_file))
        manager = LiveReloadManager(config_file, store)
        config_file.write_text(
            config_file.read_text(encoding="utf-8").replace('label = "Basics"', 'label = "Fundamentals"'),
            encoding="utf-8",
        )

        assert manager.reload() is True

        assert store.current.version == 1
        assert store.current.resolve("en").items[0].label == "Fundamentals"

    def test__invalid_change__keeps_snapshot(self, config_file: Path) -> None:
        """A change introducing fatal violations is rejected."""
        store = SnapshotStore(load_snapshot(config_file))
        current = store.current
        manager = LiveReloadManager(config_file, store)
        config_file.write_text(
            config_file.read_text(encoding="utf-8").replace('target = "en/"', 'target = "gone"'),
            encoding="utf-8",
        )

        assert manager.reload() is False

        assert store.current is current

    def test__broken_file__keeps_snapshot(self, config_file: Path) -> None:
        """A change that fails to load is rejected."""
        store = SnapshotStore(load_snapshot(config_file))
        current = store.current
        manager = LiveReloadManager(config_file, store)
        config_file.write_text("[[sidebar]\nbroken", encoding="utf-8")

        assert manager.reload() is False

        assert store.current is current


class TestLiveReloadManagerWatch:
    """Tests for the file watching loop."""

    @pytest.mark.asyncio
    async def test__config_change__reloads_in_worker_thread(self, config_file: Path, monkeypatch) -> None:
        """Reload runs outside the event loop thread and bumps the version."""
        store = SnapshotStore(load_snapshot(config_file))
        manager = LiveReloadManager(config_file, store)
        reload_threads: list[int] = []
        original_reload = manager.reload

        def tracking_reload() -> bool:
            reload_threads.append(threading.get_ident())
            return original_reload()

        async def fake_awatch(*paths):
            yield {(Change.modified, str(config_file))}

        monkeypatch.setattr(manager, "reload", tracking_reload)
        monkeypatch.setattr("docnav.live.reload.awatch", fake_awatch)

        await manager._watch_files()

        assert len(reload_threads) == 1
        assert reload_threads[0] != threading.get_ident()
        assert store.current.version == 1


def test_create_live_reload_routes(config_file: Path) -> None:
    manager = LiveReloadManager(config_file, SnapshotStore(load_snapshot(config_file)))

    routes = create_live_reload_routes(manager)

    assert len(routes) == 1
