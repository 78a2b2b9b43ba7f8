"""Configuration hot reload for the navigation server.

Watches the configuration file, rebuilds the navigation snapshot on change
and notifies connected WebSocket clients once the new snapshot is live.
"""

import asyncio
import json
import logging
import weakref
from pathlib import Path

from aiohttp import WSMsgType, web
from watchfiles import Change, awatch

from docnav.core.snapshot import SnapshotStore
from docnav.loader import load_snapshot

logger = logging.getLogger(__name__)


class LiveReloadManager:
    """Manages config file watching and WebSocket notifications.

    A reload that fails to load or validate leaves the current snapshot
    in place.
    """

    def __init__(self, config_path: Path, store: SnapshotStore) -> None:
        """Initialize the live reload manager.

        Args:
            config_path: Configuration file to watch
            store: Snapshot store to update on change
        """
        self._config_path = config_path.resolve()
        self._store = store
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle a live reload WebSocket connection."""
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)
        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    def reload(self) -> bool:
        """Rebuild the snapshot from the configuration file.

        Returns:
            True if the new snapshot was swapped in
        """
        try:
            snapshot = load_snapshot(self._config_path)
        except (OSError, ValueError) as e:
            logger.warning(f"Navigation reload failed: {e}")
            return False

        if not snapshot.is_valid:
            for violation in snapshot.report.errors:
                logger.warning(f"Navigation reload rejected: {violation.message}")
            return False

        self._store.replace(snapshot)
        return True

    async def _watch_files(self) -> None:
        """Watch the config directory and reload on config file changes."""
        async for changes in awatch(self._config_path.parent):
            if not any(self._is_config_change(change, path) for change, path in changes):
                continue
            if await asyncio.to_thread(self.reload):
                await self._broadcast_reload(self._store.current.version)

    def _is_config_change(self, change: Change, path_str: str) -> bool:
        if change == Change.deleted:
            return False
        return Path(path_str).resolve() == self._config_path

    async def _broadcast_reload(self, version: int) -> None:
        """Broadcast reload event to all connected clients.

        Args:
            version: Version of the snapshot now being served
        """
        if not self._connections:
            return

        message = json.dumps({"type": "reload", "version": version})

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, will be cleaned up by WeakSet
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
