"""aiohttp server for Docnav.

Application factory and route registration for the navigation service.
"""

import logging

from aiohttp import web

from docnav.api.navigation import create_navigation_routes
from docnav.api.redirects import create_redirect_routes, redirect_fallback
from docnav.app_keys import config_key, snapshot_store_key
from docnav.config import Config
from docnav.core.errors import InvalidNavigationError
from docnav.core.snapshot import NavSnapshot, SnapshotStore
from docnav.live import LiveReloadManager
from docnav.live.reload import create_live_reload_routes
from docnav.loader import build_snapshot

logger = logging.getLogger(__name__)

live_reload_manager_key = web.AppKey("live_reload_manager", LiveReloadManager)


def create_app(config: Config, snapshot: NavSnapshot | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        snapshot: Prebuilt snapshot, assembled from config when omitted

    Returns:
        Configured aiohttp application

    Raises:
        InvalidNavigationError: If the navigation has fatal violations
    """
    if snapshot is None:
        snapshot = build_snapshot(config)
    if not snapshot.is_valid:
        raise InvalidNavigationError(snapshot.report.errors)

    app = web.Application()
    store = SnapshotStore(snapshot)

    app[config_key] = config
    app[snapshot_store_key] = store

    # API routes (must be registered first to take precedence over redirects)
    app.router.add_routes(create_navigation_routes())
    app.router.add_routes(create_redirect_routes())

    if config.live_reload.enabled and config.config_path is not None:
        manager = LiveReloadManager(config.config_path, store)
        app[live_reload_manager_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    # Redirect fallback - must be last to catch all non-API routes
    app.router.add_get("/{path:.*}", redirect_fallback)

    return app


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_manager_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_manager_key].stop()


def run_server(config: Config, snapshot: NavSnapshot | None = None) -> None:
    """Run the server.

    Args:
        config: Application configuration
        snapshot: Prebuilt snapshot, assembled from config when omitted
    """
    app = create_app(config, snapshot)
    logger.info(f"Serving navigation on {config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port)
