"""Navigation API endpoints.

Provides locale list, resolved navigation trees and the validation report.
"""

from aiohttp import web

from docnav.app_keys import config_key, snapshot_store_key
from docnav.core.errors import UnknownLocaleError


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/locales", get_locales),
        web.get("/api/navigation", get_default_navigation),
        web.get("/api/navigation/{locale}", get_navigation),
        web.get("/api/validation", get_validation),
    ]


async def get_locales(request: web.Request) -> web.Response:
    snapshot = request.app[snapshot_store_key].current
    return web.json_response(
        {
            "title": request.app[config_key].site.title,
            "default": snapshot.locales.default.code,
            "locales": [locale.to_dict() for locale in snapshot.locales],
            "version": snapshot.version,
        },
    )


async def get_default_navigation(request: web.Request) -> web.Response:
    snapshot = request.app[snapshot_store_key].current
    resolved = snapshot.resolve(snapshot.locales.default.code)
    return web.json_response(resolved.to_dict())


async def get_navigation(request: web.Request) -> web.Response:
    locale = request.match_info["locale"]
    snapshot = request.app[snapshot_store_key].current
    try:
        resolved = snapshot.resolve(locale)
    except UnknownLocaleError:
        return web.json_response(
            {"error": "Locale not found", "locale": locale},
            status=404,
        )
    return web.json_response(resolved.to_dict())


async def get_validation(request: web.Request) -> web.Response:
    snapshot = request.app[snapshot_store_key].current
    return web.json_response(snapshot.report.to_dict())
