"""Redirect API endpoint and catch-all redirect handler."""

from aiohttp import web

from docnav.app_keys import snapshot_store_key


def create_redirect_routes() -> list[web.RouteDef]:
    return [web.get("/api/redirect", get_redirect)]


async def get_redirect(request: web.Request) -> web.Response:
    path = request.query.get("path")
    if path is None:
        return web.json_response({"error": "Missing path parameter"}, status=400)

    snapshot = request.app[snapshot_store_key].current
    target = snapshot.redirects.resolve(path, snapshot.locales.codes)
    if target is None:
        return web.json_response({"error": "No redirect", "path": path}, status=404)
    return web.json_response({"path": path, "target": target, "location": _location(target)})


async def redirect_fallback(request: web.Request) -> web.Response:
    """Redirect unmatched paths according to the redirect table.

    Must be registered last to catch all non-API routes.
    """
    snapshot = request.app[snapshot_store_key].current
    target = snapshot.redirects.resolve(request.path, snapshot.locales.codes)
    if target is None:
        raise web.HTTPNotFound()
    raise web.HTTPMovedPermanently(_location(target))


def _location(target: str) -> str:
    """Turn a redirect target into a Location header value."""
    if target.startswith(("http://", "https://")):
        return target
    stripped = target.strip("/")
    return f"/{stripped}/" if stripped else "/"
