"""Tests for redirect endpoints."""

from pathlib import Path

import pytest
from aiohttp.test_utils import TestClient
from docnav.config import Config
from docnav.server import create_app


@pytest.fixture
def client(config_file: Path, aiohttp_client) -> TestClient:
    """Create test client with configured app."""
    app = create_app(Config.load(config_file))
    return aiohttp_client(app)


class TestGetRedirect:
    """Tests for GET /api/redirect."""

    @pytest.mark.asyncio
    async def test__matching_path__returns_target(self, client) -> None:
        test_client = await client
        response = await test_client.get("/api/redirect", params={"path": "/webhook"})

        assert response.status == 200
        data = await response.json()
        assert data == {
            "path": "/webhook",
            "target": "ru/modes/webhook",
            "location": "/ru/modes/webhook/",
        }

    @pytest.mark.asyncio
    async def test__missing_param__returns_400(self, client) -> None:
        test_client = await client
        response = await test_client.get("/api/redirect")

        assert response.status == 400


class TestRedirectFallback:
    """Tests for the catch-all redirect handler."""

    @pytest.mark.asyncio
    async def test__root__redirects_to_default_locale(self, client) -> None:
        test_client = await client
        response = await test_client.get("/", allow_redirects=False)

        assert response.status == 301
        assert response.headers["Location"] == "/en/"

    @pytest.mark.asyncio
    async def test__longest_prefix__wins(self, client) -> None:
        test_client = await client
        response = await test_client.get("/webhook/setup", allow_redirects=False)

        assert response.status == 301
        assert response.headers["Location"] == "/ru/modes/webhook/"


class TestNoRedirects:
    """Tests for a site without redirect rules."""

    @pytest.mark.asyncio
    async def test__unmatched_path__returns_404(self, tmp_path: Path, aiohttp_client) -> None:
        config_file = tmp_path / "docnav.toml"
        config_file.write_text('[[sidebar]]\nlabel = "Page"\nslug = "page"\n')
        test_client = await aiohttp_client(create_app(Config.load(config_file)))

        response = await test_client.get("/anything", allow_redirects=False)
        api_response = await test_client.get("/api/redirect", params={"path": "/anything"})

        assert response.status == 404
        assert api_response.status == 404


class TestRedirectFallbackLocalizedPaths:
    """Tests for paths already under a locale prefix."""

    @pytest.mark.asyncio
    async def test__redirect_destination__returns_404(self, client) -> None:
        """The root redirect's own destination is not redirected again."""
        test_client = await client
        response = await test_client.get("/en/", allow_redirects=False)

        assert response.status == 404

    @pytest.mark.asyncio
    async def test__localized_page__returns_404(self, client) -> None:
        test_client = await client
        response = await test_client.get("/ru/basics/routing/", allow_redirects=False)
        api_response = await test_client.get("/api/redirect", params={"path": "/ru/basics/routing/"})

        assert response.status == 404
        assert api_response.status == 404
