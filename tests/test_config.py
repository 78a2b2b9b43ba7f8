"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest
from docnav.config import Config, LiveReloadConfig, ServerConfig, SiteConfig


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, config_file: Path) -> None:
        """Load every section from an explicit path."""
        config = Config.load(config_file)

        assert config.site.title == "Bot Docs"
        assert config.site.default_locale == "en"
        assert config.site.max_depth == 3
        assert [locale.code for locale in config.locales] == ["en", "ru"]
        assert config.locales[1].label == "Русский"
        assert config.locales[1].lang == "ru"
        assert config.locales[0].lang is None
        assert len(config.sidebar) == 2
        basics = config.sidebar[0]
        assert basics.is_group
        assert basics.translations == {"ru": "Основы"}
        assert basics.items[0].slug == "basics/routing"
        assert basics.items[0].translations == {"ru": "Роутинг"}
        assert basics.items[1].translations == {}
        assert [(r.source, r.target) for r in config.redirects] == [
            ("/", "en/"),
            ("/webhook", "ru/modes/webhook"),
        ]
        assert config.config_path == config_file

    def test__minimal_config__uses_defaults(self, tmp_path: Path) -> None:
        """Empty file yields defaults."""
        config_file = tmp_path / "docnav.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8080
        assert config.live_reload.enabled is False
        assert config.site.default_locale == "en"
        assert [locale.code for locale in config.locales] == ["en"]
        assert config.sidebar == []
        assert config.redirects == []

    def test__missing_explicit_path__raises_error(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for missing explicit config file."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "nonexistent.toml")

    def test__no_path_no_discovery__returns_defaults(self) -> None:
        """Return defaults when no config file found."""
        with patch.object(Config, "_discover_config", return_value=None):
            config = Config.load()

        assert config.server.port == 8080
        assert config.sidebar == []
        assert config.config_path is None


class TestConfigDiscovery:
    """Tests for config file discovery."""

    def test__config_in_current_dir__found(self, tmp_path: Path) -> None:
        config_file = tmp_path / "docnav.toml"
        config_file.write_text("[server]\nport = 9000")

        with patch("pathlib.Path.cwd", return_value=tmp_path):
            discovered = Config._discover_config()

        assert discovered == config_file

    def test__config_in_parent_dir__found(self, tmp_path: Path) -> None:
        config_file = tmp_path / "docnav.toml"
        config_file.write_text("[server]\nport = 9000")
        subdir = tmp_path / "sub" / "dir"
        subdir.mkdir(parents=True)

        with patch("pathlib.Path.cwd", return_value=subdir):
            discovered = Config._discover_config()

        assert discovered == config_file


class TestConfigValidation:
    """Tests for malformed configuration."""

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('[server]\nport = "x"', "server.port must be an integer"),
            ("[site]\nmax_depth = 0", "site.max_depth must be a positive integer"),
            ('[site]\ndefault_locale = "ru"', "site.default_locale 'ru' is not defined"),
            (
                '[site]\ndefault_locale = "de"\n[locales.en]\nlabel = "English"',
                "site.default_locale 'de' is not defined",
            ),
            ("[locales]\nen = 1", "locales.en must be a dictionary"),
            ('[[sidebar]]\nlabel = "Basics"', r"sidebar\[0\] must have either slug or items"),
            (
                '[[sidebar]]\nlabel = "Basics"\nslug = "basics"\nitems = []',
                r"sidebar\[0\] cannot have both slug and items",
            ),
            (
                '[[sidebar]]\nlabel = "Basics"\nitems = [{ label = "Routing", slug = 1 }]',
                r"sidebar\[0\]\.items\[0\]\.slug must be a string",
            ),
            (
                '[[sidebar]]\nlabel = "Basics"\ntranslations = { ru = 1 }\nitems = []',
                r"sidebar\[0\]\.translations\.ru must be a string",
            ),
            ('[[redirects]]\nsource = "/"', r"redirects\[0\]\.target must be a string"),
            ('redirects = "x"', "redirects must be a list"),
        ],
    )
    def test__invalid_section__raises(self, tmp_path: Path, content: str, message: str) -> None:
        """Report the offending key."""
        config_file = tmp_path / "docnav.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestConfigWithOverrides:
    """Tests for Config.with_overrides()."""

    def test__overrides_applied_without_mutation(self) -> None:
        config = Config(server=ServerConfig(), live_reload=LiveReloadConfig(), site=SiteConfig())

        updated = config.with_overrides(port=9000, live_reload_enabled=True)

        assert updated.server.port == 9000
        assert updated.server.host == "127.0.0.1"
        assert updated.live_reload.enabled is True
        assert config.server.port == 8080
        assert config.live_reload.enabled is False

    def test__no_overrides__same_values(self) -> None:
        config = Config(server=ServerConfig(), live_reload=LiveReloadConfig(), site=SiteConfig())

        assert config.with_overrides() == config
