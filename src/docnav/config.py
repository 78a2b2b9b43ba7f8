"""Configuration management for Docnav.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from docnav.core.tree import DEFAULT_MAX_DEPTH

CONFIG_FILENAME = "docnav.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = False


@dataclass
class SiteConfig:
    """Site-wide navigation settings."""

    title: str = ""
    default_locale: str = "en"
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass
class LocaleConfig:
    """Supported locale."""

    code: str
    label: str
    lang: str | None = None


@dataclass
class SidebarEntry:
    """Sidebar group (has items) or item (has slug)."""

    label: str
    slug: str | None = None
    translations: dict[str, str] = field(default_factory=dict)
    items: list["SidebarEntry"] = field(default_factory=list)

    @property
    def is_group(self) -> bool:
        return self.slug is None


@dataclass
class RedirectConfig:
    """Redirect from an inbound path to a target."""

    source: str
    target: str


def _default_locales() -> list[LocaleConfig]:
    return [LocaleConfig(code="en", label="English")]


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    live_reload: LiveReloadConfig
    site: SiteConfig
    locales: list[LocaleConfig] = field(default_factory=_default_locales)
    sidebar: list[SidebarEntry] = field(default_factory=list)
    redirects: list[RedirectConfig] = field(default_factory=list)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for docnav.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            live_reload=LiveReloadConfig(),
            site=SiteConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        site = cls._parse_site(data.get("site"))
        locales = cls._parse_locales(data.get("locales"), site.default_locale)

        return cls(
            server=cls._parse_server(data.get("server")),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            site=site,
            locales=locales,
            sidebar=cls._parse_sidebar(data.get("sidebar")),
            redirects=cls._parse_redirects(data.get("redirects")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section."""
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section."""
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", False)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        return LiveReloadConfig(enabled=enabled)

    @classmethod
    def _parse_site(cls, data: object) -> SiteConfig:
        """Parse site configuration section."""
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        title = data.get("title", "")
        if not isinstance(title, str):
            raise ValueError("site.title must be a string")

        default_locale = data.get("default_locale", "en")
        if not isinstance(default_locale, str):
            raise ValueError("site.default_locale must be a string")

        max_depth = data.get("max_depth", DEFAULT_MAX_DEPTH)
        if not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 1:
            raise ValueError("site.max_depth must be a positive integer")

        return SiteConfig(title=title, default_locale=default_locale, max_depth=max_depth)

    @classmethod
    def _parse_locales(cls, data: object, default_locale: str) -> list[LocaleConfig]:
        """Parse locales table keyed by locale code.

        Args:
            data: Raw locales section data
            default_locale: Code of the default locale (must be defined)

        Returns:
            Locales in definition order
        """
        if data is None:
            if default_locale != "en":
                raise ValueError(f"site.default_locale '{default_locale}' is not defined in locales")
            return _default_locales()

        if not isinstance(data, dict):
            raise ValueError("locales section must be a dictionary")

        locales: list[LocaleConfig] = []
        for code, entry in data.items():
            if not isinstance(entry, dict):
                raise ValueError(f"locales.{code} must be a dictionary")

            label = entry.get("label", code)
            if not isinstance(label, str):
                raise ValueError(f"locales.{code}.label must be a string")

            lang = entry.get("lang")
            if lang is not None and not isinstance(lang, str):
                raise ValueError(f"locales.{code}.lang must be a string")

            locales.append(LocaleConfig(code=code, label=label, lang=lang))

        if default_locale not in {locale.code for locale in locales}:
            raise ValueError(f"site.default_locale '{default_locale}' is not defined in locales")

        return locales

    @classmethod
    def _parse_sidebar(cls, data: object, prefix: str = "sidebar") -> list[SidebarEntry]:
        """Parse a sidebar entry list, recursing into group items.

        Args:
            data: Raw list of sidebar entries
            prefix: Key path used in error messages

        Returns:
            Sidebar entries in configuration order
        """
        if data is None:
            return []

        if not isinstance(data, list):
            raise ValueError(f"{prefix} must be a list")

        entries: list[SidebarEntry] = []
        for i, raw in enumerate(data):
            key = f"{prefix}[{i}]"
            if not isinstance(raw, dict):
                raise ValueError(f"{key} must be a dictionary")

            label = raw.get("label", "")
            if not isinstance(label, str):
                raise ValueError(f"{key}.label must be a string")

            slug = raw.get("slug")
            if slug is not None and not isinstance(slug, str):
                raise ValueError(f"{key}.slug must be a string")

            items_raw = raw.get("items")
            if slug is None and items_raw is None:
                raise ValueError(f"{key} must have either slug or items")
            if slug is not None and items_raw is not None:
                raise ValueError(f"{key} cannot have both slug and items")

            translations_raw = raw.get("translations", {})
            if not isinstance(translations_raw, dict):
                raise ValueError(f"{key}.translations must be a dictionary")
            translations: dict[str, str] = {}
            for locale, value in translations_raw.items():
                if not isinstance(value, str):
                    raise ValueError(f"{key}.translations.{locale} must be a string")
                translations[locale] = value

            entries.append(
                SidebarEntry(
                    label=label,
                    slug=slug,
                    translations=translations,
                    items=cls._parse_sidebar(items_raw, f"{key}.items"),
                ),
            )

        return entries

    @classmethod
    def _parse_redirects(cls, data: object) -> list[RedirectConfig]:
        """Parse redirects list."""
        if data is None:
            return []

        if not isinstance(data, list):
            raise ValueError("redirects must be a list")

        redirects: list[RedirectConfig] = []
        for i, raw in enumerate(data):
            if not isinstance(raw, dict):
                raise ValueError(f"redirects[{i}] must be a dictionary")

            source = raw.get("source")
            if not isinstance(source, str):
                raise ValueError(f"redirects[{i}].source must be a string")

            target = raw.get("target")
            if not isinstance(target, str):
                raise ValueError(f"redirects[{i}].target must be a string")

            redirects.append(RedirectConfig(source=source, target=target))

        return redirects

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        live_reload_enabled: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            live_reload_enabled: Override live_reload.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(self, server=server, live_reload=live_reload)
