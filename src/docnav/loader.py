"""Assembly of navigation snapshots from configuration."""

import logging
from pathlib import Path

from docnav.config import Config, SidebarEntry
from docnav.core.locales import Locale, LocaleCatalog, LocaleSet
from docnav.core.redirects import RedirectTable
from docnav.core.snapshot import NavSnapshot
from docnav.core.tree import NavTreeBuilder
from docnav.core.types import LocaleCode, NodeId

logger = logging.getLogger(__name__)


def build_locales(config: Config) -> LocaleSet:
    """Create the locale set, marking the configured default."""
    return LocaleSet(
        Locale(
            code=LocaleCode(locale.code),
            label=locale.label,
            lang=locale.lang,
            default=locale.code == config.site.default_locale,
        )
        for locale in config.locales
    )


def build_snapshot(config: Config, *, version: int = 0) -> NavSnapshot:
    """Assemble and validate navigation from configuration.

    Args:
        config: Loaded configuration
        version: Snapshot version number

    Returns:
        Validated snapshot (check snapshot.is_valid before serving)

    Raises:
        DuplicateSlugError: If two sidebar items share a slug
        DepthExceededError: If the sidebar nests deeper than site.max_depth
        UnknownLocaleError: If a translation uses an unconfigured locale
        ValueError: If the locale configuration is invalid
    """
    locales = build_locales(config)
    builder = NavTreeBuilder(max_depth=config.site.max_depth)
    translations: list[tuple[NodeId, dict[str, str]]] = []
    _add_entries(builder, None, config.sidebar, translations)
    tree = builder.build()

    catalog = LocaleCatalog.from_tree(tree, locales)
    for node_id, labels in translations:
        for locale, label in labels.items():
            catalog.set_override(node_id, locale, label)

    redirects = RedirectTable()
    for redirect in config.redirects:
        redirects.add_rule(redirect.source, redirect.target)

    snapshot = NavSnapshot.create(locales, tree, catalog, builder.registry, redirects, version=version)
    logger.info(
        f"Loaded navigation: {len(tree)} nodes, {len(locales)} locales, "
        f"{len(redirects)} redirects",
    )
    return snapshot


def load_snapshot(config_path: Path | None = None, *, version: int = 0) -> NavSnapshot:
    """Load configuration and assemble its snapshot."""
    return build_snapshot(Config.load(config_path), version=version)


def _add_entries(
    builder: NavTreeBuilder,
    parent: NodeId | None,
    entries: list[SidebarEntry],
    translations: list[tuple[NodeId, dict[str, str]]],
) -> None:
    """Recursively add sidebar entries under a parent."""
    for entry in entries:
        if entry.slug is None:
            node_id = builder.add_group(parent, entry.label)
            _add_entries(builder, node_id, entry.items, translations)
        else:
            node_id = builder.add_item(parent, entry.label, entry.slug)
        if entry.translations:
            translations.append((node_id, entry.translations))
