"""Shared test fixtures."""

from pathlib import Path

import pytest
from docnav.core.locales import Locale, LocaleSet
from docnav.core.types import LocaleCode

SAMPLE_CONFIG = """
[site]
title = "Bot Docs"
default_locale = "en"

[locales.en]
label = "English"

[locales.ru]
label = "Русский"
lang = "ru"

[[sidebar]]
label = "Basics"
translations = { ru = "Основы" }
items = [
    { label = "Routing", slug = "basics/routing", translations = { ru = "Роутинг" } },
    { label = "Callback Query", slug = "basics/callback-query" },
]

[[sidebar]]
label = "Operation Modes"
translations = { ru = "Режимы работы" }
items = [
    { label = "Webhook", slug = "modes/webhook" },
    { label = "Polling", slug = "modes/polling" },
]

[[redirects]]
source = "/"
target = "en/"

[[redirects]]
source = "/webhook"
target = "ru/modes/webhook"
"""


@pytest.fixture
def locales() -> LocaleSet:
    """English (default) and Russian."""
    return LocaleSet(
        [
            Locale(code=LocaleCode("en"), label="English", default=True),
            Locale(code=LocaleCode("ru"), label="Русский", lang="ru"),
        ],
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a valid two-locale configuration and return its path."""
    path = tmp_path / "docnav.toml"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path
