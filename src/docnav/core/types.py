"""Core type definitions."""

from typing import NewType

# Canonical content key (e.g., "basics/routing"), unique across the site
Slug = NewType("Slug", str)

# Locale code as configured (e.g., "en", "pt-BR")
LocaleCode = NewType("LocaleCode", str)

# Index of a node in the NavTree arena
NodeId = NewType("NodeId", int)
