"""Configuration hot reload."""

from .reload import LiveReloadManager

__all__ = ['LiveReloadManager']
