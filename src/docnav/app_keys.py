"""Application keys for type-safe app configuration access."""

from aiohttp import web

from docnav.config import Config
from docnav.core.snapshot import SnapshotStore

config_key = web.AppKey("config", Config)
snapshot_store_key = web.AppKey("snapshot_store", SnapshotStore)
