"""Application keys for type-safe app configuration access."""

from pathlib import Path

from aiohttp import web
from jinja2 import Environment

from maraikka_docs.config import SiteConfig
from maraikka_docs.core.resolver import ContentResolver
from maraikka_docs.core.site import SiteLoader
from maraikka_docs.live.reload import LiveReloadManager

resolver_key = web.AppKey("resolver", ContentResolver)
site_loader_key = web.AppKey("site_loader", SiteLoader)
site_config_key = web.AppKey("site_config", SiteConfig)
templates_key = web.AppKey("templates", Environment)
static_dir_key = web.AppKey("static_dir", Path)
live_reload_enabled_key = web.AppKey("live_reload_enabled", bool)
live_reload_manager_key = web.AppKey("live_reload_manager", LiveReloadManager)
