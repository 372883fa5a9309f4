"""aiohttp server for maraikka-docs.

Application factory and route registration.
"""

import logging

from aiohttp import web
from jinja2 import Environment, FileSystemLoader, select_autoescape

from maraikka_docs.api.config import create_config_routes
from maraikka_docs.api.navigation import create_navigation_routes
from maraikka_docs.api.pages import create_pages_routes
from maraikka_docs.api.well_known import create_well_known_routes
from maraikka_docs.app_keys import (
    live_reload_enabled_key,
    live_reload_manager_key,
    resolver_key,
    site_config_key,
    site_loader_key,
    static_dir_key,
    templates_key,
)
from maraikka_docs.assets import get_static_dir, get_templates_dir
from maraikka_docs.config import Config, SiteConfig
from maraikka_docs.core.cache import FileCache
from maraikka_docs.core.resolver import ContentLoader, ContentResolver
from maraikka_docs.core.site import SiteLoader
from maraikka_docs.core.store import MarkdownContentStore
from maraikka_docs.views import create_view_routes

logger = logging.getLogger(__name__)


def create_resolver(config: Config) -> ContentResolver:
    """Create the content resolver for a configuration.

    Args:
        config: Application configuration

    Returns:
        ContentResolver backed by the markdown store in docs.source_dir
    """
    cache = FileCache(config.docs.cache_dir) if config.docs.cache_enabled else None
    store = MarkdownContentStore(config.docs.source_dir, cache)
    return ContentResolver(ContentLoader(store), config.site.defaults)


def create_templates(site: SiteConfig) -> Environment:
    """Create the Jinja2 environment for HTML pages."""
    env = Environment(
        loader=FileSystemLoader(get_templates_dir()),
        autoescape=select_autoescape(enabled_extensions=("html",)),
    )

    def page_href(path: str) -> str:
        if site.trailing_slash and not path.endswith("/"):
            return f"{path}/"
        return path

    env.filters["page_href"] = page_href
    return env


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    site_loader = SiteLoader(config.docs.source_dir)

    app[resolver_key] = create_resolver(config)
    app[site_loader_key] = site_loader
    app[site_config_key] = config.site
    app[templates_key] = create_templates(config.site)
    app[live_reload_enabled_key] = config.live_reload.enabled

    # API and well-known routes (must be registered first to take precedence over pages)
    app.router.add_routes(create_well_known_routes())
    app.router.add_routes(create_pages_routes())
    app.router.add_routes(create_navigation_routes())
    app.router.add_routes(create_config_routes())

    # Live reload WebSocket endpoint
    if config.live_reload.enabled:
        from maraikka_docs.live import LiveReloadManager, create_live_reload_routes

        manager = LiveReloadManager(
            config.docs.source_dir,
            watch_patterns=config.live_reload.watch_patterns,
            site_loader=site_loader,
        )
        app[live_reload_manager_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    static_dir = get_static_dir()
    app[static_dir_key] = static_dir
    app.router.add_static("/static", static_dir)

    # HTML pages - must be last to catch all remaining routes
    app.router.add_routes(create_view_routes())

    return app


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_manager_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_manager_key].stop()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info("Serving %s on %s:%d", config.docs.source_dir, config.server.host, config.server.port)
    web.run_app(
        app,
        host=config.server.host,
        port=config.server.port,
        print=None,
    )
