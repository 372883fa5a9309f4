"""Server-rendered HTML pages.

Catch-all route that resolves a documentation page and renders it inside the
site layout, or renders the branded 404 page when resolution fails.
"""

import logging
from pathlib import Path

from aiohttp import web

from maraikka_docs.app_keys import (
    resolver_key,
    site_config_key,
    site_loader_key,
    templates_key,
)
from maraikka_docs.config import SiteConfig
from maraikka_docs.core.head import build_head_tags
from maraikka_docs.core.navigation import build_navigation
from maraikka_docs.core.paths import split_path, to_url_path
from maraikka_docs.core.resolver import Found
from maraikka_docs.core.store import Document

logger = logging.getLogger(__name__)

POPULAR_PAGES = [
    ("Getting Started", "/getting-started", "Installation, setup, and basic usage guide"),
    ("User Guide", "/user-guide", "Complete usage documentation and tutorials"),
    ("Features", "/features", "Comprehensive platform features and capabilities"),
]


def create_view_routes() -> list[web.RouteDef]:
    # Must be registered last to catch all remaining routes
    return [web.get("/{path:.*}", get_html_page)]


async def get_html_page(request: web.Request) -> web.Response:
    path = request.match_info["path"]
    site_config = request.app[site_config_key]

    if _needs_trailing_slash(path, site_config):
        location = "/" + path.lstrip("/") + "/"
        if request.query_string:
            location = f"{location}?{request.query_string}"
        raise web.HTTPPermanentRedirect(location)

    resolution = await request.app[resolver_key].resolve(split_path(path))
    site_loader = request.app[site_loader_key]
    site = site_loader.load()
    url_path = to_url_path(resolution.key)

    context = {
        "site": site_config,
        "head": build_head_tags(resolution.metadata, site_config.defaults),
        "navigation": build_navigation(site),
        "current_path": url_path,
    }
    templates = request.app[templates_key]

    outcome = resolution.outcome
    if not isinstance(outcome, Found):
        logger.info("Page not found: /%s", path)
        html = templates.get_template("not_found.html").render(
            **context,
            popular_pages=POPULAR_PAGES,
        )
        return web.Response(text=html, content_type="text/html", status=404)

    document = outcome.document
    html = templates.get_template("page.html").render(
        **context,
        document=document,
        title=resolution.metadata.title,
        toc=outcome.toc,
        breadcrumbs=site.get_breadcrumbs(url_path),
        edit_url=_edit_url(document, site_loader.source_dir, site_config),
    )
    return web.Response(text=html, content_type="text/html")


def _needs_trailing_slash(path: str, site_config: SiteConfig) -> bool:
    if not site_config.trailing_slash or not path or path.endswith("/"):
        return False
    # Asset-like paths (favicon.ico, robots.txt) are left alone
    return "." not in path.rsplit("/", 1)[-1]


def _edit_url(document: Document, source_dir: Path, site_config: SiteConfig) -> str | None:
    if site_config.repository_base is None:
        return None
    try:
        relative = document.source_path.relative_to(source_dir)
    except ValueError:
        return None
    parts = [site_config.repository_base.rstrip("/"), site_config.docs_path, relative.as_posix()]
    return "/".join(part for part in parts if part)
