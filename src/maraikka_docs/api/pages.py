"""Pages API endpoint.

Resolves a page and returns JSON with its document, ToC and complete SEO metadata.
"""

from email.utils import format_datetime
from hashlib import md5

from aiohttp import web

from maraikka_docs.app_keys import resolver_key, site_loader_key
from maraikka_docs.core.paths import split_path, to_url_path
from maraikka_docs.core.resolver import Found


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/pages", get_page),
        web.get("/api/pages/{path:.*}", get_page),
    ]


async def get_page(request: web.Request) -> web.Response:
    path = request.match_info.get("path", "")
    resolver = request.app[resolver_key]

    resolution = await resolver.resolve(split_path(path))
    outcome = resolution.outcome

    if not isinstance(outcome, Found):
        return web.json_response(
            {
                "error": "Page not found",
                "path": path,
                "metadata": resolution.metadata.to_dict(),
            },
            status=404,
        )

    document = outcome.document
    etag = _compute_etag(document.html, document.last_modified.isoformat())

    if_none_match = request.headers.get("If-None-Match")
    if if_none_match == etag:
        return web.Response(status=304)

    url_path = to_url_path(resolution.key)
    site = request.app[site_loader_key].load()
    breadcrumbs = [b.to_dict() for b in site.get_breadcrumbs(url_path)]

    response_data = {
        "meta": {
            "title": resolution.metadata.title,
            "path": url_path,
            "source_file": str(document.source_path),
            "last_modified": document.last_modified.isoformat(),
        },
        "metadata": resolution.metadata.to_dict(),
        "breadcrumbs": breadcrumbs,
        "toc": [entry.to_dict() for entry in outcome.toc],
        "content": document.html,
    }

    return web.json_response(
        response_data,
        headers={
            "ETag": etag,
            "Last-Modified": format_datetime(document.last_modified, usegmt=True),
            "Cache-Control": "private, max-age=60",
        },
    )


def _compute_etag(*parts: str) -> str:
    # First 16 hex chars (64 bits) are enough for cache validation
    digest = md5(usedforsecurity=False)
    for part in parts:
        digest.update(part.encode("utf-8"))
    return f'"{digest.hexdigest()[:16]}"'
