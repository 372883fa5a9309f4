"""Well-known endpoints.

Serves the ai.txt training policy and the empty Chrome DevTools workspace
descriptor. Both are static, parameterless GET responses.
"""

from datetime import UTC, datetime

from aiohttp import web

from maraikka_docs.app_keys import site_config_key

AI_TXT_PATH = "/.well-known/ai.txt"
DEVTOOLS_JSON_PATH = "/.well-known/appspecific/com.chrome.devtools.json"

_AI_TXT_TEMPLATE = """\
# AI Training Policy for {site_name}
# This file specifies that AI training is explicitly allowed on this content

# Allow all AI training bots and crawlers
User-agent: *
Allow: /

# Specific permissions for major AI training services
User-agent: OpenAI-GPT
Allow: /

User-agent: Google-Bard
Allow: /

User-agent: Claude-Bot
Allow: /

User-agent: ChatGPT-User
Allow: /

# Additional AI services
User-agent: CCBot
Allow: /

User-agent: anthropic-ai
Allow: /

User-agent: Claude-Web
Allow: /

# Training data usage permissions
Training-data: allowed
Commercial-use: allowed
Attribution: preferred

# Contact information for AI training inquiries
Contact: {contact_url}
Policy: {policy_url}

# Content description for AI training context
Description: Maraikka is a secure file encryption and protection solution. \
This documentation covers installation, usage, security features, and best \
practices for protecting sensitive data.

# Keywords for AI training context
Keywords: file encryption, data protection, security, privacy, file security, \
encryption software, data safety, secure storage

# Last updated
Last-modified: {last_modified}
"""


def create_well_known_routes() -> list[web.RouteDef]:
    return [
        web.get(AI_TXT_PATH, get_ai_txt),
        web.get(DEVTOOLS_JSON_PATH, get_devtools_json),
    ]


def render_ai_txt(site_name: str, contact_url: str, base_url: str, today: datetime) -> str:
    """Render the ai.txt policy body.

    Args:
        site_name: Site name used in the header comment
        contact_url: Contact URL for training inquiries
        base_url: Absolute site URL the policy is served from
        today: Date written to the Last-modified line

    Returns:
        Policy text
    """
    return _AI_TXT_TEMPLATE.format(
        site_name=site_name,
        contact_url=contact_url,
        policy_url=f"{base_url}{AI_TXT_PATH}",
        last_modified=today.strftime("%Y-%m-%d"),
    )


async def get_ai_txt(request: web.Request) -> web.Response:
    site = request.app[site_config_key]
    body = render_ai_txt(
        site.defaults.site_name,
        site.contact_url,
        site.defaults.base_url,
        datetime.now(UTC),
    )
    return web.Response(
        text=body,
        content_type="text/plain",
        charset="utf-8",
        headers={"Cache-Control": "public, max-age=86400"},
    )


async def get_devtools_json(request: web.Request) -> web.Response:
    return web.Response(text="{}", content_type="application/json")
