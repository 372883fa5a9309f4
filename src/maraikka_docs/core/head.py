"""HTML head tags from resolved metadata.

Flattens ResolvedMetadata into the title and meta/link tags placed in the
page head. Relative image and canonical URLs are made absolute against the
site base URL.
"""

from dataclasses import dataclass
from urllib.parse import urljoin

from maraikka_docs.core.metadata import ResolvedMetadata, SiteDefaults


@dataclass(frozen=True)
class MetaTag:
    """A <meta> tag keyed by name or property."""

    key: str
    content: str
    attribute: str = "name"


@dataclass(frozen=True)
class HeadTags:
    """Everything the layout needs to render the head."""

    title: str
    meta: list[MetaTag]
    canonical: str | None


def format_title(title: str, defaults: SiteDefaults) -> str:
    """Apply the site title template unless the title is the site title itself."""
    if title == defaults.title:
        return title
    return defaults.title_template.replace("%s", title)


def build_head_tags(metadata: ResolvedMetadata, defaults: SiteDefaults) -> HeadTags:
    """Build head tags for a page.

    Args:
        metadata: Resolved page metadata
        defaults: Site defaults (title template and base URL)

    Returns:
        HeadTags for the layout template
    """
    base = defaults.base_url.rstrip("/") + "/"

    def absolute(url: str) -> str:
        return urljoin(base, url)

    og = metadata.open_graph
    tw = metadata.twitter

    meta = [
        MetaTag("description", metadata.description),
        MetaTag("keywords", ", ".join(metadata.keywords)),
        MetaTag("robots", metadata.robots.to_content()),
        MetaTag("googlebot", _googlebot_content(metadata)),
        MetaTag("category", metadata.category),
    ]
    meta.extend(MetaTag("author", name) for name in metadata.authors)

    meta.extend(
        [
            MetaTag("og:title", og.title, "property"),
            MetaTag("og:description", og.description, "property"),
            MetaTag("og:type", og.type, "property"),
            MetaTag("og:site_name", og.site_name, "property"),
            MetaTag("og:locale", og.locale, "property"),
        ],
    )
    if og.url is not None:
        meta.append(MetaTag("og:url", absolute(og.url), "property"))
    for image in og.images:
        meta.append(MetaTag("og:image", absolute(image.url), "property"))
        if image.width is not None:
            meta.append(MetaTag("og:image:width", str(image.width), "property"))
        if image.height is not None:
            meta.append(MetaTag("og:image:height", str(image.height), "property"))
        if image.alt is not None:
            meta.append(MetaTag("og:image:alt", image.alt, "property"))

    meta.extend(
        [
            MetaTag("twitter:card", tw.card),
            MetaTag("twitter:title", tw.title),
            MetaTag("twitter:description", tw.description),
            MetaTag("twitter:creator", tw.creator),
        ],
    )
    meta.extend(MetaTag("twitter:image", absolute(url)) for url in tw.images)

    for key, value in metadata.other.items():
        attribute = "property" if key.startswith("article:") else "name"
        meta.append(MetaTag(key, value, attribute))

    canonical = absolute(metadata.canonical) if metadata.canonical else None
    return HeadTags(
        title=format_title(metadata.title, defaults),
        meta=meta,
        canonical=canonical,
    )


def _googlebot_content(metadata: ResolvedMetadata) -> str:
    bot = metadata.robots.google_bot
    parts = ["index" if bot.index else "noindex", "follow" if bot.follow else "nofollow"]
    if bot.max_video_preview is not None:
        parts.append(f"max-video-preview:{bot.max_video_preview}")
    if bot.max_image_preview is not None:
        parts.append(f"max-image-preview:{bot.max_image_preview}")
    if bot.max_snippet is not None:
        parts.append(f"max-snippet:{bot.max_snippet}")
    return ", ".join(parts)
