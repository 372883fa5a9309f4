"""Page metadata derivation.

Builds complete SEO metadata for a page from its (optional) frontmatter and
the site-wide defaults. Every field of ResolvedMetadata is either copied from
the frontmatter or filled from SiteDefaults, so consumers never deal with
partially populated records.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

NOT_FOUND_TITLE = "Page Not Found"
NOT_FOUND_DESCRIPTION = "The page you're looking for doesn't exist or has been moved."

DEFAULT_OG_TYPE = "article"
DEFAULT_TWITTER_CARD = "summary_large_image"
DEFAULT_CATEGORY = "Documentation"


@dataclass(frozen=True)
class ImageDescriptor:
    """Social sharing image."""

    url: str
    width: int | None = None
    height: int | None = None
    alt: str | None = None

    def to_dict(self) -> dict[str, str | int]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, str | int] = {"url": self.url}
        if self.width is not None:
            result["width"] = self.width
        if self.height is not None:
            result["height"] = self.height
        if self.alt is not None:
            result["alt"] = self.alt
        return result


@dataclass(frozen=True)
class SiteDefaults:
    """Site-wide metadata defaults.

    Built once from configuration at startup and passed to synthesize().
    """

    title: str = "Maraikka Documentation"
    title_template: str = "%s | Maraikka"
    description: str = "Documentation for Maraikka - Protect What Matters."
    site_name: str = "Maraikka Documentation"
    locale: str = "en_US"
    base_url: str = "https://docs.maraikka.com"
    author: str = "Maraikka Labs"
    twitter_creator: str = "@MaraikkaLabs"
    keywords: tuple[str, ...] = (
        "maraikka",
        "documentation",
        "security",
        "privacy",
        "protect what matters",
        "encryption",
    )
    og_image: ImageDescriptor = field(
        default_factory=lambda: ImageDescriptor(
            url="/images/maraikka-og-default.png",
            width=1200,
            height=630,
            alt="Maraikka Documentation",
        ),
    )
    twitter_image: str = "/images/maraikka-twitter-default.png"


@dataclass(frozen=True)
class OpenGraphOverrides:
    """Open Graph values set in frontmatter."""

    title: str | None = None
    description: str | None = None
    type: str | None = None
    images: tuple[ImageDescriptor, ...] | None = None


@dataclass(frozen=True)
class TwitterOverrides:
    """Twitter card values set in frontmatter."""

    card: str | None = None
    title: str | None = None
    description: str | None = None
    images: tuple[str, ...] | None = None


@dataclass(frozen=True)
class FrontmatterMetadata:
    """Known frontmatter fields of a document. Any field may be absent."""

    title: str | None = None
    description: str | None = None
    keywords: tuple[str, ...] | None = None
    author: str | None = None
    canonical: str | None = None
    section: str | None = None
    last_modified: str | None = None
    published_date: str | None = None
    open_graph: OpenGraphOverrides = field(default_factory=OpenGraphOverrides)
    twitter: TwitterOverrides = field(default_factory=TwitterOverrides)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "FrontmatterMetadata":
        """Build from a raw frontmatter mapping.

        Accepts the camelCase keys used in MDX frontmatter (openGraph,
        lastModified, publishedDate) and their snake_case forms. Values of an
        unexpected type are treated as absent.

        Args:
            data: Parsed YAML frontmatter

        Returns:
            FrontmatterMetadata instance
        """
        if not data:
            return cls()

        og = _lookup(data, "openGraph", "open_graph")
        tw = _lookup(data, "twitter")
        og_data: Mapping[str, Any] = og if isinstance(og, Mapping) else {}
        tw_data: Mapping[str, Any] = tw if isinstance(tw, Mapping) else {}

        return cls(
            title=_as_str(_lookup(data, "title")),
            description=_as_str(_lookup(data, "description")),
            keywords=_as_keywords(_lookup(data, "keywords")),
            author=_as_str(_lookup(data, "author")),
            canonical=_as_str(_lookup(data, "canonical")),
            section=_as_str(_lookup(data, "section")),
            last_modified=_as_str(_lookup(data, "lastModified", "last_modified")),
            published_date=_as_str(_lookup(data, "publishedDate", "published_date")),
            open_graph=OpenGraphOverrides(
                title=_as_str(og_data.get("title")),
                description=_as_str(og_data.get("description")),
                type=_as_str(og_data.get("type")),
                images=_as_images(og_data.get("images")),
            ),
            twitter=TwitterOverrides(
                card=_as_str(tw_data.get("card")),
                title=_as_str(tw_data.get("title")),
                description=_as_str(tw_data.get("description")),
                images=_as_image_urls(tw_data.get("images")),
            ),
        )


@dataclass(frozen=True)
class GoogleBotDirectives:
    """googleBot-specific robots directives."""

    index: bool
    follow: bool
    max_video_preview: int | None = None
    max_image_preview: str | None = None
    max_snippet: int | None = None

    def to_dict(self) -> dict[str, bool | int | str]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, bool | int | str] = {"index": self.index, "follow": self.follow}
        if self.max_video_preview is not None:
            result["max-video-preview"] = self.max_video_preview
        if self.max_image_preview is not None:
            result["max-image-preview"] = self.max_image_preview
        if self.max_snippet is not None:
            result["max-snippet"] = self.max_snippet
        return result


@dataclass(frozen=True)
class RobotsDirectives:
    """Crawler indexing directives."""

    index: bool
    follow: bool
    google_bot: GoogleBotDirectives

    def to_content(self) -> str:
        """Render as a robots meta tag content value."""
        return ", ".join(
            [
                "index" if self.index else "noindex",
                "follow" if self.follow else "nofollow",
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "index": self.index,
            "follow": self.follow,
            "googleBot": self.google_bot.to_dict(),
        }


ALLOW_ALL_ROBOTS = RobotsDirectives(
    index=True,
    follow=True,
    google_bot=GoogleBotDirectives(
        index=True,
        follow=True,
        max_video_preview=-1,
        max_image_preview="large",
        max_snippet=-1,
    ),
)

DISALLOW_ALL_ROBOTS = RobotsDirectives(
    index=False,
    follow=False,
    google_bot=GoogleBotDirectives(index=False, follow=False),
)


@dataclass(frozen=True)
class OpenGraphMetadata:
    """Resolved Open Graph metadata."""

    title: str
    description: str
    type: str
    site_name: str
    locale: str
    images: tuple[ImageDescriptor, ...]
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "type": self.type,
            "siteName": self.site_name,
            "locale": self.locale,
            "images": [image.to_dict() for image in self.images],
        }
        if self.url is not None:
            result["url"] = self.url
        return result


@dataclass(frozen=True)
class TwitterMetadata:
    """Resolved Twitter card metadata."""

    card: str
    title: str
    description: str
    images: tuple[str, ...]
    creator: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "card": self.card,
            "title": self.title,
            "description": self.description,
            "images": list(self.images),
            "creator": self.creator,
        }


@dataclass(frozen=True)
class ResolvedMetadata:
    """Complete page metadata ready for head tag rendering."""

    title: str
    description: str
    keywords: tuple[str, ...]
    authors: tuple[str, ...]
    open_graph: OpenGraphMetadata
    twitter: TwitterMetadata
    category: str
    other: dict[str, str]
    robots: RobotsDirectives
    canonical: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "keywords": list(self.keywords),
            "authors": [{"name": name} for name in self.authors],
            "openGraph": self.open_graph.to_dict(),
            "twitter": self.twitter.to_dict(),
            "category": self.category,
            "other": dict(self.other),
            "robots": self.robots.to_dict(),
        }
        if self.canonical is not None:
            result["alternates"] = {"canonical": self.canonical}
        return result


def synthesize(
    raw: FrontmatterMetadata | None,
    defaults: SiteDefaults,
) -> ResolvedMetadata:
    """Derive complete page metadata.

    Each social field falls back to its own frontmatter override, then the
    resolved top-level value, then the site default. Open Graph and Twitter
    values never inherit from each other.

    Args:
        raw: Frontmatter of the loaded document, or None when loading failed
        defaults: Site-wide defaults

    Returns:
        ResolvedMetadata; the fixed not-found record when raw is None
    """
    if raw is None:
        return not_found_metadata(defaults)

    title = raw.title or defaults.title
    description = raw.description or defaults.description
    author = raw.author or defaults.author

    open_graph = OpenGraphMetadata(
        title=raw.open_graph.title or title,
        description=raw.open_graph.description or description,
        type=raw.open_graph.type or DEFAULT_OG_TYPE,
        site_name=defaults.site_name,
        locale=defaults.locale,
        images=raw.open_graph.images or (defaults.og_image,),
        url=raw.canonical,
    )
    twitter = TwitterMetadata(
        card=raw.twitter.card or DEFAULT_TWITTER_CARD,
        title=raw.twitter.title or title,
        description=raw.twitter.description or description,
        images=raw.twitter.images or (defaults.twitter_image,),
        creator=defaults.twitter_creator,
    )

    other = {
        "article:author": author,
        "article:section": raw.section,
        "article:modified_time": raw.last_modified,
        "article:published_time": raw.published_date or raw.last_modified,
        "docsearch:language": "en",
        "docsearch:version": "latest",
    }

    return ResolvedMetadata(
        title=title,
        description=description,
        keywords=raw.keywords or defaults.keywords,
        authors=(author,),
        open_graph=open_graph,
        twitter=twitter,
        category=raw.section or DEFAULT_CATEGORY,
        other={key: value for key, value in other.items() if value is not None},
        robots=ALLOW_ALL_ROBOTS,
        canonical=raw.canonical,
    )


def not_found_metadata(defaults: SiteDefaults) -> ResolvedMetadata:
    """Fixed metadata for pages that could not be loaded.

    Depends only on the site defaults; indexing is always disabled.
    """
    return ResolvedMetadata(
        title=NOT_FOUND_TITLE,
        description=NOT_FOUND_DESCRIPTION,
        keywords=defaults.keywords,
        authors=(defaults.author,),
        open_graph=OpenGraphMetadata(
            title=NOT_FOUND_TITLE,
            description=NOT_FOUND_DESCRIPTION,
            type="website",
            site_name=defaults.site_name,
            locale=defaults.locale,
            images=(defaults.og_image,),
        ),
        twitter=TwitterMetadata(
            card=DEFAULT_TWITTER_CARD,
            title=NOT_FOUND_TITLE,
            description=NOT_FOUND_DESCRIPTION,
            images=(defaults.twitter_image,),
            creator=defaults.twitter_creator,
        ),
        category=DEFAULT_CATEGORY,
        other={},
        robots=DISALLOW_ALL_ROBOTS,
    )


def _lookup(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _as_str(value: Any) -> str | None:
    # YAML turns bare dates into date objects
    if isinstance(value, str):
        return value.strip() or None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return None


def _as_keywords(value: Any) -> tuple[str, ...] | None:
    if isinstance(value, str):
        items = [item.strip() for item in value.split(",")]
    elif isinstance(value, list):
        items = [item.strip() for item in value if isinstance(item, str)]
    else:
        return None
    keywords = tuple(item for item in items if item)
    return keywords or None


def _as_images(value: Any) -> tuple[ImageDescriptor, ...] | None:
    if isinstance(value, str | Mapping):
        value = [value]
    if not isinstance(value, list):
        return None

    images: list[ImageDescriptor] = []
    for item in value:
        if isinstance(item, str):
            images.append(ImageDescriptor(url=item))
        elif isinstance(item, Mapping) and isinstance(item.get("url"), str):
            width = item.get("width")
            height = item.get("height")
            images.append(
                ImageDescriptor(
                    url=item["url"],
                    width=width if isinstance(width, int) else None,
                    height=height if isinstance(height, int) else None,
                    alt=_as_str(item.get("alt")),
                ),
            )
    return tuple(images) or None


def _as_image_urls(value: Any) -> tuple[str, ...] | None:
    images = _as_images(value)
    if images is None:
        return None
    return tuple(image.url for image in images)
