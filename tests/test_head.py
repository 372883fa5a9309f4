"""Tests for head tag generation."""

from maraikka_docs.core.head import MetaTag, build_head_tags, format_title
from maraikka_docs.core.metadata import (
    FrontmatterMetadata,
    SiteDefaults,
    not_found_metadata,
    synthesize,
)


def _content(tags: list[MetaTag], key: str) -> list[str]:
    return [tag.content for tag in tags if tag.key == key]


class TestFormatTitle:
    """Tests for format_title()."""

    def test__page_title__uses_template(self, site_defaults: SiteDefaults) -> None:
        assert format_title("Getting Started", site_defaults) == "Getting Started | Maraikka"

    def test__site_title__left_unchanged(self, site_defaults: SiteDefaults) -> None:
        assert format_title(site_defaults.title, site_defaults) == site_defaults.title


class TestBuildHeadTags:
    """Tests for build_head_tags()."""

    def test__found_page__allows_indexing(self, site_defaults: SiteDefaults) -> None:
        metadata = synthesize(FrontmatterMetadata(title="Getting Started"), site_defaults)

        head = build_head_tags(metadata, site_defaults)

        assert head.title == "Getting Started | Maraikka"
        assert _content(head.meta, "robots") == ["index, follow"]
        assert _content(head.meta, "googlebot") == [
            "index, follow, max-video-preview:-1, max-image-preview:large, max-snippet:-1",
        ]
        assert _content(head.meta, "description") == [site_defaults.description]

    def test__not_found__disallows_indexing(self, site_defaults: SiteDefaults) -> None:
        head = build_head_tags(not_found_metadata(site_defaults), site_defaults)

        assert head.title == "Page Not Found | Maraikka"
        assert _content(head.meta, "robots") == ["noindex, nofollow"]
        assert _content(head.meta, "googlebot") == ["noindex, nofollow"]

    def test__images__made_absolute(self, site_defaults: SiteDefaults) -> None:
        metadata = synthesize(FrontmatterMetadata(), site_defaults)

        head = build_head_tags(metadata, site_defaults)

        assert _content(head.meta, "og:image") == [
            "https://docs.maraikka.com/images/maraikka-og-default.png",
        ]
        assert _content(head.meta, "og:image:width") == ["1200"]
        assert _content(head.meta, "twitter:image") == [
            "https://docs.maraikka.com/images/maraikka-twitter-default.png",
        ]

    def test__og_tags__use_property_attribute(self, site_defaults: SiteDefaults) -> None:
        metadata = synthesize(FrontmatterMetadata(section="Security"), site_defaults)

        head = build_head_tags(metadata, site_defaults)

        attributes = {tag.key: tag.attribute for tag in head.meta}
        assert attributes["og:title"] == "property"
        assert attributes["article:section"] == "property"
        assert attributes["twitter:card"] == "name"
        assert attributes["docsearch:language"] == "name"

    def test__canonical__absolute_link(self, site_defaults: SiteDefaults) -> None:
        metadata = synthesize(FrontmatterMetadata(canonical="/features"), site_defaults)

        head = build_head_tags(metadata, site_defaults)

        assert head.canonical == "https://docs.maraikka.com/features"
        assert _content(head.meta, "og:url") == ["https://docs.maraikka.com/features"]

    def test__no_canonical__no_link(self, site_defaults: SiteDefaults) -> None:
        head = build_head_tags(synthesize(FrontmatterMetadata(), site_defaults), site_defaults)

        assert head.canonical is None
        assert _content(head.meta, "og:url") == []
