"""Tests for the markdown content store."""

import os
from pathlib import Path

import pytest
import yaml
from maraikka_docs.core.cache import FileCache
from maraikka_docs.core.store import DocumentNotFoundError, MarkdownContentStore
from maraikka_docs.core.types import ROOT_KEY, ContentKey


class TestMarkdownContentStoreGet:
    """Tests for MarkdownContentStore.get()."""

    def test__existing_page__renders_html(self, docs_dir: Path) -> None:
        (docs_dir / "guide.md").write_text("# Guide\n\nThis is a guide.")
        store = MarkdownContentStore(docs_dir)

        document = store.get(ContentKey("guide"))

        assert document.key == "guide"
        assert document.title == "Guide"
        assert "<p>This is a guide.</p>" in document.html
        assert document.source_path == docs_dir / "guide.md"
        assert document.last_modified.tzinfo is not None

    def test__missing_page__raises_document_not_found(self, docs_dir: Path) -> None:
        store = MarkdownContentStore(docs_dir)

        with pytest.raises(DocumentNotFoundError) as exc_info:
            store.get(ContentKey("nonexistent"))

        assert exc_info.value.key == "nonexistent"

    def test__root_key__resolves_index(self, docs_dir: Path) -> None:
        (docs_dir / "index.md").write_text("# Welcome\n\nHome.")
        store = MarkdownContentStore(docs_dir)

        document = store.get(ROOT_KEY)

        assert document.title == "Welcome"

    def test__directory_key__resolves_index(self, docs_dir: Path) -> None:
        guide = docs_dir / "user-guide"
        guide.mkdir()
        (guide / "index.md").write_text("# User Guide\n\nOverview.")
        store = MarkdownContentStore(docs_dir)

        document = store.get(ContentKey("user-guide"))

        assert document.title == "User Guide"
        assert document.source_path == guide / "index.md"

    def test__mdx_suffix__resolves(self, docs_dir: Path) -> None:
        (docs_dir / "features.mdx").write_text("# Features\n")
        store = MarkdownContentStore(docs_dir)

        assert store.get(ContentKey("features")).title == "Features"

    def test__frontmatter__parsed_into_metadata(self, docs_dir: Path) -> None:
        (docs_dir / "getting-started.md").write_text(
            "---\n"
            "title: Getting Started\n"
            "section: Basics\n"
            "openGraph:\n"
            "  title: Start here\n"
            "---\n"
            "# Installing\n\nSteps.",
        )
        store = MarkdownContentStore(docs_dir)

        document = store.get(ContentKey("getting-started"))

        assert document.metadata.title == "Getting Started"
        assert document.metadata.section == "Basics"
        assert document.metadata.open_graph.title == "Start here"
        assert document.metadata.description is None
        assert "title: Getting Started" not in document.html

    def test__no_frontmatter_title__uses_first_heading(self, docs_dir: Path) -> None:
        (docs_dir / "guide.md").write_text("---\ndescription: About\n---\n# Guide Heading\n")
        store = MarkdownContentStore(docs_dir)

        document = store.get(ContentKey("guide"))

        assert document.metadata.title == "Guide Heading"
        assert document.metadata.description == "About"

    def test__toc__excludes_page_title(self, docs_dir: Path) -> None:
        (docs_dir / "guide.md").write_text(
            "# Guide\n\n## Section One\n\nContent.\n\n### Detail\n\n## Section Two\n\nMore.",
        )
        store = MarkdownContentStore(docs_dir)

        document = store.get(ContentKey("guide"))

        assert [(e.level, e.title) for e in document.toc] == [
            (2, "Section One"),
            (3, "Detail"),
            (2, "Section Two"),
        ]
        assert document.toc[0].id == "section-one"

    def test__malformed_frontmatter__raises(self, docs_dir: Path) -> None:
        (docs_dir / "broken.md").write_text("---\ntitle: [unclosed\n---\n# Broken\n")
        store = MarkdownContentStore(docs_dir)

        with pytest.raises(yaml.YAMLError):
            store.get(ContentKey("broken"))

    def test__symlink_outside_source__not_found(self, tmp_path: Path, docs_dir: Path) -> None:
        secret = tmp_path / "secret.md"
        secret.write_text("# Secret\n")
        (docs_dir / "leak.md").symlink_to(secret)
        store = MarkdownContentStore(docs_dir)

        with pytest.raises(DocumentNotFoundError):
            store.get(ContentKey("leak"))


    @pytest.mark.parametrize("key", ["_drafts/secret", "guide/_partial", ".hidden/page"])
    def test__private_segment__not_found(self, docs_dir: Path, key: str) -> None:
        """Keys that list_keys() never reports are not served either."""
        source = docs_dir / f"{key}.md"
        source.parent.mkdir(parents=True)
        source.write_text("# Private\n")
        store = MarkdownContentStore(docs_dir)

        with pytest.raises(DocumentNotFoundError):
            store.get(ContentKey(key))
        assert key not in store.list_keys()


class TestMarkdownContentStoreCaching:
    """Tests for cache integration."""

    def test__second_load__served_from_cache(self, tmp_path: Path, docs_dir: Path) -> None:
        source = docs_dir / "guide.md"
        source.write_text("---\nauthor: Jo\n---\n# Guide\n\n## Part\n")
        cache = FileCache(tmp_path / ".cache")
        store = MarkdownContentStore(docs_dir, cache)

        first = store.get(ContentKey("guide"))
        mtime = source.stat().st_mtime
        assert cache.get("guide", mtime) is not None

        second = store.get(ContentKey("guide"))

        assert second.html == first.html
        assert second.toc == first.toc
        assert second.metadata == first.metadata

    def test__yaml_datetime__same_metadata_from_cache(
        self, tmp_path: Path, docs_dir: Path
    ) -> None:
        (docs_dir / "a.md").write_text(
            "---\nlastModified: 2024-01-15T10:30:00\npublishedDate: 2024-01-10\n---\n# A\n",
        )
        store = MarkdownContentStore(docs_dir, FileCache(tmp_path / ".cache"))

        first = store.get(ContentKey("a"))
        second = store.get(ContentKey("a"))

        assert first.metadata.last_modified == "2024-01-15T10:30:00"
        assert second.metadata == first.metadata

    def test__source_change__rerenders(self, tmp_path: Path, docs_dir: Path) -> None:
        source = docs_dir / "guide.md"
        source.write_text("# Old\n")
        store = MarkdownContentStore(docs_dir, FileCache(tmp_path / ".cache"))
        store.get(ContentKey("guide"))

        source.write_text("# New\n")
        stat = source.stat()
        os.utime(source, (stat.st_atime, stat.st_mtime + 10))

        assert store.get(ContentKey("guide")).title == "New"


class TestMarkdownContentStoreListKeys:
    """Tests for MarkdownContentStore.list_keys()."""

    def test__missing_dir__returns_empty(self, tmp_path: Path) -> None:
        assert MarkdownContentStore(tmp_path / "nonexistent").list_keys() == []

    def test__lists_all_documents(self, docs_dir: Path) -> None:
        (docs_dir / "index.md").write_text("# Home")
        (docs_dir / "features.mdx").write_text("# Features")
        guide = docs_dir / "user-guide"
        guide.mkdir()
        (guide / "index.md").write_text("# User Guide")
        (guide / "setup.md").write_text("# Setup")
        (docs_dir / "_drafts").mkdir()
        (docs_dir / "_drafts" / "wip.md").write_text("# WIP")
        (docs_dir / "notes.txt").write_text("not a document")

        keys = MarkdownContentStore(docs_dir).list_keys()

        assert keys == ["", "features", "user-guide", "user-guide/setup"]
