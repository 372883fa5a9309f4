"""Markdown content store.

Loads documents with YAML frontmatter from the source directory, renders them
to HTML with Python-Markdown and caches the result by source mtime.
"""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol

import frontmatter
from markdown import Markdown
from markdown.extensions.toc import TocExtension

from maraikka_docs.core.cache import CacheEntry, FileCache
from maraikka_docs.core.metadata import FrontmatterMetadata
from maraikka_docs.core.types import ContentKey

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIXES = (".md", ".mdx")


def is_private_name(name: str) -> bool:
    """Files and directories starting with "." or "_" are never routed."""
    return name.startswith((".", "_"))


class DocumentNotFoundError(FileNotFoundError):
    """No document exists for a content key."""

    def __init__(self, key: ContentKey) -> None:
        super().__init__(f"Document not found: /{key}")
        self.key = key


@dataclass(frozen=True)
class TocEntry:
    """Table of contents entry."""

    level: int
    title: str
    id: str

    def to_dict(self) -> dict[str, str | int]:
        """Convert to dictionary for JSON serialization."""
        return {"level": self.level, "title": self.title, "id": self.id}


@dataclass(frozen=True)
class Document:
    """A loaded and rendered document."""

    key: ContentKey
    html: str
    title: str | None
    toc: tuple[TocEntry, ...]
    metadata: FrontmatterMetadata
    source_path: Path
    last_modified: datetime


class ContentStore(Protocol):
    """Source of documents addressed by content key."""

    def get(self, key: ContentKey) -> Document:
        """Load a document.

        Raises:
            DocumentNotFoundError: If no document exists for the key
        """
        ...

    def list_keys(self) -> list[ContentKey]:
        """Return the keys of all documents."""
        ...


class MarkdownContentStore:
    """Content store backed by a directory of Markdown files.

    Key "a/b" resolves to a/b.md, then a/b/index.md; the root key resolves to
    index.md. The .mdx suffix is accepted wherever .md is.
    """

    def __init__(self, source_dir: Path, cache: FileCache | None = None) -> None:
        """Initialize store.

        Args:
            source_dir: Root directory containing markdown sources
            cache: FileCache for rendered content, None to render on every request
        """
        self._source_dir = source_dir
        self._cache = cache

    @property
    def source_dir(self) -> Path:
        """Root directory containing markdown sources."""
        return self._source_dir

    def get(self, key: ContentKey) -> Document:
        """Load and render a document.

        Args:
            key: Content key (e.g., "user-guide/setup", "" for root)

        Returns:
            Rendered Document

        Raises:
            DocumentNotFoundError: If no source file exists for the key
            yaml.YAMLError: If the frontmatter is malformed
        """
        source_path = self.resolve_source_path(key)
        if source_path is None:
            raise DocumentNotFoundError(key)

        source_mtime = source_path.stat().st_mtime
        last_modified = datetime.fromtimestamp(source_mtime, tz=UTC)

        if self._cache is not None:
            cached = self._cache.get(key, source_mtime)
            if cached is not None:
                logger.debug("Cache hit for /%s", key)
                return _from_cache(key, cached, source_path, last_modified)

        raw_metadata, html, title, toc = self._render_fresh(source_path)

        if self._cache is not None:
            self._cache.set(
                key,
                html,
                title,
                source_mtime,
                [entry.to_dict() for entry in toc],
                raw_metadata,
            )

        return Document(
            key=key,
            html=html,
            title=title,
            toc=toc,
            metadata=_with_title(FrontmatterMetadata.from_mapping(raw_metadata), title),
            source_path=source_path,
            last_modified=last_modified,
        )

    def list_keys(self) -> list[ContentKey]:
        """Return the keys of all documents, sorted."""
        if not self._source_dir.is_dir():
            return []

        keys: set[ContentKey] = set()
        for path in self._source_dir.rglob("*"):
            if path.suffix not in DOCUMENT_SUFFIXES or not path.is_file():
                continue
            relative = path.relative_to(self._source_dir).with_suffix("")
            if any(is_private_name(part) for part in relative.parts):
                continue
            parts = relative.parts[:-1] if relative.name == "index" else relative.parts
            keys.add(ContentKey("/".join(parts)))
        return sorted(keys)

    def resolve_source_path(self, key: ContentKey) -> Path | None:
        """Resolve a content key to its source file.

        Args:
            key: Content key

        Returns:
            Path to the source file, or None if no document exists
        """
        if any(is_private_name(part) for part in key.split("/")):
            return None

        base = self._source_dir / key if key else self._source_dir
        candidates: list[Path] = []
        if key:
            candidates.extend(base.with_name(base.name + suffix) for suffix in DOCUMENT_SUFFIXES)
        candidates.extend(base / f"index{suffix}" for suffix in DOCUMENT_SUFFIXES)

        root = self._source_dir.resolve()
        for candidate in candidates:
            if not candidate.is_file():
                continue
            if not candidate.resolve().is_relative_to(root):
                logger.warning("Refusing to serve %s outside of %s", candidate, root)
                return None
            return candidate
        return None

    def _render_fresh(
        self,
        source_path: Path,
    ) -> tuple[dict[str, Any], str, str | None, tuple[TocEntry, ...]]:
        """Parse frontmatter and render markdown from source file.

        Args:
            source_path: Path to markdown file

        Returns:
            Tuple of (raw frontmatter, HTML, title, ToC)
        """
        post = frontmatter.loads(source_path.read_text(encoding="utf-8"))

        raw_metadata = post.metadata
        if not isinstance(raw_metadata, dict):
            logger.warning("Frontmatter of %s is not a mapping, ignoring it", source_path)
            raw_metadata = {}

        md = Markdown(
            extensions=["fenced_code", "tables", TocExtension(permalink=False)],
            output_format="html",
        )
        html = md.convert(post.content)
        tokens: list[dict[str, Any]] = getattr(md, "toc_tokens", [])

        title = _first_heading(tokens)
        toc = tuple(_flatten_toc(tokens))

        logger.debug("Rendered %s (%d toc entries)", source_path, len(toc))
        return dict(raw_metadata), html, title, toc


def _first_heading(tokens: list[dict[str, Any]]) -> str | None:
    for token in tokens:
        if token["level"] == 1:
            return str(token["name"])
    return None


def _flatten_toc(tokens: list[dict[str, Any]]) -> list[TocEntry]:
    """Flatten nested toc tokens, skipping the level-1 page title."""
    entries: list[TocEntry] = []
    for token in tokens:
        if token["level"] > 1:
            entries.append(
                TocEntry(level=token["level"], title=str(token["name"]), id=str(token["id"])),
            )
        entries.extend(_flatten_toc(token.get("children", [])))
    return entries


def _with_title(metadata: FrontmatterMetadata, heading: str | None) -> FrontmatterMetadata:
    if metadata.title is None and heading:
        return replace(metadata, title=heading)
    return metadata


def _from_cache(
    key: ContentKey,
    cached: CacheEntry,
    source_path: Path,
    last_modified: datetime,
) -> Document:
    """Create Document from cache entry."""
    toc = tuple(
        TocEntry(level=int(entry["level"]), title=str(entry["title"]), id=str(entry["id"]))
        for entry in cached.meta["toc"]
    )
    title = cached.meta["title"]
    return Document(
        key=key,
        html=cached.html,
        title=title,
        toc=toc,
        metadata=_with_title(FrontmatterMetadata.from_mapping(cached.meta["frontmatter"]), title),
        source_path=source_path,
        last_modified=last_modified,
    )
