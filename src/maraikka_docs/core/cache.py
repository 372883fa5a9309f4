"""File-based cache with mtime invalidation.

Cache structure:
    .cache/
    ├── pages/
    │   └── user-guide/
    │       └── setup.html       # Rendered HTML
    └── meta/
        └── user-guide/
            └── setup.json       # Title, ToC and frontmatter

The root document is stored under the "index" name.
"""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypedDict


class CachedMetadata(TypedDict):
    """Cached page metadata structure."""

    title: str | None
    source_mtime: float
    toc: list[dict[str, str | int]]
    frontmatter: dict[str, Any]


@dataclass
class CacheEntry:
    """Result of cache lookup."""

    html: str
    meta: CachedMetadata


class FileCache:
    """File-based cache for rendered HTML and metadata.

    Uses source file mtime for invalidation. Cache entries are considered valid
    when the cached mtime matches the current source file mtime. Files are
    replaced atomically so concurrent readers never see partial writes.
    """

    _GITIGNORE_CONTENT = "# Ignore everything in this directory\n*\n"

    def __init__(self, cache_dir: Path) -> None:
        """Initialize cache with directory path.

        Args:
            cache_dir: Root directory for cache files (e.g., .cache/)
        """
        self._cache_dir = cache_dir
        self._pages_dir = cache_dir / "pages"
        self._meta_dir = cache_dir / "meta"

    @property
    def cache_dir(self) -> Path:
        """Root cache directory."""
        return self._cache_dir

    def _ensure_cache_dir(self) -> None:
        """Create cache directory with .gitignore if it doesn't exist."""
        if not self._cache_dir.exists():
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            gitignore_path = self._cache_dir / ".gitignore"
            gitignore_path.write_text(self._GITIGNORE_CONTENT, encoding="utf-8")

    def get(self, key: str, source_mtime: float) -> CacheEntry | None:
        """Retrieve cached entry if valid.

        Args:
            key: Content key (e.g., "user-guide/setup")
            source_mtime: Current mtime of source file

        Returns:
            CacheEntry if cache hit and valid, None otherwise
        """
        html_path, meta_path = self._entry_paths(key)

        if not html_path.exists() or not meta_path.exists():
            return None

        meta = self._read_meta(meta_path)
        if meta is None:
            return None

        if meta["source_mtime"] != source_mtime:
            return None

        try:
            html = html_path.read_text(encoding="utf-8")
        except OSError:
            return None

        return CacheEntry(html=html, meta=meta)

    def set(
        self,
        key: str,
        html: str,
        title: str | None,
        source_mtime: float,
        toc: list[dict[str, str | int]],
        frontmatter: dict[str, Any],
    ) -> None:
        """Store entry in cache.

        Args:
            key: Content key (e.g., "user-guide/setup")
            html: Rendered HTML content
            title: Extracted title (or None)
            source_mtime: Source file mtime for invalidation
            toc: Table of contents entries
            frontmatter: Raw frontmatter mapping; dates are stored as ISO strings
        """
        self._ensure_cache_dir()

        html_path, meta_path = self._entry_paths(key)

        meta: CachedMetadata = {
            "title": title,
            "source_mtime": source_mtime,
            "toc": toc,
            "frontmatter": frontmatter,
        }

        _atomic_write(html_path, html)
        _atomic_write(meta_path, json.dumps(meta, default=_json_default))

    def invalidate(self, key: str) -> None:
        """Remove entry from cache.

        Args:
            key: Content key to invalidate
        """
        for path in self._entry_paths(key):
            path.unlink(missing_ok=True)

    def clear(self) -> None:
        """Remove all cached entries."""
        import shutil

        if self._pages_dir.exists():
            shutil.rmtree(self._pages_dir)
        if self._meta_dir.exists():
            shutil.rmtree(self._meta_dir)

    def _entry_paths(self, key: str) -> tuple[Path, Path]:
        name = key or "index"
        return self._pages_dir / f"{name}.html", self._meta_dir / f"{name}.json"

    def _read_meta(self, meta_path: Path) -> CachedMetadata | None:
        """Read and validate metadata file.

        Args:
            meta_path: Path to metadata JSON file

        Returns:
            CachedMetadata if valid, None otherwise
        """
        try:
            data = json.loads(meta_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return None

        if not isinstance(data, dict):
            return None
        if "source_mtime" not in data:
            return None
        if "toc" not in data:
            return None

        frontmatter = data.get("frontmatter")
        return CachedMetadata(
            title=data.get("title"),
            source_mtime=data["source_mtime"],
            toc=data["toc"],
            frontmatter=frontmatter if isinstance(frontmatter, dict) else {},
        )


def _json_default(value: Any) -> str:
    # YAML dates and datetimes must read back the same way they render fresh
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _atomic_write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
