"""Site structure for document hierarchy.

Represents the document site structure with efficient path lookups
and traversal operations. Separate from navigation which is built
from the site for UI presentation.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

import frontmatter
import yaml

from maraikka_docs.core.store import DOCUMENT_SUFFIXES, is_private_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page:
    """Document page data."""

    title: str
    path: str


@dataclass(frozen=True)
class BreadcrumbItem:
    """Breadcrumb navigation item."""

    title: str
    path: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "path": self.path}


class Site:
    """Document site structure with efficient path lookups.

    Stores pages in a flat list with parent/children relationships
    tracked by indices. Provides O(1) path lookups and O(d) breadcrumb
    building where d is the page depth.
    """

    __slots__ = ("_children", "_pages", "_parents", "_path_index", "_roots")

    def __init__(
        self,
        pages: list[Page],
        children: list[list[int]],
        parents: list[int | None],
        roots: list[int],
    ) -> None:
        """Initialize site structure.

        Args:
            pages: Flat list of all pages
            children: Children indices for each page
            parents: Parent index for each page (None for roots)
            roots: Indices of root pages
        """
        self._pages = pages
        self._children = children
        self._parents = parents
        self._roots = roots
        self._path_index = {page.path: i for i, page in enumerate(pages)}

    def get_page(self, path: str) -> Page | None:
        """Get page by path.

        Args:
            path: Page path (e.g., "domain/page" or "/domain/page")

        Returns:
            Page if found, None otherwise
        """
        idx = self._path_index.get(self._normalize_path(path))
        if idx is None:
            return None
        return self._pages[idx]

    def get_children(self, path: str) -> list[Page]:
        """Get children of a page.

        Args:
            path: Page path (e.g., "domain/page" or "/domain/page")

        Returns:
            List of child Pages, empty if not found or no children
        """
        idx = self._path_index.get(self._normalize_path(path))
        if idx is None:
            return []
        return [self._pages[i] for i in self._children[idx]]

    def get_breadcrumbs(self, path: str) -> list[BreadcrumbItem]:
        """Build breadcrumbs for a given path.

        Returns breadcrumbs starting with "Home" for non-root pages,
        followed by ancestor pages. The current page is not included.

        Note:
            For unknown paths, returns [Home] to provide minimal navigation
            in UI even when the page doesn't exist in the site structure.
            This differs from get_page() which returns None for unknown paths.

        Args:
            path: Page path (e.g., "domain/page" or "/domain/page")

        Returns:
            List of BreadcrumbItem for ancestor navigation
        """
        normalized = self._normalize_path(path)
        if normalized == "/":
            return []

        idx = self._path_index.get(normalized)
        if idx is None:
            return [BreadcrumbItem(title="Home", path="/")]

        # Walk up parent chain
        ancestors: list[Page] = []
        current: int | None = idx
        while current is not None:
            ancestors.append(self._pages[current])
            current = self._parents[current]

        # Reverse to root-first, exclude current page
        ancestors.reverse()
        breadcrumbs = [BreadcrumbItem(title="Home", path="/")]
        for page in ancestors[:-1]:
            breadcrumbs.append(BreadcrumbItem(title=page.title, path=page.path))

        return breadcrumbs

    def get_root_pages(self) -> list[Page]:
        """Get root-level pages."""
        return [self._pages[i] for i in self._roots]

    def get_all_pages(self) -> list[Page]:
        """Get all pages in discovery order."""
        return list(self._pages)

    def _normalize_path(self, path: str) -> str:
        """Normalize path to have leading slash and no trailing slash."""
        stripped = path.strip("/")
        return f"/{stripped}"


class SiteBuilder:
    """Builder for constructing Site instances."""

    def __init__(self) -> None:
        self._pages: list[Page] = []
        self._children: list[list[int]] = []
        self._parents: list[int | None] = []
        self._roots: list[int] = []

    def add_page(
        self,
        title: str,
        path: str,
        parent_idx: int | None = None,
    ) -> int:
        """Add a page to the site.

        Args:
            title: Page title
            path: Page path
            parent_idx: Index of parent page, None for root

        Returns:
            Index of the added page
        """
        idx = len(self._pages)
        self._pages.append(Page(title=title, path=path))
        self._children.append([])
        self._parents.append(parent_idx)

        if parent_idx is None:
            self._roots.append(idx)
        else:
            self._children[parent_idx].append(idx)

        return idx

    def build(self) -> Site:
        """Build the Site instance."""
        return Site(
            pages=self._pages,
            children=self._children,
            parents=self._parents,
            roots=self._roots,
        )


class SiteLoader:
    """Builds the Site structure from the documentation source directory.

    Directories with an index document become pages whose children are the
    directory contents; directories without one are transparent. Files and
    directories starting with "." or "_" are skipped. The result is kept in
    memory until invalidate() is called.
    """

    def __init__(self, source_dir: Path) -> None:
        """Initialize loader.

        Args:
            source_dir: Root directory containing markdown sources
        """
        self._source_dir = source_dir
        self._site: Site | None = None
        self._lock = threading.Lock()

    @property
    def source_dir(self) -> Path:
        """Root directory containing markdown sources."""
        return self._source_dir

    def load(self) -> Site:
        """Return the site structure, scanning the source directory if needed."""
        with self._lock:
            if self._site is None:
                self._site = self._scan()
            return self._site

    def invalidate(self) -> None:
        """Drop the cached site structure."""
        with self._lock:
            self._site = None

    def _scan(self) -> Site:
        builder = SiteBuilder()
        if not self._source_dir.is_dir():
            return builder.build()

        root_index = _find_index(self._source_dir)
        if root_index is not None:
            builder.add_page(_read_title(root_index, "Home"), "/")

        self._scan_dir(builder, self._source_dir, None)
        site = builder.build()
        logger.debug("Scanned %d pages from %s", len(site.get_all_pages()), self._source_dir)
        return site

    def _scan_dir(self, builder: SiteBuilder, directory: Path, parent_idx: int | None) -> None:
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if is_private_name(entry.name):
                continue

            if entry.is_dir():
                index = _find_index(entry)
                if index is None:
                    self._scan_dir(builder, entry, parent_idx)
                    continue
                idx = builder.add_page(
                    _read_title(index, _title_from_stem(entry.name)),
                    self._url_path(entry),
                    parent_idx,
                )
                self._scan_dir(builder, entry, idx)
            elif entry.suffix in DOCUMENT_SUFFIXES and entry.stem != "index":
                builder.add_page(
                    _read_title(entry, _title_from_stem(entry.stem)),
                    self._url_path(entry.with_suffix("")),
                    parent_idx,
                )

    def _url_path(self, path: Path) -> str:
        relative = path.relative_to(self._source_dir)
        return "/" + "/".join(relative.parts)


def _find_index(directory: Path) -> Path | None:
    for suffix in DOCUMENT_SUFFIXES:
        candidate = directory / f"index{suffix}"
        if candidate.is_file():
            return candidate
    return None


def _read_title(path: Path, fallback: str) -> str:
    """Read page title from frontmatter, then the first H1."""
    try:
        post = frontmatter.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Could not read title from %s: %s", path, e)
        return fallback

    title = post.metadata.get("title") if isinstance(post.metadata, dict) else None
    if isinstance(title, str) and title.strip():
        return title.strip()

    for line in post.content.splitlines():
        if line.startswith("# "):
            return line[2:].strip()
    return fallback


def _title_from_stem(stem: str) -> str:
    return stem.replace("-", " ").replace("_", " ").title()
