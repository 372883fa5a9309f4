"""Content resolution for the catch-all documentation route.

Resolution runs in three steps: route segments are normalized into a content
key, the key is loaded from the content store, and page metadata is derived
from the loaded frontmatter. Every load failure ends in NotFound; nothing
raised by the store reaches the caller.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from maraikka_docs.core.metadata import ResolvedMetadata, SiteDefaults, synthesize
from maraikka_docs.core.paths import normalize
from maraikka_docs.core.store import ContentStore, Document, DocumentNotFoundError, TocEntry
from maraikka_docs.core.types import ContentKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    """A document was loaded for the key."""

    document: Document

    @property
    def toc(self) -> tuple[TocEntry, ...]:
        return self.document.toc


@dataclass(frozen=True)
class NotFound:
    """No document could be loaded for the key."""

    key: ContentKey


ResolutionOutcome = Found | NotFound


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a route together with its page metadata."""

    key: ContentKey
    outcome: ResolutionOutcome
    metadata: ResolvedMetadata

    @property
    def found(self) -> bool:
        return isinstance(self.outcome, Found)


class ContentLoader:
    """Async facade over a content store.

    The store lookup runs in a worker thread. Absent documents and any other
    store failure are reported as NotFound.
    """

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    @property
    def store(self) -> ContentStore:
        return self._store

    async def load(self, key: ContentKey) -> ResolutionOutcome:
        """Load the document for a key.

        Args:
            key: Normalized content key

        Returns:
            Found with the document, or NotFound
        """
        try:
            document = await asyncio.to_thread(self._store.get, key)
        except DocumentNotFoundError:
            logger.debug("No document for /%s", key)
            return NotFound(key)
        except Exception:
            logger.warning("Failed to load /%s", key, exc_info=True)
            return NotFound(key)
        return Found(document)


class ContentResolver:
    """Resolves route segments to a document and its metadata."""

    def __init__(self, loader: ContentLoader, defaults: SiteDefaults) -> None:
        """Initialize resolver.

        Args:
            loader: Content loader facade
            defaults: Site-wide metadata defaults
        """
        self._loader = loader
        self._defaults = defaults

    @property
    def loader(self) -> ContentLoader:
        return self._loader

    @property
    def defaults(self) -> SiteDefaults:
        return self._defaults

    async def resolve(self, segments: Sequence[str] | None) -> Resolution:
        """Resolve route segments.

        Args:
            segments: Route path segments (None or empty for the site root)

        Returns:
            Resolution with Found or NotFound outcome and complete metadata
        """
        key = normalize(segments)
        outcome = await self._loader.load(key)

        if isinstance(outcome, Found):
            metadata = synthesize(outcome.document.metadata, self._defaults)
        else:
            metadata = synthesize(None, self._defaults)

        return Resolution(key=key, outcome=outcome, metadata=metadata)
