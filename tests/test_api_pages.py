"""Tests for pages API endpoint."""

from pathlib import Path

import pytest
from aiohttp.test_utils import TestClient
from maraikka_docs.config import Config
from maraikka_docs.server import create_app


@pytest.fixture
def client(test_config: Config, aiohttp_client) -> TestClient:
    """Create test client with configured app."""
    return aiohttp_client(create_app(test_config))


class TestGetPage:
    """Tests for GET /api/pages/{path}."""

    @pytest.mark.asyncio
    async def test__existing_page__returns_rendered_content(
        self, docs_dir: Path, client
    ) -> None:
        """Return rendered page for existing markdown file."""
        (docs_dir / "guide.md").write_text("# Guide\n\nThis is a guide.")

        test_client = await client
        response = await test_client.get("/api/pages/guide")

        assert response.status == 200
        data = await response.json()
        assert data["meta"]["title"] == "Guide"
        assert data["meta"]["path"] == "/guide"
        assert "This is a guide" in data["content"]

    @pytest.mark.asyncio
    async def test__missing_page__returns_404_with_noindex_metadata(self, client) -> None:
        """Return 404 and the not-found metadata for non-existent page."""
        test_client = await client
        response = await test_client.get("/api/pages/does-not-exist")

        assert response.status == 404
        data = await response.json()
        assert data["error"] == "Page not found"
        assert data["path"] == "does-not-exist"
        assert data["metadata"]["title"] == "Page Not Found"
        assert data["metadata"]["robots"]["index"] is False
        assert data["metadata"]["robots"]["follow"] is False

    @pytest.mark.asyncio
    async def test__frontmatter__metadata_uses_defaults(self, docs_dir: Path, client) -> None:
        """Missing description falls back to the site description."""
        (docs_dir / "getting-started.md").write_text(
            "---\ntitle: Getting Started\n---\n## Install\n\nSteps.",
        )

        test_client = await client
        response = await test_client.get("/api/pages/getting-started")

        assert response.status == 200
        data = await response.json()
        assert data["metadata"]["title"] == "Getting Started"
        assert data["metadata"]["description"] == "Documentation for Maraikka - Protect What Matters."
        assert data["metadata"]["robots"]["index"] is True
        assert data["toc"] == [{"level": 2, "title": "Install", "id": "install"}]

    @pytest.mark.asyncio
    async def test__nested_path__returns_page(self, docs_dir: Path, client) -> None:
        """Return page from nested directory."""
        nested = docs_dir / "user-guide" / "advanced"
        nested.mkdir(parents=True)
        (nested / "keys.md").write_text("# Key Management\n\nDeep content.")

        test_client = await client
        response = await test_client.get("/api/pages/user-guide/advanced/keys")

        assert response.status == 200
        data = await response.json()
        assert data["meta"]["title"] == "Key Management"
        assert data["meta"]["path"] == "/user-guide/advanced/keys"
        assert data["breadcrumbs"][0] == {"title": "Home", "path": "/"}

    @pytest.mark.asyncio
    async def test__root__resolves_index(self, docs_dir: Path, client) -> None:
        """Both /api/pages and /api/pages/ resolve the root document."""
        (docs_dir / "index.md").write_text("# Welcome\n\nHome page.")

        test_client = await client
        bare = await test_client.get("/api/pages")
        slash = await test_client.get("/api/pages/")

        assert bare.status == 200
        assert slash.status == 200
        assert (await bare.json())["meta"]["path"] == "/"

    @pytest.mark.asyncio
    async def test__returns_cache_headers(self, docs_dir: Path, client) -> None:
        """Include ETag, Last-Modified and Cache-Control headers."""
        (docs_dir / "guide.md").write_text("# Guide\n\nContent.")

        test_client = await client
        response = await test_client.get("/api/pages/guide")

        assert response.headers["ETag"].startswith('"')
        assert response.headers["Last-Modified"].endswith("GMT")
        assert response.headers["Cache-Control"] == "private, max-age=60"

    @pytest.mark.asyncio
    async def test__matching_etag__returns_304(self, docs_dir: Path, client) -> None:
        """Return 304 Not Modified when If-None-Match matches."""
        (docs_dir / "guide.md").write_text("# Guide\n\nContent.")

        test_client = await client
        first = await test_client.get("/api/pages/guide")
        etag = first.headers["ETag"]

        second = await test_client.get("/api/pages/guide", headers={"If-None-Match": etag})

        assert second.status == 304

    @pytest.mark.asyncio
    async def test__broken_frontmatter__returns_404(self, docs_dir: Path, client) -> None:
        """Load failures are reported as not found."""
        (docs_dir / "broken.md").write_text("---\ntitle: [unclosed\n---\n# Broken\n")

        test_client = await client
        response = await test_client.get("/api/pages/broken")

        assert response.status == 404
