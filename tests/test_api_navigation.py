"""Tests for navigation API endpoints."""

from pathlib import Path

import pytest
from aiohttp.test_utils import TestClient
from maraikka_docs.config import Config
from maraikka_docs.server import create_app


@pytest.fixture
def client(test_config: Config, aiohttp_client) -> TestClient:
    """Create test client with configured app."""
    return aiohttp_client(create_app(test_config))


class TestGetNavigation:
    """Tests for GET /api/navigation."""

    @pytest.mark.asyncio
    async def test__empty_source__returns_empty_items(self, client) -> None:
        test_client = await client
        response = await test_client.get("/api/navigation")

        assert response.status == 200
        assert await response.json() == {"items": []}

    @pytest.mark.asyncio
    async def test__returns_tree(self, docs_dir: Path, client) -> None:
        """Return nested navigation built from the source directory."""
        guide = docs_dir / "user-guide"
        guide.mkdir()
        (guide / "index.md").write_text("# User Guide")
        (guide / "setup.md").write_text("# Setup")
        (docs_dir / "features.md").write_text("# Features")

        test_client = await client
        response = await test_client.get("/api/navigation")

        data = await response.json()
        assert data["items"] == [
            {"title": "Features", "path": "/features"},
            {
                "title": "User Guide",
                "path": "/user-guide",
                "children": [{"title": "Setup", "path": "/user-guide/setup"}],
            },
        ]


class TestGetNavigationSubtree:
    """Tests for GET /api/navigation/{path}."""

    @pytest.mark.asyncio
    async def test__section__returns_children(self, docs_dir: Path, client) -> None:
        guide = docs_dir / "user-guide"
        guide.mkdir()
        (guide / "index.md").write_text("# User Guide")
        (guide / "setup.md").write_text("# Setup")

        test_client = await client
        response = await test_client.get("/api/navigation/user-guide")

        assert response.status == 200
        assert await response.json() == {
            "items": [{"title": "Setup", "path": "/user-guide/setup"}],
        }

    @pytest.mark.asyncio
    async def test__unknown_section__returns_404(self, client) -> None:
        test_client = await client
        response = await test_client.get("/api/navigation/missing")

        assert response.status == 404
        assert await response.json() == {"error": "Section not found", "path": "missing"}
