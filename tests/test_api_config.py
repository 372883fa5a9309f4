"""Tests for config API endpoint."""

from dataclasses import replace

import pytest
from maraikka_docs.config import Config
from maraikka_docs.server import create_app


class TestGetConfig:
    """Tests for GET /api/config."""

    @pytest.mark.asyncio
    async def test__live_reload_disabled__returns_false(
        self, test_config: Config, aiohttp_client
    ) -> None:
        client = await aiohttp_client(create_app(test_config))

        response = await client.get("/api/config")

        assert response.status == 200
        assert await response.json() == {"liveReloadEnabled": False}

    @pytest.mark.asyncio
    async def test__live_reload_enabled__returns_true(
        self, test_config: Config, aiohttp_client
    ) -> None:
        config = replace(test_config, live_reload=replace(test_config.live_reload, enabled=True))
        client = await aiohttp_client(create_app(config))

        response = await client.get("/api/config")

        assert await response.json() == {"liveReloadEnabled": True}
