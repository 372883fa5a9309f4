"""Shared test fixtures."""

from pathlib import Path

import pytest
from maraikka_docs.config import (
    Config,
    DocsConfig,
    LiveReloadConfig,
    ServerConfig,
    SiteConfig,
)
from maraikka_docs.core.metadata import SiteDefaults


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Create an empty documentation source directory."""
    docs = tmp_path / "content"
    docs.mkdir(exist_ok=True)
    return docs


@pytest.fixture
def site_defaults() -> SiteDefaults:
    return SiteDefaults()


@pytest.fixture
def test_config(tmp_path: Path, docs_dir: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Live reload is disabled so no file watcher is started.
    """
    return Config(
        server=ServerConfig(),
        docs=DocsConfig(source_dir=docs_dir, cache_dir=tmp_path / ".cache"),
        site=SiteConfig(),
        live_reload=LiveReloadConfig(enabled=False),
    )
