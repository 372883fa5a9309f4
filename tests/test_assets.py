"""Tests for assets module."""

import pytest
from maraikka_docs.assets import get_static_dir, get_templates_dir


class TestGetStaticDir:
    """Tests for get_static_dir()."""

    def test__bundled_assets_exist__returns_path(self) -> None:
        """Bundled stylesheet should be accessible."""
        static_dir = get_static_dir()

        assert (static_dir / "site.css").is_file()

    def test__static_not_directory__raises_file_not_found_error(
        self,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Should raise FileNotFoundError when static directory doesn't exist."""

        class FakeTraversable:
            def is_dir(self) -> bool:
                return False

            def joinpath(self, name: str) -> "FakeTraversable":
                return self

        monkeypatch.setattr("maraikka_docs.assets.files", lambda _: FakeTraversable())

        with pytest.raises(FileNotFoundError, match="Bundled static directory not found"):
            get_static_dir()


class TestGetTemplatesDir:
    """Tests for get_templates_dir()."""

    def test__bundled_templates_exist__returns_path(self) -> None:
        templates_dir = get_templates_dir()

        assert {"base.html", "page.html", "not_found.html"} <= {
            path.name for path in templates_dir.iterdir()
        }
