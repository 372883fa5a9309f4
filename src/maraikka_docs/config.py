"""Configuration management for maraikka-docs.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from maraikka_docs.core.metadata import ImageDescriptor, SiteDefaults

CONFIG_FILENAME = "maraikka-docs.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class DocsConfig:
    """Documentation configuration."""

    source_dir: Path = field(default_factory=lambda: Path("content"))
    cache_dir: Path = field(default_factory=lambda: Path(".cache"))
    cache_enabled: bool = True


@dataclass
class SiteConfig:
    """Site branding and metadata configuration."""

    defaults: SiteDefaults = field(default_factory=SiteDefaults)
    home_url: str = "https://maraikka.com"
    project_link: str = "https://github.com/puzzlers-labs/maraikka"
    repository_base: str | None = "https://github.com/puzzlers-labs/maraikka-docs/tree/main"
    # Location of the source directory inside the repository ("" for its root)
    docs_path: str = "content"
    contact_url: str = "https://maraikka.com/contact"
    trailing_slash: bool = True


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True
    watch_patterns: list[str] | None = None


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    docs: DocsConfig
    site: SiteConfig
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for maraikka-docs.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            docs=DocsConfig(),
            site=SiteConfig(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            docs=cls._parse_docs(data.get("docs"), config_dir),
            site=cls._parse_site(data.get("site")),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section."""
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_docs(cls, data: object, config_dir: Path) -> DocsConfig:
        """Parse docs configuration section.

        Args:
            data: Raw docs section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            DocsConfig instance
        """
        if data is None:
            return DocsConfig(
                source_dir=config_dir / "content",
                cache_dir=config_dir / ".cache",
            )

        if not isinstance(data, dict):
            raise ValueError("docs section must be a dictionary")

        source_dir = data.get("source_dir", "content")
        if not isinstance(source_dir, str):
            raise ValueError("docs.source_dir must be a string")

        cache_dir = data.get("cache_dir", ".cache")
        if not isinstance(cache_dir, str):
            raise ValueError("docs.cache_dir must be a string")

        cache_enabled = data.get("cache_enabled", True)
        if not isinstance(cache_enabled, bool):
            raise ValueError("docs.cache_enabled must be a boolean")

        return DocsConfig(
            source_dir=config_dir / source_dir,
            cache_dir=config_dir / cache_dir,
            cache_enabled=cache_enabled,
        )

    @classmethod
    def _parse_site(cls, data: object) -> SiteConfig:
        """Parse site configuration section.

        Metadata defaults (title, description, social images, ...) live at
        the top level of the section next to the branding links.

        Args:
            data: Raw site section data

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        base = SiteDefaults()
        defaults = SiteDefaults(
            title=_get_str(data, "title", base.title),
            title_template=_get_str(data, "title_template", base.title_template),
            description=_get_str(data, "description", base.description),
            site_name=_get_str(data, "site_name", base.site_name),
            locale=_get_str(data, "locale", base.locale),
            base_url=_get_str(data, "base_url", base.base_url).rstrip("/"),
            author=_get_str(data, "author", base.author),
            twitter_creator=_get_str(data, "twitter_creator", base.twitter_creator),
            keywords=_get_keywords(data, base.keywords),
            og_image=_get_image(data, base.og_image),
            twitter_image=_get_str(data, "twitter_image", base.twitter_image),
        )
        if "%s" not in defaults.title_template:
            raise ValueError("site.title_template must contain %s")

        site = SiteConfig()
        repository_base = data.get("repository_base", site.repository_base)
        if repository_base is not None and not isinstance(repository_base, str):
            raise ValueError("site.repository_base must be a string")

        trailing_slash = data.get("trailing_slash", site.trailing_slash)
        if not isinstance(trailing_slash, bool):
            raise ValueError("site.trailing_slash must be a boolean")

        return SiteConfig(
            defaults=defaults,
            home_url=_get_str(data, "home_url", site.home_url),
            project_link=_get_str(data, "project_link", site.project_link),
            repository_base=repository_base or None,
            docs_path=_get_str(data, "docs_path", site.docs_path).strip("/"),
            contact_url=_get_str(data, "contact_url", site.contact_url),
            trailing_slash=trailing_slash,
        )

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section."""
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        watch_patterns_raw = data.get("watch_patterns")
        watch_patterns: list[str] | None = None
        if watch_patterns_raw is not None:
            if not isinstance(watch_patterns_raw, list):
                raise ValueError("live_reload.watch_patterns must be a list")
            watch_patterns = []
            for item in watch_patterns_raw:
                if not isinstance(item, str):
                    raise ValueError("live_reload.watch_patterns items must be strings")
                watch_patterns.append(item)

        return LiveReloadConfig(enabled=enabled, watch_patterns=watch_patterns)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_dir: Path | None = None,
        cache_dir: Path | None = None,
        cache_enabled: bool | None = None,
        live_reload_enabled: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source_dir: Override docs.source_dir
            cache_dir: Override docs.cache_dir
            cache_enabled: Override docs.cache_enabled
            live_reload_enabled: Override live_reload.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        docs = self.docs
        if source_dir is not None or cache_dir is not None or cache_enabled is not None:
            docs = replace(
                self.docs,
                source_dir=source_dir if source_dir is not None else self.docs.source_dir,
                cache_dir=cache_dir if cache_dir is not None else self.docs.cache_dir,
                cache_enabled=cache_enabled if cache_enabled is not None else self.docs.cache_enabled,
            )

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(self, server=server, docs=docs, live_reload=live_reload)


def _get_str(data: dict[str, object], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f"site.{key} must be a string")
    return value


def _get_keywords(data: dict[str, object], default: tuple[str, ...]) -> tuple[str, ...]:
    value = data.get("keywords")
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError("site.keywords must be a list of strings")
    return tuple(value)


def _get_image(data: dict[str, object], default: ImageDescriptor) -> ImageDescriptor:
    value = data.get("og_image")
    if value is None:
        return default
    if not isinstance(value, dict):
        raise ValueError("site.og_image must be a table")

    url = value.get("url")
    if not isinstance(url, str):
        raise ValueError("site.og_image.url must be a string")

    width = value.get("width", default.width)
    height = value.get("height", default.height)
    if not isinstance(width, int) or not isinstance(height, int):
        raise ValueError("site.og_image width and height must be integers")

    alt = value.get("alt", default.alt)
    if alt is not None and not isinstance(alt, str):
        raise ValueError("site.og_image.alt must be a string")

    return ImageDescriptor(url=url, width=width, height=height, alt=alt)
