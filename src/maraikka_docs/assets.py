"""Asset discovery for bundled templates and static files.

Locates the HTML templates and stylesheets shipped inside the package.
"""

from importlib.resources import files
from pathlib import Path


def get_static_dir() -> Path:
    """Return path to bundled static assets.

    Returns:
        Path to the static directory containing stylesheets and images.

    Raises:
        FileNotFoundError: If static assets are not bundled.
    """
    return _package_dir("static")


def get_templates_dir() -> Path:
    """Return path to bundled Jinja2 templates.

    Raises:
        FileNotFoundError: If templates are not bundled.
    """
    return _package_dir("templates")


def _package_dir(name: str) -> Path:
    resource = files("maraikka_docs").joinpath(name)
    if not resource.is_dir():
        msg = f"Bundled {name} directory not found. Reinstall the maraikka-docs package."
        raise FileNotFoundError(msg)
    return Path(str(resource))
