"""Asset discovery for bundled templates.

Locates the page template shipped inside the mdsite package.
"""

from importlib.resources import files
from pathlib import Path


def get_template_dir() -> Path:
    """Return path to bundled templates.

    Returns:
        Path to the directory containing the page template.

    Raises:
        FileNotFoundError: If templates are not bundled.
    """
    templates = files("mdsite").joinpath("templates")
    if not templates.is_dir():
        msg = "Bundled templates not found. Reinstall mdsite with 'pip install -e .'."
        raise FileNotFoundError(msg)
    return Path(str(templates))
