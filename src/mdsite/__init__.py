"""mdsite - static HTML sites from a directory of Markdown content."""

__version__ = "0.1.0"
