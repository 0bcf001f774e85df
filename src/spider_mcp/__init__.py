"""Spider API tools for the Model Context Protocol."""

__version__ = "1.2.1"
