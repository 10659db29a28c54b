"""luhmann - identifier algebra and tree tools for a Luhmann-style Zettelkasten."""

__version__ = "0.1.0"
