"""Vault loading, identifier arithmetic and parsing utilities."""

from .ids import (
    file_to_id,
    first_available_id,
    first_child_of,
    increment_id,
    is_zettel_file,
    parent_id,
)
from .loader import Vault, load_vault
from .parser import extract_links, format_link

__all__ = [
    "file_to_id",
    "first_available_id",
    "first_child_of",
    "increment_id",
    "is_zettel_file",
    "parent_id",
    "Vault",
    "load_vault",
    "extract_links",
    "format_link",
]
