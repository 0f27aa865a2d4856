"""Utility modules for Pet Wiki."""

from pet_wiki.utils.logging import get_logger, setup_logging
from pet_wiki.utils.text import (
    clean_text,
    collation_key,
    image_src,
    normalize_image_path,
    slugify,
    truncate_text,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "clean_text",
    "collation_key",
    "image_src",
    "normalize_image_path",
    "slugify",
    "truncate_text",
]
