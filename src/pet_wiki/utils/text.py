"""Text processing utilities for Pet Wiki."""

import re
import unicodedata
from typing import Optional, Tuple

# German characters are transliterated before slug normalization
_UMLAUTS = {"ä": "ae", "ö": "oe", "ü": "ue", "ß": "ss"}


def clean_text(text: Optional[str]) -> str:
    """
    Tidy prose coming from the JSON exports.

    Unicode is NFKC-normalized and control characters are dropped, keeping
    newlines and tabs. Runs of spaces collapse to one space and paragraphs
    are separated by at most one blank line.
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFKC", text)
    text = "".join(
        char for char in text if char in "\n\t" or not unicodedata.category(char).startswith("C")
    )
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def truncate_text(text: str, max_length: int = 150, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length, preserving word boundaries.

    Args:
        text: Text to truncate
        max_length: Maximum length of output
        suffix: Suffix to add when truncating

    Returns:
        Truncated text
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)
    if truncate_at <= 0:
        return suffix

    # Find the last space before the truncation point
    last_space = text.rfind(" ", 0, truncate_at)
    if last_space > 0:
        truncate_at = last_space

    return text[:truncate_at].rstrip() + suffix


def slugify(value: str) -> str:
    """
    Build a URL slug from a German display name or title.

    ``"Deutscher Schäferhund"`` becomes ``"deutscher-schaeferhund"``.

    Args:
        value: Display name to convert

    Returns:
        Lowercase slug made of ``a-z``, ``0-9`` and single dashes
    """
    if not value:
        return ""

    slug = value.lower()
    slug = re.sub(r"[äöüß]", lambda m: _UMLAUTS[m.group(0)], slug)
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")


def normalize_image_path(path: Optional[str]) -> Optional[str]:
    """
    Make a stored image path root-relative.

    Remote URLs and paths that already start with ``/`` are returned as-is.
    """
    if not path:
        return path
    if path.startswith(("/", "http")):
        return path
    return f"/{path}"


def image_src(path: Optional[str], placeholder: str = "/images/placeholder-pet.jpg") -> str:
    """Resolve the image URL used for a card, falling back to a placeholder."""
    if not path:
        return placeholder
    return normalize_image_path(path)


def collation_key(value: Optional[str]) -> Tuple[str, str]:
    """
    Sort key approximating a locale-aware string comparison.

    Accents are folded onto their base letters and case is ignored, so
    ``"Ägyptische Mau"`` sorts next to ``"Afghane"`` instead of after ``"Z"``.
    Names equal after folding are ordered lowercase first, then by the
    remaining code points, so the ordering stays total.
    """
    if not value:
        return ("", "")

    decomposed = unicodedata.normalize("NFKD", value)
    folded = "".join(char for char in decomposed if not unicodedata.combining(char))
    return (folded.casefold(), value.swapcase())
