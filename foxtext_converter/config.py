"""Configuration constants, language/encoding tables, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The language-id table, the per-language text
encodings, and the default dictionary paths are plain data structures,
not buried in codec logic, so they can be changed confidently.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level dicts and strings. Helper functions map language names
and numeric language ids to Python codec names.

RULES:
- LANGUAGE_IDS maps the header's 8-bit language id → three-letter name
- LANGUAGE_ENCODINGS maps three-letter name → Python codec name
- Unknown ids and names fall back to DEFAULT_ENCODING
- Language packs are always UTF-8 (LANG_ENCODING)
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import codecs
import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Language ids (tagged subtitle-pack header) and text encodings
# ---------------------------------------------------------------------------

LANGUAGE_IDS: dict[int, str] = {
    0: "jpn",
    1: "eng",
    2: "fre",
    3: "ita",
    4: "ger",
    5: "spa",
    6: "por",
    7: "rus",
    8: "ara",
}

LANGUAGE_ENCODINGS: dict[str, str] = {
    "jpn": "utf-8",
    "ara": "utf-8",
    "por": "utf-8",
    "rus": "iso-8859-5",
    "eng": "iso-8859-1",
    "fre": "iso-8859-1",
    "ger": "iso-8859-1",
    "ita": "iso-8859-1",
    "spa": "iso-8859-1",
}

DEFAULT_ENCODING = os.getenv("FOXTEXT_DEFAULT_ENCODING", "iso-8859-1")
"""Encoding used when neither header, caller, nor document picks one."""

LANG_ENCODING = "utf-8"
"""Language packs carry UTF-8 text regardless of language."""


def language_name(language_id: int) -> str | None:
    """Return the three-letter name for a header language id, or None."""
    return LANGUAGE_IDS.get(language_id)


def language_id(name: str) -> int | None:
    """Return the header language id for a three-letter name, or None."""
    for key, value in LANGUAGE_IDS.items():
        if value == name:
            return key
    return None


def map_language_encoding(language: str | int | None) -> str:
    """Map a language name or numeric id to a Python codec name.

    WHY: The tagged header carries a numeric id; the CLI accepts names
    like "rus". Both must land on the same encoding table.

    HOW: Numeric ids go through LANGUAGE_IDS first, then the name is
    looked up in LANGUAGE_ENCODINGS.

    RULES:
    - Known languages map to their table entry
    - Unknown or None fall back to DEFAULT_ENCODING
    """
    if isinstance(language, int):
        language = language_name(language)
    if language is None:
        return DEFAULT_ENCODING
    return LANGUAGE_ENCODINGS.get(language.lower(), DEFAULT_ENCODING)


def normalize_encoding(value: str) -> str:
    """Turn a CLI/document encoding selector into a canonical codec name.

    Accepts a language name ("rus", "-rus") or any Python codec name.

    Raises:
        ValueError: If the value is neither a known language nor a codec.
    """
    selector = value.strip().lstrip("-").lower()
    if selector in LANGUAGE_ENCODINGS:
        return LANGUAGE_ENCODINGS[selector]
    try:
        return codecs.lookup(selector).name
    except LookupError:
        raise ValueError(
            "Unknown encoding '{}'. Use a language ({}) or a codec name.".format(
                value, ", ".join(sorted(LANGUAGE_ENCODINGS))
            )
        ) from None


# ---------------------------------------------------------------------------
# Dictionary word lists
# ---------------------------------------------------------------------------

SUBP_DICTIONARY_PATH = os.getenv("FOXTEXT_SUBP_DICTIONARY", "subp_dictionary.txt")
LANG_DICTIONARY_PATH = os.getenv("FOXTEXT_LANG_DICTIONARY", "lang_dictionary.txt")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("FOXTEXT_LOG_LEVEL", "WARNING").upper()
