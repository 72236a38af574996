"""Text-encoding resolution for subtitle-pack payloads.

WHY: A subtitle pack's text may be Latin-1, Cyrillic ISO-8859-5, or UTF-8
depending on language, and several sources may claim to know which: the
container header, the user on the command line, and the JSON document.
Exactly one encoding must win for the whole container.

HOW: resolve_encoding() walks the sources in precedence order and returns
the first that applies, canonicalised through codecs.lookup().

RULES:
- Precedence: authoritative header > caller > document > DEFAULT_ENCODING
- The header is authoritative only for tagged headers with ASCENDING sort
  order (ContainerHeader.encoding_authoritative)
- One encoding per container, never per entry
"""

from __future__ import annotations

import codecs
import logging
from typing import Optional

from foxtext_converter import config
from foxtext_converter.core.ir import ContainerHeader

logger = logging.getLogger(__name__)


def canonical_encoding(name: str) -> str:
    """Return Python's canonical codec name for ``name``."""
    return codecs.lookup(name).name


def resolve_encoding(
    header: Optional[ContainerHeader] = None,
    requested: Optional[str] = None,
    declared: Optional[str] = None,
) -> str:
    """Pick the single text encoding for one container.

    Args:
        header: The container header, when one has been read or built.
        requested: Encoding the caller asked for (CLI --encoding).
        declared: Encoding stored on the intermediate document.

    Returns:
        A canonical Python codec name.
    """
    if header is not None and header.encoding_authoritative:
        source, encoding = "header", config.map_language_encoding(header.language_id)
    elif requested:
        source, encoding = "caller", requested
    elif declared:
        source, encoding = "document", declared
    else:
        source, encoding = "default", config.DEFAULT_ENCODING

    resolved = canonical_encoding(encoding)
    logger.debug("Using %s encoding %s", source, resolved)
    return resolved
