"""Mapping between SubtitlePack and its editable JSON document.

WHY: Editors translate subtitles in the JSON document, not the binary.
The mapping is written out by hand so the document layout is an explicit
contract: field names, what is optional, and what is derived.

HOW: pack_to_document() renders a SubtitlePack as a plain dict.
document_to_pack() validates a dict against the subp schema, then builds
a SubtitlePack, logging non-fatal problems as warnings.

RULES:
- ``subtitleId`` is written only when the dictionary resolved the hash
- ``subtitleIdHash`` is always written; on pack it is recomputed from
  ``subtitleId`` when one is present
- Legacy headers render as {"variant": "legacy"} only
- Warnings (processing continues): stored hash disagrees with the id,
  duplicate hashes, unknown language name
- Errors (pack aborted): schema violations, unknown encoding name
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from foxtext_converter import config
from foxtext_converter.core.errors import DocumentValidationError
from foxtext_converter.core.ir import (
    SORT_ORDER_NAMES,
    ContainerHeader,
    SortOrder,
    SubtitleEntry,
    SubtitleLine,
    SubtitlePack,
    sort_order_from_name,
)
from foxtext_converter.core.strcode import strcode32
from foxtext_converter.documents.schema import validate_document

logger = logging.getLogger(__name__)

FORMAT_NAME = "subp"


def _header_to_dict(header: ContainerHeader) -> Dict[str, Any]:
    if header.variant == "legacy":
        return {"variant": "legacy"}
    result: Dict[str, Any] = {
        "variant": header.variant,
        "sortOrder": SORT_ORDER_NAMES[SortOrder(header.sort_order)],
        "version": header.version,
    }
    if header.language_id is not None:
        name = config.language_name(header.language_id)
        if name is not None:
            result["language"] = name
        result["languageId"] = header.language_id
    result["voice"] = header.voice
    return result


def _header_from_dict(data: Dict[str, Any]) -> ContainerHeader:
    if data["variant"] == "legacy":
        return ContainerHeader(variant="legacy")

    language_id = data.get("languageId")
    language = data.get("language")
    if language_id is None and language is not None:
        language_id = config.language_id(language.lower())
        if language_id is None:
            logger.warning("Unknown header language '%s'; the header will carry no language", language)
    elif language_id is not None and language is not None:
        if config.language_name(language_id) != language.lower():
            logger.warning(
                "Header language '%s' disagrees with languageId %d; using languageId",
                language, language_id,
            )

    return ContainerHeader(
        variant="tagged",
        sort_order=sort_order_from_name(data.get("sortOrder", "none")),
        version=data.get("version", 0),
        language_id=language_id,
        voice=data.get("voice", 0),
    )


def pack_to_document(pack: SubtitlePack) -> Dict[str, Any]:
    """Render a SubtitlePack as a JSON-ready dict."""
    entries: List[Dict[str, Any]] = []
    for entry in pack.entries:
        item: Dict[str, Any] = {}
        if entry.identifier is not None:
            item["subtitleId"] = entry.identifier
        item["subtitleIdHash"] = entry.hash
        item["lines"] = [
            {"start": line.start, "end": line.end, "text": line.text}
            for line in entry.lines
        ]
        entries.append(item)

    document: Dict[str, Any] = {"format": FORMAT_NAME}
    if pack.encoding:
        document["encoding"] = pack.encoding
    document["header"] = _header_to_dict(pack.header)
    document["entries"] = entries
    return document


def document_to_pack(document: Any) -> SubtitlePack:
    """Validate a subtitle document and build the SubtitlePack it describes.

    Raises:
        DocumentValidationError: Schema violation or unknown encoding.
    """
    validate_document(document, FORMAT_NAME)

    encoding = document.get("encoding")
    if encoding is not None:
        try:
            encoding = config.normalize_encoding(encoding)
        except ValueError as e:
            raise DocumentValidationError(str(e), "$.encoding") from e

    entries: List[SubtitleEntry] = []
    seen: Dict[int, int] = {}
    for i, item in enumerate(document["entries"]):
        identifier = item.get("subtitleId")
        stored = item["subtitleIdHash"]
        effective = stored
        if identifier is not None:
            effective = strcode32(identifier)
            if effective != stored:
                logger.warning(
                    "Entry %d: subtitleIdHash %d does not match subtitleId '%s' (%d); using %d",
                    i, stored, identifier, effective, effective,
                )
        if effective in seen:
            logger.warning("Entry %d: hash %d duplicates entry %d", i, effective, seen[effective])
        else:
            seen[effective] = i

        lines = [
            SubtitleLine(start=line["start"], end=line["end"], text=line["text"])
            for line in item["lines"]
        ]
        entries.append(SubtitleEntry(hash=stored, identifier=identifier, lines=lines))

    return SubtitlePack(
        header=_header_from_dict(document["header"]),
        entries=entries,
        encoding=encoding,
    )
