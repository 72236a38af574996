"""Mapping between LangPack and its editable JSON document.

WHY: Same role as subp_document for language packs: a hand-written,
explicit document layout for UI strings.

HOW: pack_to_document() / document_to_pack(), validated against the
lang schema.

RULES:
- ``langId`` is written only when the dictionary resolved the key
- ``key`` is recomputed from ``langId`` on pack when one is present
- ``color`` defaults to 0 when omitted
- Duplicate keys and key/langId mismatches are warnings
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from foxtext_converter.core.ir import SORT_ORDER_NAMES, LangEntry, LangPack, SortOrder, sort_order_from_name
from foxtext_converter.core.strcode import strcode32
from foxtext_converter.documents.schema import validate_document

logger = logging.getLogger(__name__)

FORMAT_NAME = "lang"


def pack_to_document(pack: LangPack) -> Dict[str, Any]:
    entries: List[Dict[str, Any]] = []
    for entry in pack.entries:
        item: Dict[str, Any] = {}
        if entry.identifier is not None:
            item["langId"] = entry.identifier
        item["key"] = entry.hash
        item["color"] = entry.color
        item["value"] = entry.text
        entries.append(item)
    return {
        "format": FORMAT_NAME,
        "version": pack.version,
        "sortOrder": SORT_ORDER_NAMES[SortOrder(pack.sort_order)],
        "entries": entries,
    }


def document_to_pack(document: Any) -> LangPack:
    """Validate a language document and build the LangPack it describes."""
    validate_document(document, FORMAT_NAME)

    entries: List[LangEntry] = []
    seen: Dict[int, int] = {}
    for i, item in enumerate(document["entries"]):
        identifier = item.get("langId")
        key = item["key"]
        effective = key
        if identifier is not None:
            effective = strcode32(identifier)
            if effective != key:
                logger.warning(
                    "Entry %d: key %d does not match langId '%s' (%d); using %d",
                    i, key, identifier, effective, effective,
                )
        if effective in seen:
            logger.warning("Entry %d: key %d duplicates entry %d", i, effective, seen[effective])
        else:
            seen[effective] = i
        entries.append(
            LangEntry(hash=key, identifier=identifier, color=item.get("color", 0), text=item["value"])
        )

    return LangPack(
        version=document["version"],
        sort_order=sort_order_from_name(document.get("sortOrder", "none")),
        entries=entries,
    )
