"""Shared read and two-pass write algorithms for hash-indexed containers.

WHY: Subtitle packs and language packs differ only in header layout and
entry payload; the index walk on read and the reserve/lay-out/backfill
dance on write are identical. Keeping them here means both converters
get the same bounds checks and the same ordering rules.

HOW: read_entries() walks the index table in file order, bounds-checks
each offset, and hands every record to a payload decoder.
refresh_hashes() recomputes hashes from identifiers. write_entries()
optionally sorts by hash, reserves the index region, appends payloads
while recording offsets, then backfills the index.

RULES:
- Every index record yields exactly one entry, in table order
- Offsets outside [payload_start, file_end) abort the read
- Hashes are refreshed from identifiers before sorting, so the sort sees
  the hashes that end up on disk
- Ascending order is a stable sort on the unsigned hash
- Index records are written in the same order as the payloads
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Callable, List, Optional, Sequence, TypeVar

from foxtext_converter.codec.index import (
    IndexRecord,
    check_offset,
    index_table_size,
    read_index_table,
    reserve_index_table,
    write_index_table,
)
from foxtext_converter.core.dictionary import HashDictionary
from foxtext_converter.core.strcode import strcode32

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT")


def read_entries(
    data: bytes,
    header_size: int,
    count: int,
    decode: Callable[[bytes, IndexRecord], EntryT],
    dictionary: Optional[HashDictionary] = None,
) -> List[EntryT]:
    """Decode every entry referenced by the index table.

    Args:
        data: The complete container bytes.
        header_size: Where the index table starts.
        count: Entry count from the header.
        decode: Payload decoder called as decode(data, record).
        dictionary: Optional reverse lookup for identifiers.

    Returns:
        Entries in index-table order, identifiers resolved where possible.
    """
    records = read_index_table(data, header_size, count)
    payload_start = header_size + index_table_size(count)
    file_end = len(data)

    entries: List[EntryT] = []
    resolved = 0
    for record in records:
        check_offset(record, payload_start, file_end)
        entry = decode(data, record)
        if dictionary is not None:
            identifier = dictionary.resolve(record.hash)
            if identifier is not None:
                entry.identifier = identifier
                resolved += 1
        entries.append(entry)

    logger.debug("Read %d entries, %d identifiers resolved", len(entries), resolved)
    return entries


def refresh_hashes(entries: Sequence, encoding: str = "utf-8") -> None:
    """Recompute each entry's hash from its identifier, in place."""
    for entry in entries:
        if entry.identifier:
            code = strcode32(entry.identifier, encoding)
            if code != entry.hash:
                logger.debug(
                    "Hash of '%s' updated from %d to %d", entry.identifier, entry.hash, code
                )
            entry.hash = code


def order_entries(entries: Sequence[EntryT], ascending: bool) -> List[EntryT]:
    """Return entries in write order (stable ascending sort when requested)."""
    if ascending:
        return sorted(entries, key=lambda entry: entry.hash & 0xFFFFFFFF)
    return list(entries)


def write_entries(
    buffer: BinaryIO,
    entries: Sequence[EntryT],
    encode: Callable[[BinaryIO, EntryT], None],
    ascending: bool = False,
) -> List[EntryT]:
    """Lay out index table and payloads on ``buffer`` (two-pass).

    WHY: Payload sizes are unknown until encoded, so offsets can only be
    written after every payload is in place.

    HOW: Pass one reserves 8 bytes per entry and appends payloads while
    recording (hash, offset). Pass two seeks back and writes the records.

    Args:
        buffer: Seekable output positioned just after the header.
        entries: Entries to write; hashes must already be refreshed.
        encode: Payload encoder called as encode(buffer, entry).
        ascending: Sort by hash before writing.

    Returns:
        The entries in the order they were written.
    """
    ordered = order_entries(entries, ascending)
    index_position = reserve_index_table(buffer, len(ordered))

    records: List[IndexRecord] = []
    for entry in ordered:
        records.append(IndexRecord(entry.hash, buffer.tell()))
        encode(buffer, entry)

    write_index_table(buffer, index_position, records)
    return ordered
