"""Index table of (hash, offset) records.

WHY: The engine locates an entry by scanning (or binary-searching, for
ascending packs) the index table for its hash, then jumping to the
payload offset. The table sits directly after the header, before any
payload, so its size must be reserved before payload lengths are known.

HOW: IndexRecord is an 8-byte (u32 hash, u32 offset) pair.
read_index_table() parses ``count`` records in file order;
reserve_index_table() and write_index_table() implement the two halves
of the two-pass writer on a seekable buffer.

RULES:
- Records are stored in entry-list order, not sorted by offset or hash
- An index table extending past end-of-file is a ContainerFormatError
- check_offset() enforces payload_start <= offset < file_end
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, List, Sequence

from foxtext_converter.core.errors import ContainerFormatError

INDEX_RECORD = struct.Struct("<II")


@dataclass(frozen=True)
class IndexRecord:
    hash: int
    offset: int


def index_table_size(count: int) -> int:
    return INDEX_RECORD.size * count


def read_index_table(data: bytes, position: int, count: int) -> List[IndexRecord]:
    """Read ``count`` index records starting at ``position``."""
    end = position + index_table_size(count)
    if end > len(data):
        raise ContainerFormatError(
            "Index table for {} entries ends at byte {}, past end of file ({} bytes)".format(
                count, end, len(data)
            )
        )
    return [
        IndexRecord(*INDEX_RECORD.unpack_from(data, position + i * INDEX_RECORD.size))
        for i in range(count)
    ]


def check_offset(record: IndexRecord, payload_start: int, file_end: int) -> None:
    """Reject records whose offset falls outside the payload region."""
    if not payload_start <= record.offset < file_end:
        raise ContainerFormatError(
            "Entry {} offset {} is outside the payload region [{}, {})".format(
                record.hash, record.offset, payload_start, file_end
            )
        )


def reserve_index_table(buffer: BinaryIO, count: int) -> int:
    """Skip over the index table region, returning where it starts.

    The region is zero-filled so the buffer length stays consistent even
    if no entry is written after it.
    """
    position = buffer.tell()
    buffer.write(b"\0" * index_table_size(count))
    return position


def write_index_table(buffer: BinaryIO, position: int, records: Sequence[IndexRecord]) -> None:
    """Backfill the reserved region and return the cursor to end-of-buffer."""
    end = buffer.tell()
    buffer.seek(position)
    for record in records:
        if record.offset > 0xFFFFFFFF:
            raise ContainerFormatError(
                "Entry {} offset {} does not fit in 32 bits".format(record.hash, record.offset)
            )
        buffer.write(INDEX_RECORD.pack(record.hash, record.offset))
    buffer.seek(end)
