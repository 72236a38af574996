"""Typed exceptions for container, payload, and document failures.

WHY: A batch run converts many files. Callers need to tell a corrupt
container apart from a bad intermediate document or an encoding problem,
fail that one file cleanly, and carry on with the next.

HOW: One base class, FoxTextError, with a subclass per failure family.
Each subclass also derives from the closest built-in exception so
generic ``except ValueError`` handlers keep working.

RULES:
- ContainerFormatError: discriminator, count, offset, or truncation problems
- EntryEncodingError: payload text that cannot be decoded/encoded in the
  active encoding, never substituted with replacement characters
- DocumentValidationError: the intermediate document fails its schema
- An unreadable dictionary is NOT an error (see core.dictionary)
"""

from __future__ import annotations


class FoxTextError(Exception):
    """Base class for every converter failure that aborts one file."""


class ContainerFormatError(FoxTextError, ValueError):
    """Raised when a binary container is malformed or cannot be laid out.

    WHY: A bad magic number or an index offset pointing outside the
    payload region means the file is corrupt; guessing would produce
    garbage documents.

    HOW: Raised by the header, index, and entry readers as soon as the
    inconsistency is seen, with the stream position where it was found.

    RULES:
    - Fatal for the current file
    - Message names the offending value and the valid range where one exists
    """


class EntryEncodingError(FoxTextError, UnicodeError):
    """Raised when entry text does not fit the active text encoding.

    WHY: Silently replacing bytes would corrupt subtitles on the next pack.

    HOW: Wraps the underlying UnicodeError together with the entry hash
    and the encoding that failed.
    """

    def __init__(self, entry_hash: int, encoding: str, reason: str) -> None:
        self.entry_hash = entry_hash
        self.encoding = encoding
        self.reason = reason
        super().__init__(
            "Entry {} cannot be converted with encoding '{}': {}".format(
                entry_hash, encoding, reason
            )
        )


class DocumentValidationError(FoxTextError, ValueError):
    """Raised when an intermediate JSON document fails schema validation.

    RULES:
    - ``path`` is the JSON path of the first failing element ("$" for root)
    """

    def __init__(self, message: str, path: str = "$") -> None:
        self.path = path
        super().__init__("Invalid document at {}: {}".format(path, message))
