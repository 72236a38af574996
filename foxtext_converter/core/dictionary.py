"""Reverse-lookup dictionary from StrCode32 hashes to identifiers.

WHY: Containers store only hashes. To show editors readable ids such as
"gz_cassette_001" instead of 3735928559, we hash every candidate from a
word list and look the stored hash up. Missing candidates stay hash-only.

HOW: HashDictionary.build() reads a newline-delimited word list, hashes
each non-empty line with strcode32(), and stores hash → line with
last-write-wins on collision. The mapping is frozen behind a
MappingProxyType so one instance can be shared across a whole batch.

RULES:
- Empty lines are skipped; lines are taken verbatim otherwise
- Collisions: the later line wins; the overwrite is logged at DEBUG
- Unreadable or undecodable word list → empty dictionary, WARNING logged,
  ``load_error`` set; the run continues
- No mutation after construction
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from foxtext_converter.core.strcode import strcode32

logger = logging.getLogger(__name__)


class HashDictionary:
    """Immutable hash → identifier mapping built once per run."""

    def __init__(
        self,
        mapping: Optional[Mapping[int, str]] = None,
        source: Optional[Path] = None,
        load_error: Optional[str] = None,
    ) -> None:
        self._mapping = MappingProxyType(dict(mapping or {}))
        self.source = source
        self.load_error = load_error

    @classmethod
    def from_words(cls, words: Iterable[str], encoding: str = "utf-8") -> HashDictionary:
        """Build a dictionary from an in-memory sequence of candidate ids."""
        mapping: dict[int, str] = {}
        for word in words:
            if not word:
                continue
            code = strcode32(word, encoding)
            previous = mapping.get(code)
            if previous is not None and previous != word:
                logger.debug(
                    "StrCode32 collision detected (%d). Overwriting '%s' with '%s'",
                    code, previous, word,
                )
            mapping[code] = word
        return cls(mapping)

    @classmethod
    def build(cls, path: str | Path, encoding: str = "utf-8") -> HashDictionary:
        """Build a dictionary from a word-list file.

        WHY: The word list is the only way to recover identifiers; losing
        it must not stop conversion, only degrade output to raw hashes.

        HOW: Reads the file as text, splits lines, delegates to
        from_words(). I/O and decode failures are caught and reported.

        Args:
            path: Word-list file, one candidate identifier per line.
            encoding: Text encoding of the word list and of the hashed ids.

        Returns:
            A populated dictionary, or an empty one with ``load_error`` set.
        """
        source = Path(path)
        try:
            lines = source.read_text(encoding=encoding).splitlines()
        except (OSError, UnicodeDecodeError) as e:
            message = "Unable to read the dictionary {}: {}".format(source, e)
            logger.warning(message)
            return cls(source=source, load_error=message)

        built = cls.from_words(lines, encoding)
        logger.info("Loaded %d dictionary entries from %s", len(built), source)
        return cls(built._mapping, source=source)

    def resolve(self, code: int) -> Optional[str]:
        """Return the identifier for ``code``, or None when unknown."""
        return self._mapping.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:
        return "HashDictionary({} entries, source={!r})".format(len(self), self.source)
