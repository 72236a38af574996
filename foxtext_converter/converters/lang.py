"""Language pack converter (.lng/.lng2 ⇄ JSON).

WHY: Same role as SubpConverter for language packs.

HOW: unpack() decodes with the run's dictionary; pack() validates and
encodes. Language packs are always UTF-8, so the requested encoding is
ignored.

RULES:
- Unpack output suffix: ".json" (document), "_langIdHashes.txt" (hashes)
- Hash export: unique lowercase hex hashes, numerically sorted
- Pack output suffix: ".lng" for version 2, ".lng2" for version 3
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from foxtext_converter import config
from foxtext_converter.codec.lang import read_lang_pack, write_lang_pack
from foxtext_converter.converters.base import BaseConverter, ConverterOptions, ConverterOutput
from foxtext_converter.core.dictionary import HashDictionary
from foxtext_converter.documents.lang_document import document_to_pack, pack_to_document
from foxtext_converter.documents.schema import dump_document

logger = logging.getLogger(__name__)


class LangConverter(BaseConverter):
    """Converter for Fox Engine language packs."""

    @property
    def name(self) -> str:
        return "Language pack"

    @property
    def extensions(self) -> Tuple[str, ...]:
        return (".lng", ".lng2")

    @property
    def dictionary_path(self) -> str:
        return config.LANG_DICTIONARY_PATH

    def unpack(
        self,
        data: bytes,
        dictionary: Optional[HashDictionary],
        options: ConverterOptions,
    ) -> List[ConverterOutput]:
        if options.encoding:
            logger.info("Language packs are always %s; ignoring requested encoding", config.LANG_ENCODING)
        pack = read_lang_pack(data, dictionary)
        outputs = [
            ConverterOutput(
                suffix=".json",
                content=dump_document(pack_to_document(pack)),
                media_type="application/json",
            )
        ]
        if options.output_hashes:
            hashes = sorted({entry.hash for entry in pack.entries})
            outputs.append(
                ConverterOutput(
                    suffix="_langIdHashes.txt",
                    content="".join("{:x}\n".format(code) for code in hashes),
                    media_type="text/plain",
                )
            )
        return outputs

    def pack(self, document: Any, options: ConverterOptions) -> List[ConverterOutput]:
        pack = document_to_pack(document)
        return [
            ConverterOutput(
                suffix=".lng" if pack.version == 2 else ".lng2",
                content=write_lang_pack(pack),
                media_type="application/octet-stream",
            )
        ]
