"""Subtitle pack converter (.subp ⇄ JSON).

WHY: Bridges the subtitle-pack codec and the subtitle document mapper
behind the BaseConverter interface so the CLI can treat it like any
other container kind.

HOW: unpack() decodes the container with the run's dictionary and
requested encoding, renders the document, and optionally lists the
unique subtitle-id hashes. pack() validates the document and encodes it.

RULES:
- Unpack output suffix: ".json" (document), "_subpIdHashes.txt" (hashes)
- Hash export: unique decimal hashes, numerically sorted, one per line
- Pack output suffix: ".subp"
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from foxtext_converter import config
from foxtext_converter.codec.subp import read_subtitle_pack, write_subtitle_pack
from foxtext_converter.converters.base import BaseConverter, ConverterOptions, ConverterOutput
from foxtext_converter.core.dictionary import HashDictionary
from foxtext_converter.documents.schema import dump_document
from foxtext_converter.documents.subp_document import document_to_pack, pack_to_document


class SubpConverter(BaseConverter):
    """Converter for Fox Engine subtitle packs."""

    @property
    def name(self) -> str:
        return "Subtitle pack"

    @property
    def extensions(self) -> Tuple[str, ...]:
        return (".subp",)

    @property
    def dictionary_path(self) -> str:
        return config.SUBP_DICTIONARY_PATH

    def unpack(
        self,
        data: bytes,
        dictionary: Optional[HashDictionary],
        options: ConverterOptions,
    ) -> List[ConverterOutput]:
        pack = read_subtitle_pack(data, dictionary, options.encoding)
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
                    suffix="_subpIdHashes.txt",
                    content="".join("{}\n".format(code) for code in hashes),
                    media_type="text/plain",
                )
            )
        return outputs

    def pack(self, document: Any, options: ConverterOptions) -> List[ConverterOutput]:
        pack = document_to_pack(document)
        return [
            ConverterOutput(
                suffix=".subp",
                content=write_subtitle_pack(pack, options.encoding),
                media_type="application/octet-stream",
            )
        ]
