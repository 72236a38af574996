"""Command-line interface for the Fox Engine text-pack converter.

WHY: Modders need to turn .subp/.lng/.lng2 files into editable JSON and
back from a terminal, usually for whole folders at once. The CLI wires
file reading, dictionary loading, the converter registry, and file saving
behind a single command.

HOW: Uses argparse to accept one or more paths, an encoding selector, a
dictionary override, a hash-export toggle, and an output directory. The
direction is chosen per file by extension: binary containers unpack to
``<name>.json``; ``.json`` documents pack back to binary. Status messages
go to stderr; diagnostics go through logging.

RULES:
- Files are processed one at a time; a failing file is reported and the
  batch continues; exit status is 1 if any file failed
- Output files are written only after the whole file converted
- Packed output keeps the document stem; a container extension in the stem
  that disagrees with the packed kind is replaced
- Dictionaries are built at most once per path per run and shared read-only
- Legacy switches (-eng, -rus, ..., -OutputHashes, -Dictionary) are
  accepted and translated to their long forms
- Only one encoding may be given
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from foxtext_converter import config
from foxtext_converter.converters import converter_for_document, converter_for_path
from foxtext_converter.converters.base import BaseConverter, ConverterOptions, ConverterOutput
from foxtext_converter.core.dictionary import HashDictionary
from foxtext_converter.core.errors import DocumentValidationError, FoxTextError
from foxtext_converter.documents.schema import parse_document

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSION = ".json"

_LEGACY_SWITCHES = {
    "-outputhashes": "--output-hashes",
    "-o": "--output-hashes",
    "-dictionary": "--dictionary",
    "-d": "--dictionary",
}


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def translate_legacy_args(argv: List[str]) -> List[str]:
    """Rewrite SubpTool/LangTool-style single-dash switches into argparse form.

    WHY: Existing batch scripts call ``SubpTool -rus file.xml`` style
    command lines; those keep working.

    RULES:
    - ``-<language>`` (any key of LANGUAGE_ENCODINGS) → ``--encoding <language>``
    - ``-OutputHashes`` / ``-o`` → ``--output-hashes`` (case-insensitive)
    - ``-Dictionary`` / ``-d`` → ``--dictionary``
    - More than one encoding switch raises ValueError
    """
    translated: List[str] = []
    encodings = 0
    for arg in argv:
        lowered = arg.lower()
        if lowered.startswith("-") and not lowered.startswith("--"):
            language = lowered[1:]
            if language in config.LANGUAGE_ENCODINGS:
                encodings += 1
                translated.extend(["--encoding", language])
                continue
            if lowered in _LEGACY_SWITCHES:
                translated.append(_LEGACY_SWITCHES[lowered])
                continue
        if lowered.startswith("--encoding"):
            encodings += 1
        translated.append(arg)
    if encodings > 1:
        raise ValueError("Can only define one encoding")
    return translated


class DictionaryCache:
    """Builds each word list once per run and hands out the shared instance."""

    def __init__(self, override: Optional[str] = None) -> None:
        self.override = override
        self._built: Dict[str, HashDictionary] = {}

    def get(self, converter: BaseConverter) -> HashDictionary:
        path = self.override or converter.dictionary_path
        if path not in self._built:
            dictionary = HashDictionary.build(path)
            if dictionary.load_error:
                _status("  Warning: {}".format(dictionary.load_error))
            else:
                _status("  Dictionary: {} ({} entries)".format(path, len(dictionary)))
            self._built[path] = dictionary
        return self._built[path]


def _save_output(output: ConverterOutput, filename: str, output_dir: Path) -> Path:
    """Write one converter output, text as UTF-8, bytes in binary mode."""
    path = output_dir / filename
    if isinstance(output.content, bytes):
        path.write_bytes(output.content)
    else:
        path.write_text(output.content, encoding="utf-8")
    return path


def _unpack_file(
    path: Path,
    converter: BaseConverter,
    options: ConverterOptions,
    dictionaries: DictionaryCache,
) -> List[tuple]:
    data = path.read_bytes()
    outputs = converter.unpack(data, dictionaries.get(converter), options)
    return [(output, path.name + output.suffix) for output in outputs]


def _pack_file(path: Path, options: ConverterOptions) -> List[tuple]:
    document = parse_document(path.read_text(encoding="utf-8"))
    converter = converter_for_document(document)
    if converter is None:
        raise DocumentValidationError("Unknown or missing document format", "$.format")

    stem = path.name[: -len(DOCUMENT_EXTENSION)]
    outputs = converter.pack(document, options)
    result = []
    for output in outputs:
        suffix = Path(stem).suffix.lower()
        if suffix == output.suffix:
            result.append((output, stem))
        elif suffix in converter.extensions:
            # x.lng.json holding a version-3 document becomes x.lng2
            result.append((output, Path(stem).stem + output.suffix))
        else:
            result.append((output, stem + output.suffix))
    return result


def convert_file(
    path: Path,
    options: ConverterOptions,
    dictionaries: DictionaryCache,
    output_dir: Optional[Path] = None,
) -> List[Path]:
    """Convert one file in whichever direction its extension implies.

    Args:
        path: A binary container or a JSON document.
        options: Per-run switches.
        dictionaries: Shared dictionary cache (unpack only).
        output_dir: Where to save outputs; defaults to the input's directory.

    Returns:
        Paths of the files written.

    Raises:
        FoxTextError: The container or document is invalid.
        OSError: The input could not be read or an output not written.
        ValueError: The path has an unsupported extension.
    """
    target_dir = output_dir if output_dir is not None else path.parent

    if path.suffix.lower() == DOCUMENT_EXTENSION:
        _status("Packing {}...".format(path.name))
        planned = _pack_file(path, options)
    else:
        converter = converter_for_path(path)
        if converter is None:
            raise ValueError("Unsupported file type '{}'".format(path.suffix))
        _status("Unpacking {} ({})...".format(path.name, converter.name))
        planned = _unpack_file(path, converter, options, dictionaries)

    saved: List[Path] = []
    for output, filename in planned:
        saved_path = _save_output(output, filename, target_dir)
        saved.append(saved_path)
        _status("  Saved: {}".format(saved_path.name))
    return saved


def run(args: argparse.Namespace) -> int:
    """Convert every path in ``args``; return the number of failed files."""
    try:
        encoding = config.normalize_encoding(args.encoding) if args.encoding else None
    except ValueError as e:
        _status("Error: {}".format(e))
        return len(args.paths)

    output_dir = Path(args.output_dir).resolve() if args.output_dir else None
    if output_dir is not None and not output_dir.is_dir():
        _status("Error: Output directory does not exist: {}".format(output_dir))
        return len(args.paths)

    options = ConverterOptions(encoding=encoding, output_hashes=args.output_hashes)
    dictionaries = DictionaryCache(args.dictionary)

    failures = 0
    for raw_path in args.paths:
        path = Path(raw_path)
        if not path.is_file():
            _status("Error: Could not find file {}".format(path))
            failures += 1
            continue
        try:
            convert_file(path, options, dictionaries, output_dir)
        except (FoxTextError, OSError, ValueError) as e:
            logger.debug("Conversion of %s failed", path, exc_info=True)
            _status("Error: {}: {}".format(path.name, e))
            failures += 1

    if len(args.paths) > 1:
        _status("")
        _status("Done! {} converted, {} failed".format(len(args.paths) - failures, failures))
    return failures


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - Positional: one or more paths (.subp, .lng, .lng2, or .json)
    - Optional: --encoding, --dictionary, --output-hashes, --output-dir, --verbose
    """
    parser = argparse.ArgumentParser(
        prog="foxtext_converter",
        description="Convert Fox Engine subtitle packs (.subp) and language packs "
                    "(.lng, .lng2) to editable JSON documents and back.",
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="Files to convert. Binary packs are unpacked to <name>.json; "
             ".json documents are packed back to binary.",
    )

    parser.add_argument(
        "--encoding",
        default=None,
        help="Subtitle text encoding: a language ({}) or a codec name. "
             "Ignored when the pack header fixes the encoding.".format(
                 ", ".join(sorted(config.LANGUAGE_ENCODINGS))
             ),
    )

    parser.add_argument(
        "--dictionary",
        default=None,
        help="Word list used to resolve hashes to ids (default: {} or {}).".format(
            config.SUBP_DICTIONARY_PATH, config.LANG_DICTIONARY_PATH
        ),
    )

    parser.add_argument(
        "--output-hashes",
        action="store_true",
        help="Also write the unique entry hashes of each unpacked file.",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    if argv is None:
        argv = sys.argv[1:]
    try:
        argv = translate_legacy_args(argv)
    except ValueError as e:
        _status("Error: {}".format(e))
        sys.exit(2)

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    failures = run(args)
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
