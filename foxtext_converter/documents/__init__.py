"""Editable JSON documents for subtitle and language packs.

WHY: The binary containers are not human-editable. Each pack is unpacked
to a JSON document that translators edit and that is packed back to the
binary form.

HOW: schema.py loads and applies the JSON schemas in schemas/;
subp_document.py and lang_document.py map between documents and the IR.

RULES:
- Documents are UTF-8 JSON, indented, non-ASCII kept literal
- Every document is schema-validated before it reaches a codec
"""
