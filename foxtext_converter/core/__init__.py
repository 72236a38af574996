"""Core model, hashing, and dictionary modules.

WHY: The core package holds the pieces every converter shares: the
StrCode32 hash, the reverse-lookup dictionary, the in-memory pack model,
and the error taxonomy. Binary codecs and document mappers both build
on these and must stay compatible with them.

HOW: strcode.py implements the hash, dictionary.py builds the
hash → identifier map, ir.py defines the dataclasses, errors.py the
exceptions.

RULES:
- The IR dataclasses are the contract between codec and documents
- Nothing in core performs file output
"""
