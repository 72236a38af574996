"""Unit tests for the language and encoding tables."""

import pytest

from foxtext_converter import config


class TestLanguageTables:

    def test_every_language_id_has_an_encoding(self):
        for name in config.LANGUAGE_IDS.values():
            assert name in config.LANGUAGE_ENCODINGS

    def test_name_and_id_are_inverse(self):
        for language_id, name in config.LANGUAGE_IDS.items():
            assert config.language_id(name) == language_id
            assert config.language_name(language_id) == name

    def test_unknown_language(self):
        assert config.language_name(42) is None
        assert config.language_id("klingon") is None


class TestMapLanguageEncoding:

    @pytest.mark.parametrize(
        "language, expected",
        [
            ("jpn", "utf-8"),
            ("ara", "utf-8"),
            ("por", "utf-8"),
            ("rus", "iso-8859-5"),
            ("ENG", "iso-8859-1"),
            (0, "utf-8"),
            (7, "iso-8859-5"),
            (4, "iso-8859-1"),
        ],
    )
    def test_known(self, language, expected):
        assert config.map_language_encoding(language) == expected

    @pytest.mark.parametrize("language", [None, "xyz", 200])
    def test_unknown_falls_back_to_default(self, language):
        assert config.map_language_encoding(language) == config.DEFAULT_ENCODING


class TestNormalizeEncoding:

    def test_language_names(self):
        assert config.normalize_encoding("rus") == "iso-8859-5"
        assert config.normalize_encoding("-JPN") == "utf-8"

    def test_codec_names_are_canonicalised(self):
        assert config.normalize_encoding("UTF8") == "utf-8"
        assert config.normalize_encoding("latin-1") == "iso8859-1"

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown encoding"):
            config.normalize_encoding("not-a-codec")
