"""Tests for base64url and JSON helpers."""

import pytest

from pushforge.webpush.encoding import b64url_decode, b64url_encode, canonical_json


class TestBase64Url:
    """Tests for unpadded base64url encoding."""

    def test_encode_strips_padding(self) -> None:
        assert b64url_encode(b"\x00") == "AA"
        assert b64url_encode(b"\x00\x00") == "AAA"

    def test_encode_uses_url_alphabet(self) -> None:
        assert b64url_encode(b"\xfb\xff") == "-_8"

    def test_encode_accepts_str(self) -> None:
        assert b64url_encode('{"typ":"JWT"}') == "eyJ0eXAiOiJKV1QifQ"

    def test_decode_unpadded(self) -> None:
        assert b64url_decode("-_8") == b"\xfb\xff"

    def test_decode_padded(self) -> None:
        assert b64url_decode("AA==") == b"\x00"

    def test_decode_standard_alphabet(self) -> None:
        """Keys serialized with + and / still decode."""
        assert b64url_decode("+/8") == b"\xfb\xff"

    def test_decode_empty_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid input"):
            b64url_decode("")

    def test_decode_invalid_characters_raises(self) -> None:
        with pytest.raises(ValueError):
            b64url_decode("not*base64")


class TestCanonicalJson:
    """Tests for compact JSON serialization."""

    def test_compact_separators(self) -> None:
        assert canonical_json({"title": "hi", "n": [1, 2]}) == '{"title":"hi","n":[1,2]}'

    def test_keeps_non_ascii(self) -> None:
        assert canonical_json({"title": "你好"}) == '{"title":"你好"}'

    def test_rejects_nan(self) -> None:
        with pytest.raises(ValueError):
            canonical_json(float("nan"))
