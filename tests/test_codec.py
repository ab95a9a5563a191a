"""
Tests for the key codec.

The codec must be injective: two different keys sharing a file name would
silently share an entry and corrupt the recency list.

Run with: pytest tests/test_codec.py -v
"""

import pytest

from lrudir.codec import KeyCodec, encode_key, is_safe_char, zigzag_varint


class TestZigzagVarint:
    """Tests for the varint used in escape sequences."""

    def test_small_values(self):
        """Values below 64 fit in one byte after zigzag."""
        assert zigzag_varint(0) == b"\x00"
        assert zigzag_varint(0x20) == b"\x40"

    def test_negative_values(self):
        """Zigzag maps -1 to 1."""
        assert zigzag_varint(-1) == b"\x01"

    def test_multi_byte(self):
        """Continuation bit is set on every byte but the last."""
        assert zigzag_varint(64) == b"\x80\x01"
        encoded = zigzag_varint(0x20AC)
        assert all(b & 0x80 for b in encoded[:-1])
        assert not encoded[-1] & 0x80


class TestSafeChars:
    """Tests for the pass-through predicate."""

    def test_letters_and_digits(self):
        """ASCII and non-ASCII letters and numbers are safe."""
        for char in "aZ09éжß٣":
            assert is_safe_char(char), char

    def test_safe_punctuation(self):
        """Only . _ - are safe punctuation."""
        for char in "._-":
            assert is_safe_char(char)

    def test_unsafe(self):
        """Marker, escape and suffix characters are never passed through."""
        for char in "#%~/ \\:*?\"<>|\n":
            assert not is_safe_char(char), repr(char)


class TestKeyCodec:
    """Tests for KeyCodec.encode."""

    def test_passthrough(self):
        """Readable keys stay readable."""
        codec = KeyCodec()

        assert codec.encode(b"user42") == "user42"
        assert codec.encode(b"a.b_c-d") == "a.b_c-d"

    def test_empty_key(self):
        """The empty key maps to the empty name (the anchors)."""
        assert KeyCodec().encode(b"") == ""

    def test_slash(self):
        """Path separators get the fixed escape."""
        assert encode_key(b"img/a.png") == "img_%_a.png"

    def test_escaped_chars(self):
        """Other code points become # plus hex of their varint."""
        assert encode_key(b"a b") == "a#40b"
        assert encode_key(b"~") == "#fc01"
        assert encode_key(b"#") == "#46"
        assert encode_key("€".encode("utf-8")) == "#d88201"

    def test_unicode_letters_pass_through(self):
        """Letters outside ASCII are kept as-is."""
        assert encode_key("café".encode("utf-8")) == "café"

    def test_invalid_utf8(self):
        """Each invalid byte gets its own escape."""
        assert encode_key(b"\xff") == "#fef306"
        assert encode_key(b"\xfe") == "#fcf306"

    def test_accepts_bytearray(self):
        """Any bytes-like key works."""
        assert encode_key(bytearray(b"abc")) == "abc"

    def test_injective_on_tricky_keys(self):
        """Keys that look like escapes never collide with real escapes."""
        keys = [
            b"/",
            b"_%_",
            b"_/_",
            b"#40",
            b" ",
            b"~next",
            b"next",
            b"\xff",
            b"\xfe",
            "\ufffd".encode("utf-8"),
            b"\xc3",
            b"\xc3\xa9",
            b"a/b",
            b"a_%_b",
        ]
        names = [encode_key(k) for k in keys]

        assert len(set(names)) == len(keys)

    def test_pointer_suffix_cannot_be_forged(self):
        """No key encodes to another key's pointer file name."""
        assert encode_key(b"a~next") != encode_key(b"a") + "~next"
        assert "~" not in encode_key(b"a~next")

    def test_long_key(self):
        """Long keys encode linearly, one unit per code point."""
        key = b"a/" * 10000

        assert encode_key(key) == "a_%_" * 10000


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
