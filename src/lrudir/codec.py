"""
Key codec: maps arbitrary byte keys to portable file names.

Names stay as close to the key as possible so a cache directory can be
read by a human:

    b"user42"      -> "user42"
    b"img/a.png"   -> "img_%_a.png"
    b"a b"         -> "a#40b"
    b"~"           -> "#fc01"

Rules, applied per code point:
1. Letters, digits and "._-" pass through unchanged.
2. "/" becomes the fixed escape "_%_".
3. Anything else becomes "#" followed by the lowercase hex of the
   zigzag varint encoding of the code point.

"#" and "%" are never passed through, and the last byte of a varint
always has its high bit clear, so every escaped unit is self-delimiting
and no two keys share a name. Bytes that are not valid UTF-8 are decoded
with surrogateescape, which gives each of them its own code point.

The mapping is one way. Keys are always read back from pointer file
contents, never from file names.
"""

import unicodedata

# Punctuation that is safe in file names on every common filesystem
SAFE_PUNCTUATION = frozenset("._-")

SEPARATOR_ESCAPE = "_%_"
ESCAPE_MARKER = "#"


def is_safe_char(char: str) -> bool:
    """True if char can appear in a file name as-is."""
    if char in SAFE_PUNCTUATION:
        return True
    # Letters (L*) and numbers (N*), same classes as unicode IsLetter/IsNumber
    return unicodedata.category(char)[0] in ("L", "N")


def zigzag_varint(value: int) -> bytes:
    """
    Signed varint encoding (zigzag + LEB128).

    Code points are never negative, so zigzag reduces to value << 1, but the
    full form is kept to match the on-disk format exactly.
    """
    ux = value << 1
    if value < 0:
        ux = ~ux
    buf = bytearray()
    while ux >= 0x80:
        buf.append((ux & 0x7F) | 0x80)
        ux >>= 7
    buf.append(ux)
    return bytes(buf)


class KeyCodec:
    """
    Encodes keys into file names.

    Usage:
        codec = KeyCodec()
        codec.encode(b"img/a.png")  # "img_%_a.png"
        codec.encode(b"")           # "" (reserved for the list anchors)
    """

    def encode(self, key: bytes) -> str:
        """
        Encode key into a file name.

        The empty key encodes to the empty name. Rejecting it as a user key
        is the Cache's job, not the codec's.
        """
        if not key:
            return ""

        parts = []
        for char in bytes(key).decode("utf-8", errors="surrogateescape"):
            if is_safe_char(char):
                parts.append(char)
            elif char == "/":
                parts.append(SEPARATOR_ESCAPE)
            else:
                parts.append(ESCAPE_MARKER + zigzag_varint(ord(char)).hex())

        return "".join(parts)


_DEFAULT_CODEC = KeyCodec()


def encode_key(key: bytes) -> str:
    """
    Convenience function for one-off encoding.

    Usage:
        encode_key(b"a b")  # "a#40b"
    """
    return _DEFAULT_CODEC.encode(key)
