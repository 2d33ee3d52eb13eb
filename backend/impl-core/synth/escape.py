import re

_ESCAPE_RE = re.compile(r"\\u([0-9A-Fa-f]{4})")


def escape_non_ascii(text: str) -> str:
    """
    Replace every code point >= 128 with a `\\uXXXX` escape, so the source
    is plain ASCII whatever encoding it is read with. Code points above
    U+FFFF become their UTF-16 surrogate pair, as javac expects.
    """
    out = []
    for ch in text:
        cp = ord(ch)
        if cp < 128:
            out.append(ch)
        elif cp > 0xFFFF:
            cp -= 0x10000
            out.append(f"\\u{0xD800 + (cp >> 10):04X}\\u{0xDC00 + (cp & 0x3FF):04X}")
        else:
            out.append(f"\\u{cp:04X}")
    return "".join(out)


def unescape(text: str) -> str:
    """Inverse of escape_non_ascii; surrogate pairs are merged back."""
    decoded = _ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), text)
    return decoded.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
