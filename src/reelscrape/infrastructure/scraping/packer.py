"""Dean Edwards packer decoder.

Embed pages deliver their JWPlayer setup as

    eval(function(p,a,c,k,e,d){...}('payload',36,123,'w0|w1|...'.split('|'),0,{}))

The payload references dictionary words by their base-N index. Decoding
substitutes every whole-word index token with the dictionary entry.
"""

from __future__ import annotations

import re
import string

_DIGITS = string.digits + string.ascii_lowercase

# Packer call: function literal, then the argument list of the invocation.
_PACKED_RE = re.compile(
    r"eval\(function\((?P<params>[^)]*)\)\{.*?\}"
    r"\(\s*'(?P<payload>(?:[^'\\]|\\.)*)'\s*,\s*(?P<radix>\d+)\s*,\s*(?P<count>\d+)\s*,"
    r"\s*'(?P<words>(?:[^'\\]|\\.)*)'\.split\('\|'\)",
    re.DOTALL,
)


def to_base(num: int, radix: int) -> str:
    """Render *num* the way ``Number.prototype.toString(radix)`` does."""
    if num < radix:
        return _DIGITS[num]
    return to_base(num // radix, radix) + _DIGITS[num % radix]


def decode_payload(payload: str, radix: int, words: list[str]) -> str:
    """Substitute dictionary words into *payload*.

    Indices are processed in ascending order, one pass each, replacing
    ``\\b<index in base radix>\\b`` with ``words[index]``. Empty words leave
    their token as-is. A substituted word that is itself a bare token of a
    later index is substituted again; the packer does the same.
    """
    for index, word in enumerate(words):
        if not word:
            continue
        token = to_base(index, radix)
        payload = re.sub(r"\b" + token + r"\b", lambda _m, w=word: w, payload)
    return payload


def unpack_packed_script(html: str) -> str | None:
    """Decode all packed scripts found in *html*.

    Returns the decoded sources joined by newlines in document order, or
    ``None`` when the page carries no packer invocation.
    """
    decoded: list[str] = []
    for match in _PACKED_RE.finditer(html):
        radix = int(match.group("radix"))
        if radix < 2 or radix > len(_DIGITS):
            continue
        words = match.group("words").split("|")
        decoded.append(decode_payload(match.group("payload"), radix, words))

    if not decoded:
        return None
    return "\n".join(decoded)
