"""New Base 60 short codes.

Integers are written most-significant digit first over a 60 character
alphabet that leaves out the easily confused ``I``, ``O`` and ``l``.
Decoding is forgiving: those three letters fold onto the digits people
meant, and anything else unrecognised counts as zero, so a mistyped or
OCR'd code still resolves to *something* instead of failing.

See http://tantek.pbworks.com/w/page/19402946/NewBase60
"""

ALPHABET = "0123456789ABCDEFGHJKLMNPQRSTUVWXYZ_abcdefghijkmnopqrstuvwxyz"
BASE = len(ALPHABET)

# Front page / "no resource" sentinel; also what encode(0) returns
ZERO = "0"

_DIGITS: dict[str, int] = {c: i for i, c in enumerate(ALPHABET)}
# Typo correction
_DIGITS["I"] = _DIGITS["1"]
_DIGITS["l"] = _DIGITS["1"]
_DIGITS["O"] = _DIGITS["0"]


def encode(n: int | None) -> str:
    """Encode a non-negative integer as a base 60 short code.

    ``0`` and ``None`` both give ``"0"``.
    """
    if not n:
        return ZERO
    if n < 0:
        raise ValueError(f"cannot encode negative number {n}")

    chars = []
    while n > 0:
        n, rem = divmod(n, BASE)
        chars.append(ALPHABET[rem])
    return "".join(reversed(chars))


def decode(code: str | None) -> int:
    """Decode a short code. Never raises; noise decodes as zero digits."""
    n = 0
    for ch in code or "":
        n = n * BASE + _DIGITS.get(ch, 0)
    return n
