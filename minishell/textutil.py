"""Small string helpers with the exact semantics the shell relies on."""

_INT_BITS = 32
_INT_RANGE = 1 << _INT_BITS
_INT_HALF = 1 << (_INT_BITS - 1)
_BLANKS = " \t\n\v\f\r"


def split_fields(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty fields."""
    return [field for field in text.split(sep) if field]


def parse_int(text: str) -> int:
    """Parse a leading decimal integer the way the C runtime's atoi does.

    Leading blanks are skipped, one optional sign is accepted and digits are
    read until the first non-digit. Text without a leading number gives 0.
    The result wraps around like a 32-bit signed integer.
    """
    stripped = text.lstrip(_BLANKS)
    sign = 1
    if stripped[:1] in ("-", "+"):
        if stripped[0] == "-":
            sign = -1
        stripped = stripped[1:]
    digits = []
    for ch in stripped:
        if not ("0" <= ch <= "9"):
            break
        digits.append(ch)
    if not digits:
        return 0
    value = sign * int("".join(digits))
    return ((value + _INT_HALF) % _INT_RANGE) - _INT_HALF


def c_compare(a: str, b: str, n: int) -> int:
    """Compare at most ``n`` characters, treating the end of a string as NUL.

    Returns the difference of the first differing character codes, or 0.
    """
    for pos in range(max(n, 0)):
        ca = ord(a[pos]) if pos < len(a) else 0
        cb = ord(b[pos]) if pos < len(b) else 0
        if ca != cb:
            return ca - cb
        if ca == 0:
            return 0
    return 0