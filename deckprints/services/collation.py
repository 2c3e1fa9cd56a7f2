"""
Sort keys shared by the resolver and the grouped view.

Names compare the way a reader expects: accents and case are ignored
first, the raw text only breaks ties.
"""

import re
import unicodedata

_DIGITS = re.compile(r"(\d+)")


def collation_key(text: str) -> tuple[str, str]:
    """Accent- and case-insensitive sort key ("Æther" sorts with "aether")."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (stripped.casefold(), text)


def collector_number_key(number: str) -> tuple[tuple[int, int | str], ...]:
    """Natural sort key for collector numbers: "9" < "10" < "10a" < "A1"."""
    parts: list[tuple[int, int | str]] = []
    for chunk in _DIGITS.split(number):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk)))
        else:
            parts.append((1, chunk.casefold()))
    return tuple(parts)
