"""Binary content heuristic for files git has never seen."""

from __future__ import annotations

# Control characters that are ordinary in text: tab, LF, CR.
_TEXT_CONTROL = frozenset(b"\t\n\r")
_NON_PRINTABLE_RATIO = 0.3


def is_binary_content(data: bytes) -> bool:
    """Return True if *data* looks binary.

    A NUL byte anywhere means binary. Otherwise the content is binary when
    more than 30% of its bytes are control characters other than tab, LF
    and CR. Empty input is text.
    """
    if not data:
        return False
    if b"\x00" in data:
        return True
    non_printable = sum(1 for b in data if b < 32 and b not in _TEXT_CONTROL)
    return non_printable / len(data) > _NON_PRINTABLE_RATIO
