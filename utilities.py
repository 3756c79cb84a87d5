# utilities.py
from __future__ import annotations

from typing import List

from wirings import ALPHABET

# ────────────────────────────────────────────────────────────────────────
#  0. Text preprocessing
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alpha: str = ALPHABET) -> str:
    """Upper‑case and drop every character the keyboard has no key for."""
    return "".join(ch for ch in msg.upper() if ch in alpha)


def group_blocks(text: str, block: int = 5) -> str:
    """``"ABCDEFG"`` → ``"ABCDE FG"`` (block <= 0 leaves the text whole)."""
    if block <= 0:
        return text
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


# ────────────────────────────────────────────────────────────────────────
#  1. Dial helpers
# ────────────────────────────────────────────────────────────────────────


def format_position(position: int) -> str:
    """Dial window text: two digits, zero padded (``01`` … ``26``)."""
    return f"{position:02d}"


def format_positions(positions: List[int]) -> str:
    """Slot 2 … slot 0, the way the windows read left to right."""
    return " ".join(format_position(p) for p in reversed(positions))


def letter_for_position(position: int, alpha: str = ALPHABET) -> str:
    """Letter printed on the ring at a 1-based dial *position*."""
    return alpha[(position - 1) % len(alpha)]


__all__ = [
    "format_position",
    "format_positions",
    "group_blocks",
    "letter_for_position",
    "preprocess_message",
]
