# keyboard_and_plugboard.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from debug import Debug
from wirings import ALPHABET

debug = Debug()


class InvalidLetterError(ValueError):
    """Raised for any character outside the 26-letter alphabet."""


def normalize_letter(letter: str) -> str:
    """Return *letter* upper-cased, or raise InvalidLetterError."""
    if not isinstance(letter, str) or len(letter) != 1:
        raise InvalidLetterError(f"Expected a single letter, got {letter!r}")
    upper = letter.upper()
    if upper not in ALPHABET:
        raise InvalidLetterError(f"Invalid character {letter!r} for current alphabet.")
    return upper


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    def __init__(self, alphabet: str = ALPHABET) -> None:
        self.alphabet: str = alphabet
        self.alpha_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(alphabet)
        }

    # letter → integer signal
    def forward(self, letter: str) -> int:
        signal = self.alpha_to_index[normalize_letter(letter)]
        debug.log("keyboard", f"{letter!r} -> {signal}")
        return signal

    # integer signal → lamp letter
    def backward(self, signal: int) -> str:
        if not (0 <= signal < len(self.alphabet)):
            hi = len(self.alphabet) - 1
            raise ValueError(f"Signal {signal} out of range 0–{hi}")
        return self.alphabet[signal]


# ── Plugboard ─────────────────────────────────────────────────────
class PlugID(IntEnum):
    RED_A = 0
    RED_B = 1
    BLUE_A = 2
    BLUE_B = 3
    YELLOW_A = 4
    YELLOW_B = 5

    @property
    def pair(self) -> int:
        return self.value // 2

    @property
    def end(self) -> int:
        """0 for the A plug of a pair, 1 for the B plug."""
        return self.value % 2


@dataclass(slots=True)
class PlugPair:
    """Two plugs joined by one cable; ``None`` means that end is unplugged."""

    first: str | None = None
    second: str | None = None

    @property
    def active(self) -> bool:
        return self.first is not None and self.second is not None

    def swap(self, letter: str) -> str:
        if not self.active:
            return letter
        if letter == self.first:
            return self.second
        if letter == self.second:
            return self.first
        return letter

    def get(self, end: int) -> str | None:
        return self.first if end == 0 else self.second

    def put(self, end: int, letter: str | None) -> None:
        if end == 0:
            self.first = letter
        else:
            self.second = letter


class Plugboard:
    PAIR_COUNT = 3

    def __init__(self, alphabet: str = ALPHABET) -> None:
        self.alphabet: str = alphabet
        self.cables: tuple[PlugPair, ...] = tuple(
            PlugPair() for _ in range(self.PAIR_COUNT)
        )

    @classmethod
    def from_pairs(
        cls,
        pairs: Sequence[str | tuple[str, str]],
        alphabet: str = ALPHABET,
    ) -> "Plugboard":
        """Strict constructor used for saved settings (e.g. ``["AB", "CD"]``)."""
        if len(pairs) > cls.PAIR_COUNT:
            raise ValueError(f"Too many plug pairs: {len(pairs)} (max {cls.PAIR_COUNT})")

        board = cls(alphabet)
        used: set[str] = set()
        for idx, raw in enumerate(pairs):
            if not isinstance(raw, (str, list, tuple)):
                raise ValueError(f"Pair {raw!r} must be two letters")
            if len(raw) != 2:
                raise ValueError(f"Pair {raw!r} must be exactly 2 symbols")
            a, b = (normalize_letter(ch) for ch in raw)

            if a == b:
                raise ValueError(f"Plugboard cannot map a symbol to itself: {a}")
            if a in used or b in used:
                dup = a if a in used else b
                raise ValueError(f"Character {dup!r} already used in plugboard")

            board.cables[idx].first, board.cables[idx].second = a, b
            used.update((a, b))
        return board

    # ── mutation ──────────────────────────────────────────────────
    def set_plug(self, plug: PlugID | int, letter: str | None) -> None:
        """Move one plug to *letter* (or pull it out with ``None``).

        No collision check is made; a letter sitting under two plugs is
        reported through the log and left as is.
        """
        plug = PlugID(plug)
        if letter is not None:
            letter = normalize_letter(letter)
        self.cables[plug.pair].put(plug.end, letter)
        debug.log("plugboard", f"{plug.name} -> {letter}")

        if letter is not None and self.occupied().count(letter) > 1:
            debug.warn("plugboard", f"Letter {letter!r} is now under more than one plug")

    def restore(self, letters: Sequence[str | None]) -> None:
        """Put every plug back at once, one letter (or ``None``) per PlugID."""
        if len(letters) != len(PlugID):
            raise ValueError(f"Expected {len(PlugID)} plug letters, got {len(letters)}")
        letters = [None if ch is None else normalize_letter(ch) for ch in letters]
        for plug, letter in zip(PlugID, letters):
            self.cables[plug.pair].put(plug.end, letter)
        debug.log("plugboard", f"restored {self!r}")

    def plug_letter(self, plug: PlugID | int) -> str | None:
        plug = PlugID(plug)
        return self.cables[plug.pair].get(plug.end)

    def occupied(self) -> list[str]:
        return [
            ch
            for cable in self.cables
            for ch in (cable.first, cable.second)
            if ch is not None
        ]

    def pairs(self) -> list[str]:
        return [c.first + c.second for c in self.cables if c.active]

    # ── substitution ──────────────────────────────────────────────
    def substitute(self, letter: str) -> str:
        letter = normalize_letter(letter)
        for cable in self.cables:
            if cable.active and letter in (cable.first, cable.second):
                return cable.swap(letter)
        return letter

    # one private helper does the job for both directions
    def _map(self, signal: int) -> int:
        letter = self.alphabet[signal]
        mapped = self.substitute(letter)
        debug.log("plugboard", f"{signal}->{letter}->{mapped}")
        return self.alphabet.index(mapped)

    forward = _map        # alias: signal in
    backward = _map       # alias: signal out

    def __repr__(self) -> str:
        return f"<Plugboard {' '.join(self.pairs()) or '-'}>"
