# rotor_and_reflector.py
from __future__ import annotations

from typing import List, Sequence

from debug import Debug
from keyboard_and_plugboard import normalize_letter
from wirings import (
    ALPHABET,
    DEFAULT_TURNOVER,
    ReflectorModel,
    RotorModel,
    cycle_model,
    is_involution,
    reflector_model,
    rotor_model,
    wiring_for,
)

debug = Debug()

SIZE = len(ALPHABET)


def wrap_position(position: int) -> int:
    """Fold any integer into the 1-based dial range 1..26."""
    return (position - 1) % SIZE + 1


def _shift(signal: int, amount: int) -> int:
    return (signal + amount) % SIZE


class Rotor:
    """One wheel in one slot: wiring, dial position (1..26) and turnover letter."""

    def __init__(
        self,
        model: RotorModel | str = RotorModel.I,
        position: int = 1,
        turnover: str = DEFAULT_TURNOVER,
        slot: int = 0,
    ) -> None:
        self.slot = slot
        self.model = model
        self.position = position
        self.turnover = turnover

    # ── model & wiring ────────────────────────────────────────────
    @property
    def model(self) -> RotorModel:
        return self._model

    @model.setter
    def model(self, value: RotorModel | str) -> None:
        self._model = rotor_model(value)
        self.wiring = wiring_for(self._model)

        # integer lookup tables
        self._fwd = [ALPHABET.index(c) for c in self.wiring]
        self._rev = [self.wiring.index(c) for c in ALPHABET]

    # ── position & turnover ───────────────────────────────────────
    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        self._position = wrap_position(int(value))

    @property
    def turnover(self) -> str:
        return self._turnover

    @turnover.setter
    def turnover(self, letter: str) -> None:
        self._turnover = normalize_letter(letter)

    @property
    def turnover_index(self) -> int:
        return ALPHABET.index(self._turnover)

    def advance(self) -> bool:
        """Step one position; True when the new position hits the turnover."""
        self.position += 1
        hit = self._position == self.turnover_index
        debug.log("stepping", f"slot {self.slot} -> {self._position}, turnover_hit={hit}")
        return hit

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int) -> int:
        return self._fwd[sig]

    def backward(self, sig: int) -> int:
        return self._rev[sig]

    def __repr__(self) -> str:
        return (
            f"<Rotor slot={self.slot} model={self._model.value} "
            f"pos={self._position} turnover={self._turnover}>"
        )


class RotorBank:
    """The three rotors, slot 0 being the rightmost (fastest) wheel."""

    SLOTS = 3

    def __init__(self, rotors: Sequence[Rotor] | None = None) -> None:
        if rotors is None:
            rotors = [Rotor(slot=i) for i in range(self.SLOTS)]
        if len(rotors) != self.SLOTS:
            raise ValueError(f"Expected {self.SLOTS} rotors, got {len(rotors)}")
        self.rotors: List[Rotor] = list(rotors)
        for slot, rotor in enumerate(self.rotors):
            rotor.slot = slot

    def __getitem__(self, slot: int) -> Rotor:
        self._require(slot)
        return self.rotors[slot]

    @property
    def positions(self) -> List[int]:
        return [r.position for r in self.rotors]

    @property
    def models(self) -> List[RotorModel]:
        return [r.model for r in self.rotors]

    @property
    def turnovers(self) -> List[str]:
        return [r.turnover for r in self.rotors]

    # ── manual settings ───────────────────────────────────────────
    def set_position(self, slot: int, position: int) -> None:
        self[slot].position = position

    def shift_position(self, slot: int, delta: int = 1) -> int:
        rotor = self[slot]
        rotor.position += delta
        return rotor.position

    def set_model(self, slot: int, model: RotorModel | str) -> None:
        self[slot].model = model

    def cycle_model(self, slot: int, steps: int = 1) -> RotorModel:
        rotor = self[slot]
        rotor.model = cycle_model(rotor.model, steps)
        return rotor.model

    def set_turnover(self, slot: int, letter: str) -> None:
        self[slot].turnover = letter

    # ── signal paths ---------------------------------------------
    def forward_pass(self, sig: int) -> int:
        """Entry wheel → slot 0 → slot 1 → slot 2 → towards the reflector."""
        prev = None
        for rotor in self.rotors:
            if prev is None:
                sig = _shift(sig, rotor.position - 1)
            else:
                sig = _shift(sig, rotor.position - prev.position)
            sig = rotor.forward(sig)
            prev = rotor
        sig = _shift(sig, -(prev.position - 1))
        debug.log("rotor", f"forward -> {ALPHABET[sig]} at {self.positions}")
        return sig

    def backward_pass(self, sig: int) -> int:
        """Reflector → slot 2 → slot 1 → slot 0 → entry wheel."""
        prev = None
        for rotor in reversed(self.rotors):
            if prev is None:
                sig = _shift(sig, rotor.position - 1)
            else:
                sig = _shift(sig, rotor.position - prev.position)
            sig = rotor.backward(sig)
            prev = rotor
        sig = _shift(sig, -(prev.position - 1))
        debug.log("rotor", f"backward -> {ALPHABET[sig]} at {self.positions}")
        return sig

    # ── stepping --------------------------------------------------
    def step(self) -> List[int]:
        """Single-notch cascade: slot 0 always moves, each turnover hit carries
        one slot further. Returns the advanced slots in order."""
        advanced: List[int] = []
        for rotor in self.rotors:
            advanced.append(rotor.slot)
            if not rotor.advance():
                break
        debug.log("stepping", f"advanced={advanced} positions={self.positions}")
        return advanced

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, slot: int) -> None:
        if not (0 <= slot < self.SLOTS):
            raise ValueError(f"Rotor slot {slot} out of range 0–{self.SLOTS - 1}")

    def __repr__(self) -> str:
        return f"<RotorBank {' '.join(repr(r) for r in self.rotors)}>"


class Reflector:
    def __init__(self, model: ReflectorModel | str = ReflectorModel.A) -> None:
        self.model = model

    @property
    def model(self) -> ReflectorModel:
        return self._model

    @model.setter
    def model(self, value: ReflectorModel | str) -> None:
        value = reflector_model(value)
        wiring = wiring_for(value)
        # ensure involution property (w[i] = j ⇒ w[j] = i) and no self-maps
        if not is_involution(wiring):
            raise ValueError("Reflector wiring must be an involution with no fixed points")
        self._model = value
        self.wiring = wiring
        self._map = [ALPHABET.index(c) for c in wiring]

    def cycle(self, steps: int = 1) -> ReflectorModel:
        self.model = cycle_model(self._model, steps)
        return self._model

    def reflect(self, sig: int) -> int:
        mapped = self._map[sig]
        debug.log("reflector", f"{ALPHABET[sig]} -> {ALPHABET[mapped]}")
        return mapped

    def __repr__(self) -> str:
        return f"<Reflector {self._model.value}>"
