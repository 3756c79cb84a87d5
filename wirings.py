# wirings.py
from __future__ import annotations

import string
from enum import Enum
from typing import Dict, TypeVar

ALPHABET = string.ascii_uppercase


# ────────────────────────────────────────────────────────────────────────
#  0. Model identifiers
# ────────────────────────────────────────────────────────────────────────


class RotorModel(Enum):
    I = "I"
    II = "II"
    III = "III"
    IV = "IV"
    V = "V"


class ReflectorModel(Enum):
    A = "A"
    B = "B"
    C = "C"


M = TypeVar("M", RotorModel, ReflectorModel)


# ────────────────────────────────────────────────────────────────────────
#  1. Wheel database (M3 set)
# ────────────────────────────────────────────────────────────────────────

ROTOR_WIRINGS: Dict[RotorModel, str] = {
    RotorModel.I:   "EKMFLGDQVZNTOWYHXUSPAIBRCJ",
    RotorModel.II:  "AJDKSIRUXBLHWTMCQGZNPYFVOE",
    RotorModel.III: "BDFHJLCPRTXVZNYEIWGAKMUSQO",
    RotorModel.IV:  "ESOVPZJAYQUIRHXLNFTGKDCMWB",
    RotorModel.V:   "VZBRGITYUPSDNHLXAWMJQOFECK",
}

REFLECTOR_WIRINGS: Dict[ReflectorModel, str] = {
    ReflectorModel.A: "EJMZALYXVBWFCRQUONTSPIKHGD",
    ReflectorModel.B: "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    ReflectorModel.C: "FVPJIAOYEDRZXWGCTKUQSBNMHL",
}

# Period notch letters. Only used when a caller opts in; every slot
# defaults to DEFAULT_TURNOVER otherwise.
HISTORICAL_NOTCHES: Dict[RotorModel, str] = {
    RotorModel.I:   "Q",
    RotorModel.II:  "E",
    RotorModel.III: "V",
    RotorModel.IV:  "J",
    RotorModel.V:   "Z",
}

DEFAULT_TURNOVER = "Q"


# ────────────────────────────────────────────────────────────────────────
#  2. Lookups
# ────────────────────────────────────────────────────────────────────────


def wiring_for(model: RotorModel | ReflectorModel) -> str:
    """Return the 26-letter wiring of a rotor or reflector model."""
    if isinstance(model, RotorModel):
        return ROTOR_WIRINGS[model]
    if isinstance(model, ReflectorModel):
        return REFLECTOR_WIRINGS[model]
    raise TypeError(f"Not a wheel model: {model!r}")


def rotor_model(value: RotorModel | str) -> RotorModel:
    """Coerce ``"iv"`` / ``"IV"`` / ``RotorModel.IV`` into a RotorModel."""
    if isinstance(value, RotorModel):
        return value
    try:
        return RotorModel(str(value).strip().upper())
    except ValueError:
        names = ", ".join(m.value for m in RotorModel)
        raise ValueError(f"Unknown rotor model {value!r}. Expected one of {names}")


def reflector_model(value: ReflectorModel | str) -> ReflectorModel:
    if isinstance(value, ReflectorModel):
        return value
    try:
        return ReflectorModel(str(value).strip().upper())
    except ValueError:
        names = ", ".join(m.value for m in ReflectorModel)
        raise ValueError(f"Unknown reflector model {value!r}. Expected one of {names}")


def cycle_model(model: M, steps: int = 1) -> M:
    """Move *steps* places through the model's ordered variants, wrapping.

    >>> cycle_model(RotorModel.V)
    <RotorModel.I: 'I'>
    >>> cycle_model(ReflectorModel.A, -1)
    <ReflectorModel.C: 'C'>
    """
    order = list(type(model))
    return order[(order.index(model) + steps) % len(order)]


def is_involution(wiring: str, alphabet: str = ALPHABET) -> bool:
    """True if wiring[wiring[i]] == alphabet[i] and wiring[i] != alphabet[i] for all i."""
    if sorted(wiring) != sorted(alphabet):
        return False
    for i, ch in enumerate(wiring):
        j = alphabet.index(ch)
        if i == j or wiring[j] != alphabet[i]:
            return False
    return True


__all__ = [
    "ALPHABET",
    "DEFAULT_TURNOVER",
    "HISTORICAL_NOTCHES",
    "REFLECTOR_WIRINGS",
    "ROTOR_WIRINGS",
    "ReflectorModel",
    "RotorModel",
    "cycle_model",
    "is_involution",
    "reflector_model",
    "rotor_model",
    "wiring_for",
]
