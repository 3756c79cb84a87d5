# enigma.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence, Tuple

from debug import Debug
from keyboard_and_plugboard import Keyboard, PlugID, Plugboard
from rotor_and_reflector import Reflector, Rotor, RotorBank
from utilities import preprocess_message
from wirings import DEFAULT_TURNOVER, HISTORICAL_NOTCHES, ReflectorModel, RotorModel

debug = Debug()

LetterListener = Callable[[str], None]
AdvanceListener = Callable[[int], None]


def _slot_values(cfg: Dict[str, Any], key: str, default: Any = None) -> Sequence[Any]:
    """One entry per rotor slot, as a list or (for letters) a string."""
    values = cfg.get(key, default)
    if not isinstance(values, (list, tuple, str)) or len(values) != RotorBank.SLOTS:
        raise ValueError(f"{key} needs {RotorBank.SLOTS} entries, got {values!r}")
    return values


@dataclass(frozen=True)
class EncodeResult:
    letter: str
    advanced: Tuple[int, ...]


@dataclass(frozen=True)
class MachineState:
    """Everything needed to put a machine back where it was."""

    models: Tuple[RotorModel, ...]
    positions: Tuple[int, ...]
    turnovers: Tuple[str, ...]
    reflector: ReflectorModel
    plugs: Tuple[str | None, ...] = field(default=(None,) * len(PlugID))


class EnigmaEngine:
    """Plugboard → rotors → reflector → rotors → plugboard, then step.

    Listeners registered with :meth:`add_letter_encoded_listener` receive the
    lamp letter; those registered with :meth:`add_rotor_advanced_listener`
    receive each advanced slot, in slot order, after the letter.
    """

    def __init__(
        self,
        rotors: RotorBank | None = None,
        reflector: Reflector | None = None,
        plugboard: Plugboard | None = None,
        keyboard: Keyboard | None = None,
    ) -> None:
        self.kb = keyboard or Keyboard()
        self.pb = plugboard or Plugboard()
        self.rotors = rotors or RotorBank()
        self.reflector = reflector or Reflector()

        self._lock = threading.RLock()
        self._letter_listeners: List[LetterListener] = []
        self._advance_listeners: List[AdvanceListener] = []

    # ── observers ───────────────────────────────────────────────

    def add_letter_encoded_listener(self, listener: LetterListener) -> None:
        with self._lock:
            self._letter_listeners.append(listener)

    def remove_letter_encoded_listener(self, listener: LetterListener) -> None:
        with self._lock:
            self._letter_listeners.remove(listener)

    def add_rotor_advanced_listener(self, listener: AdvanceListener) -> None:
        with self._lock:
            self._advance_listeners.append(listener)

    def remove_rotor_advanced_listener(self, listener: AdvanceListener) -> None:
        with self._lock:
            self._advance_listeners.remove(listener)

    # ── encipher one symbol  ────────────────────────────────────

    def encode_with_steps(self, letter: str) -> EncodeResult:
        with self._lock:
            signal = self.kb.forward(letter)
            signal = self.pb.forward(signal)
            signal = self.rotors.forward_pass(signal)
            signal = self.reflector.reflect(signal)
            signal = self.rotors.backward_pass(signal)
            signal = self.pb.backward(signal)
            out_ch = self.kb.backward(signal)

            advanced = tuple(self.rotors.step())
            debug.log("encipher", f"{letter.upper()} -> {out_ch}, advanced {list(advanced)}")

            for listener in list(self._letter_listeners):
                listener(out_ch)
            for slot in advanced:
                for listener in list(self._advance_listeners):
                    listener(slot)

            return EncodeResult(out_ch, advanced)

    def encode(self, letter: str) -> str:
        return self.encode_with_steps(letter).letter

    def encode_message(self, text: str) -> str:
        """Encode every alphabet letter of *text*, continuing from the current state."""
        return "".join(self.encode(ch) for ch in preprocess_message(text))

    # ── settings ────────────────────────────────────────────────

    def set_rotor_position(self, slot: int, position: int) -> None:
        with self._lock:
            self.rotors.set_position(slot, position)
            debug.log("config", f"slot {slot} position -> {self.rotors[slot].position}")

    def shift_rotor(self, slot: int, delta: int = 1) -> int:
        with self._lock:
            return self.rotors.shift_position(slot, delta)

    def set_rotor_model(self, slot: int, model: RotorModel | str) -> None:
        with self._lock:
            self.rotors.set_model(slot, model)
            debug.log("config", f"slot {slot} model -> {self.rotors[slot].model.value}")

    def cycle_rotor_model(self, slot: int, steps: int = 1) -> RotorModel:
        with self._lock:
            return self.rotors.cycle_model(slot, steps)

    def set_rotor_turnover(self, slot: int, letter: str) -> None:
        with self._lock:
            self.rotors.set_turnover(slot, letter)

    def use_historical_notches(self) -> None:
        """Replace every slot's turnover with its model's period notch."""
        with self._lock:
            for rotor in self.rotors.rotors:
                rotor.turnover = HISTORICAL_NOTCHES[rotor.model]

    def set_reflector_model(self, model: ReflectorModel | str) -> None:
        with self._lock:
            self.reflector.model = model
            debug.log("config", f"reflector -> {self.reflector.model.value}")

    def cycle_reflector(self, steps: int = 1) -> ReflectorModel:
        with self._lock:
            return self.reflector.cycle(steps)

    def set_plug(self, plug: PlugID | int, letter: str | None) -> None:
        with self._lock:
            self.pb.set_plug(plug, letter)

    # ── snapshots ───────────────────────────────────────────────

    @property
    def positions(self) -> List[int]:
        return self.rotors.positions

    def state(self) -> MachineState:
        with self._lock:
            return MachineState(
                models=tuple(self.rotors.models),
                positions=tuple(self.rotors.positions),
                turnovers=tuple(self.rotors.turnovers),
                reflector=self.reflector.model,
                plugs=tuple(self.pb.plug_letter(p) for p in PlugID),
            )

    def restore(self, state: MachineState) -> None:
        with self._lock:
            for rotor, model, pos, turn in zip(
                self.rotors.rotors, state.models, state.positions, state.turnovers
            ):
                rotor.model = model
                rotor.position = pos
                rotor.turnover = turn
            self.reflector.model = state.reflector
            self.pb.restore(state.plugs)

    # ── config dictionaries ─────────────────────────────────────

    def to_config(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "rotors": [m.value for m in self.rotors.models],
                "positions": self.rotors.positions,
                "turnovers": "".join(self.rotors.turnovers),
                "reflector": self.reflector.model.value,
                "plugs": self.pb.pairs(),
            }

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "EnigmaEngine":
        """Build an engine from a settings dictionary (see ``main.load_config``)."""
        models = _slot_values(cfg, "rotors")
        if isinstance(models, str):
            raise ValueError(f"rotors must be a list of model names, got {models!r}")
        positions = _slot_values(cfg, "positions")
        turnovers = _slot_values(cfg, "turnovers", DEFAULT_TURNOVER * RotorBank.SLOTS)
        for pos in positions:
            if isinstance(pos, bool) or not isinstance(pos, int):
                raise ValueError(f"positions must be whole numbers, got {pos!r}")
        plugs = cfg.get("plugs", [])
        if not isinstance(plugs, (list, tuple)):
            raise ValueError(f"plugs must be a list of pairs, got {plugs!r}")

        bank = RotorBank([
            Rotor(model, pos, turn, slot)
            for slot, (model, pos, turn) in enumerate(zip(models, positions, turnovers))
        ])
        engine = cls(
            rotors=bank,
            reflector=Reflector(cfg["reflector"]),
            plugboard=Plugboard.from_pairs(plugs),
        )
        debug.log("config", f"built {bank!r} {engine.reflector!r} {engine.pb!r}")
        return engine

    def __repr__(self) -> str:
        return f"<EnigmaEngine {self.rotors!r} {self.reflector!r} {self.pb!r}>"
