# settings_generator.py
from __future__ import annotations

import argparse
import json
from pathlib import Path
from random import Random, SystemRandom
from typing import Dict, List, Sequence

from enigma import EnigmaEngine
from keyboard_and_plugboard import Plugboard
from rotor_and_reflector import RotorBank
from wirings import (
    ALPHABET,
    DEFAULT_TURNOVER,
    HISTORICAL_NOTCHES,
    ReflectorModel,
    RotorModel,
)

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(alpha: str, k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    k = min(k, len(alpha) // 2)
    pool = list(alpha)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def generate_settings(
    rng: Random | SystemRandom,
    *,
    pairs: int = Plugboard.PAIR_COUNT,
    historical_notches: bool = False,
) -> Dict:
    """One day's key: three distinct wheels, dial positions, reflector, plugs."""
    models: List[RotorModel] = rng.sample(list(RotorModel), RotorBank.SLOTS)
    if historical_notches:
        turnovers = "".join(HISTORICAL_NOTCHES[m] for m in models)
    else:
        turnovers = DEFAULT_TURNOVER * RotorBank.SLOTS

    return {
        "rotors": [m.value for m in models],
        "positions": [rng.randint(1, len(ALPHABET)) for _ in models],
        "turnovers": turnovers,
        "reflector": rng.choice(list(ReflectorModel)).value,
        "plugs": choose_pairs(ALPHABET, min(pairs, Plugboard.PAIR_COUNT), rng),
    }


def parse_cli(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate an Enigma settings file")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument("--pairs", type=int, default=Plugboard.PAIR_COUNT, help="Plug pairs to wire (0-3)")
    p.add_argument("--historical-notches", dest="historical_notches", action="store_true")
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("enigma_config.json"),
        help="Destination JSON file (default: enigma_config.json)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_cli(argv)
    cfg = generate_settings(
        build_rng(args.seed),
        pairs=args.pairs,
        historical_notches=args.historical_notches,
    )
    EnigmaEngine.from_config(cfg)   # refuse to write anything unloadable

    args.outfile.write_text(json.dumps(cfg, indent=2), encoding="utf-8")
    print(f"✅  Wrote {args.outfile}\n"
        f"   rotors      : {cfg['rotors']}\n"
        f"   positions   : {cfg['positions']}\n"
        f"   turnovers   : {cfg['turnovers']}\n"
        f"   reflector   : {cfg['reflector']}\n"
        f"   plug pairs  : {' '.join(cfg['plugs']) or '-'}")


if __name__ == "__main__":
    main()
