# main.py
from __future__ import annotations

import argparse, json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Sequence

from debug import Debug
from enigma import EnigmaEngine
from utilities import (
    format_positions,
    group_blocks,
    letter_for_position,
    preprocess_message,
)

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches for the command-line wrapper."""

    block: int = 5                  # display block size (0 = no grouping)
    trace: bool = False             # log every component while encoding


DEFAULT_SETTINGS: Dict[str, Any] = {
    "rotors": ["I", "I", "I"],
    "positions": [1, 1, 1],
    "turnovers": "QQQ",
    "reflector": "A",
    "plugs": [],
}


# ────────────────────────────────────────────────────────────────────────
#  1. JSON settings files
# ────────────────────────────────────────────────────────────────────────


def load_config(path: str | Path) -> dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    required = {"rotors", "positions", "reflector"}
    missing = required - data.keys()
    if missing:
        raise ValueError(f"Missing keys in config: {', '.join(sorted(missing))}")
    debug.log("config", f"loaded {path}")
    return data


def save_config(engine: EnigmaEngine, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(json.dumps(engine.to_config(), indent=2), encoding="utf-8")
    debug.log("config", f"saved {path}")
    return path


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encode text on a simulated M3 Enigma")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to encode. If omitted, an interactive REPL starts.")
    p.add_argument("--config", metavar="FILE", help="Load machine settings from JSON.")
    p.add_argument("--rotors", nargs=3, metavar="MODEL", help="Rotor models, slot 0 (rightmost) first, e.g. III II I")
    p.add_argument("--positions", nargs=3, type=int, metavar="POS", help="Dial positions 1-26, slot 0 first")
    p.add_argument("--turnovers", metavar="LLL", help="Three turnover letters, slot 0 first (default QQQ)")
    p.add_argument("--reflector", metavar="MODEL", help="Reflector model A, B or C")
    p.add_argument("--plugs", nargs="*", metavar="PAIR", help="Up to three plug pairs, e.g. AB CD")
    p.add_argument("--historical-notches", dest="historical_notches", action="store_true", help="Use each model's period notch instead of the configured turnovers.")
    p.add_argument("--block", type=int, default=5, help="Output block size, 0 for none. Default: 5")
    p.add_argument("--save-config", dest="save_config", metavar="FILE", help="Write the starting settings to JSON.")
    p.add_argument("--trace", action="store_true", help="Log every stage of every keystroke.")
    return p.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> dict:
    """Start from the file (or defaults), then let explicit flags win."""
    settings = dict(DEFAULT_SETTINGS)
    if args.config:
        settings.update(load_config(args.config))

    overrides = {
        "rotors": args.rotors,
        "positions": args.positions,
        "turnovers": args.turnovers,
        "reflector": args.reflector,
        "plugs": args.plugs,
    }
    settings.update({k: v for k, v in overrides.items() if v is not None})
    return settings


def build_engine(args: argparse.Namespace) -> EnigmaEngine:
    engine = EnigmaEngine.from_config(settings_from_args(args))
    if args.historical_notches:
        engine.use_historical_notches()
    return engine


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def run_message(engine: EnigmaEngine, text: str, cfg: Config) -> List[str]:
    if cfg.trace:
        with debug.tracing():
            cipher = engine.encode_message(text)
    else:
        cipher = engine.encode_message(text)

    windows = " ".join(letter_for_position(p) for p in reversed(engine.positions))
    return [
        f"Encoded:   {group_blocks(cipher, cfg.block)}",
        f"Positions: {format_positions(engine.positions)}  ({windows})",
    ]


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = Config(block=args.block, trace=args.trace)

    try:
        engine = build_engine(args)
    except (OSError, ValueError, KeyError) as e:
        raise SystemExit(f"❌  Failed to load settings: {e}")

    if args.save_config:
        print(f"✅  Wrote {save_config(engine, args.save_config)}")

    # one‑shot mode ------------------------------------------------------
    if args.message is not None:
        for line in run_message(engine, args.message, cfg):
            print(line)
        return

    # interactive REPL ---------------------------------------------------
    print(f"\nMachine: {engine!r}")
    print("Type blank line to quit.\n")
    while True:
        txt = input("\nMessage to encode: ")
        if not txt.strip():
            break
        if not preprocess_message(txt):
            print("❌  No letters A–Z in that line.")
            continue
        print()
        for line in run_message(engine, txt, cfg):
            print(line)


if __name__ == "__main__":
    main()
