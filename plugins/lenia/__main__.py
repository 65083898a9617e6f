"""
Lenia - Headless Runner

Usage:
    python -m lenia [preset] [--size N] [--steps N] [--every K] [--seed S] [--export PATH]

Examples:
    python -m lenia
    python -m lenia orbium --size 128 --steps 200
    python -m lenia prism --seed 1A2B --export prism.json

Engines:
    lenia         - Single-channel Lenia (default)
    multichannel  - Three independent R/G/B channels

Use --list to see all available presets.
"""

import json
import sys

from . import ENGINE_CLASSES
from .errors import ConfigurationError
from .presets import (
    ENGINE_ORDER, PRESET_ORDER, get_preset, list_presets,
    preset_params, preset_seed_kwargs,
)
from .seeding import generate_seed, seed_to_string, string_to_seed


def build_engine(preset_key, sim_size, seed=None):
    """Create and seed the engine described by a preset."""
    preset = get_preset(preset_key)
    cls = ENGINE_CLASSES[preset["engine"]]
    if preset["engine"] == "lenia":
        engine = cls(size=sim_size, **preset_params(preset))
    else:
        engine = cls(size=sim_size)
        engine.set_params(**preset_params(preset))

    if seed is None:
        seed = generate_seed()
    engine.seed(preset.get("seed", "random"), seed=seed, **preset_seed_kwargs(preset))
    return engine, seed


def _format_stats(stats):
    return (f"step {stats['step']:5d}  mass {stats['mass']:10.2f}  "
            f"center ({stats['centerX']:7.2f}, {stats['centerY']:7.2f})  "
            f"velocity {stats['velocity']:.4f}")


def run(preset_key, sim_size, steps, every=10, seed=None, export_path=None):
    """Run a preset headless, printing statistics every `every` steps."""
    engine, seed = build_engine(preset_key, sim_size, seed)
    print(f"[lenia] {preset_key} @ {sim_size}x{sim_size}, seed {seed_to_string(seed)}, "
          f"{steps} steps")

    for _ in range(steps):
        engine.step()
        stats = engine.get_stats()
        if every > 0 and stats["step"] % every == 0:
            print(f"[lenia] {_format_stats(stats)}")

    if export_path:
        with open(export_path, "w") as f:
            json.dump(engine.export_config(), f)
        print(f"[lenia] config saved: {export_path}")
    return engine


def main(argv=None):
    preset = "sandbox"
    sim_size = 128
    steps = 100
    every = 10
    seed = None
    export_path = None

    args = sys.argv[1:] if argv is None else list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--size" and i + 1 < len(args):
            sim_size = int(args[i + 1])
            i += 2
        elif arg == "--steps" and i + 1 < len(args):
            steps = int(args[i + 1])
            i += 2
        elif arg == "--every" and i + 1 < len(args):
            every = int(args[i + 1])
            i += 2
        elif arg == "--seed" and i + 1 < len(args):
            seed = string_to_seed(args[i + 1])
            i += 2
        elif arg == "--export" and i + 1 < len(args):
            export_path = args[i + 1]
            i += 2
        elif arg == "--list":
            print("\nAvailable presets:")
            for engine in ENGINE_ORDER:
                print(f"\n  [{engine}]")
                for key, name, desc in list_presets(engine):
                    print(f"    {key:16s} {name:20s} {desc}")
            print()
            return 0
        elif arg in ("--help", "-h"):
            print(__doc__)
            return 0
        elif arg in PRESET_ORDER:
            preset = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print("Use --list to see available presets")
            return 2

    try:
        run(preset, sim_size, steps, every=every, seed=seed, export_path=export_path)
    except ConfigurationError as e:
        print(f"[lenia] {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
