#!/usr/bin/env python3
"""
Tests for config export/import, seeding, presets and the headless runner.

Verifies:
1. Exported config shape and JSON round trip
2. Size-mismatch import leaves the engine untouched
3. validate_config error reporting
4. Seeded patterns are reproducible
5. Every preset builds and runs
6. python -m lenia entry point
"""

import io
import json
import os
import tempfile
from contextlib import redirect_stdout

import numpy as np
import pytest
from pydantic import ValidationError

from lenia.__main__ import build_engine, main
from lenia.engine import LeniaEngine
from lenia.errors import SizeMismatchError, StateShapeError
from lenia.multichannel import MultiChannelLenia
from lenia.params import LeniaParams, validate_config
from lenia.presets import PRESET_ORDER, PRESETS, get_preset, list_presets
from lenia.seeding import (
    generate_multi_blob_pattern, generate_pattern_from_seed, seed_to_string,
    string_to_seed,
)


def test_export_shape():
    n = 16
    engine = LeniaEngine(size=n, R=4)
    engine.randomize(seed=3)
    engine.step()
    config = engine.export_config()
    assert list(config) == ["size", "params", "state", "stats"]
    assert config["size"] == n
    assert list(config["params"]) == ["R", "mu", "sigma", "dt", "kernelMu", "kernelSigma"]
    assert len(config["state"]) == n * n
    # Row-major: index = y * N + x
    assert config["state"][3 * n + 5] == engine.get_value(5, 3)
    assert list(config["stats"]) == ["step", "mass", "centerX", "centerY", "velocity"]


def test_json_round_trip():
    n = 16
    engine = LeniaEngine(size=n, R=5, mu=0.17, sigma=0.04, dt=0.2)
    engine.randomize(seed=9)
    engine.run(4)
    config = json.loads(json.dumps(engine.export_config()))

    other = LeniaEngine(size=n)
    other.import_config(config)
    assert other.get_params() == engine.get_params()
    assert np.array_equal(other.get_state(), engine.get_state())
    assert other.get_stats() == engine.get_stats()

    # Both continue identically
    engine.step()
    other.step()
    assert np.array_equal(other.get_state(), engine.get_state())


def test_import_size_mismatch():
    engine = LeniaEngine(size=256)
    engine.randomize(seed=1)
    before = engine.get_state().copy()
    params = engine.get_params()

    config = {"size": 128, "params": {"R": 20}, "state": [0.0] * (128 * 128), "stats": {}}
    with pytest.raises(SizeMismatchError) as excinfo:
        engine.import_config(config)
    assert excinfo.value.expected == 256 and excinfo.value.got == 128
    assert np.array_equal(engine.get_state(), before)
    assert engine.get_params() == params


def test_import_rejects_bad_state_before_mutating():
    engine = LeniaEngine(size=8)
    config = engine.export_config()
    config["params"]["R"] = 3
    config["state"] = config["state"][:-1]
    with pytest.raises(StateShapeError):
        engine.import_config(config)
    assert engine.params.R == 8


def test_import_rejects_bad_params():
    engine = LeniaEngine(size=8)
    config = engine.export_config()
    config["params"]["mu"] = "wide"
    with pytest.raises(ValidationError):
        engine.import_config(config)


def test_params_aliases():
    params = LeniaParams(kernelMu=0.3)
    assert params.kernel_mu == 0.3
    assert LeniaParams(kernel_mu=0.3) == params
    assert params.export()["kernelMu"] == 0.3
    assert params.merged({"kernelMu": 0.4, "kernel_sigma": 0.1}).kernel_sigma == 0.1


def test_validate_config():
    engine = LeniaEngine(size=8)
    assert validate_config(engine.export_config()) == (True, [])

    valid, errors = validate_config({"size": 8, "state": []})
    assert not valid
    assert "Missing params" in errors
    assert "State size mismatch: expected 64, got 0" in errors

    valid, errors = validate_config({"params": {"R": "big", "mu": 0.1, "sigma": 0.01}})
    assert not valid and errors == ["Invalid R"]

    valid, errors = validate_config({"params": {"R": 8, "mu": 0.1, "sigma": 0.01},
                                     "state": "zeros"})
    assert errors == ["State must be an array"]


def test_seeded_pattern_is_reproducible():
    a = generate_pattern_from_seed(64, 1234)
    b = generate_pattern_from_seed(64, 1234)
    c = generate_pattern_from_seed(64, 4321)
    assert np.array_equal(a, b)
    assert not np.array_equal(a, c)
    assert ((a >= 0) & (a <= 1)).all()
    assert a.sum() > 0

    Y, X = np.ogrid[:64, :64]
    outside = np.sqrt((X - 32) ** 2 + (Y - 32) ** 2) >= 0.25 * 64
    assert (a[outside] == 0).all()

    off_center = generate_pattern_from_seed(64, 5, radius=0.1, center_x=0.2, center_y=0.8,
                                            smooth=False, density=1.0)
    assert off_center[51, 12] > 0
    assert off_center[32, 32] == 0


def test_multi_blob_pattern():
    a = generate_multi_blob_pattern(64, 77, blob_count=4)
    assert np.array_equal(a, generate_multi_blob_pattern(64, 77, blob_count=4))
    assert ((a >= 0) & (a <= 1)).all()
    assert a.sum() > 0


def test_seed_strings():
    assert seed_to_string(0x1A2B) == "1A2B"
    assert seed_to_string(0x0F) == "000F"
    assert string_to_seed("1a2b") == 0x1A2B
    assert string_to_seed("FFFFF") == 0xFFFF
    assert 0 <= string_to_seed("not hex") <= 0xFFFF


def test_every_preset_builds_and_runs():
    assert set(PRESET_ORDER) == set(PRESETS)
    for key in PRESET_ORDER:
        engine, seed = build_engine(key, 32, seed=99)
        expected = MultiChannelLenia if PRESETS[key]["engine"] == "multichannel" else LeniaEngine
        assert isinstance(engine, expected)
        engine.run(2)
        stats = engine.get_stats()
        assert stats["step"] == 2 and stats["mass"] >= 0
        assert seed == 99


def test_multichannel_preset_spreads_params():
    engine, _ = build_engine("prism", 32, seed=1)
    assert [c.params.R for c in engine.channels] == [8, 10, 12]


def test_list_presets():
    lenia_presets = list_presets("lenia")
    assert ("sandbox", "Sandbox", get_preset("sandbox")["description"]) in lenia_presets
    assert all(PRESETS[k]["engine"] == "lenia" for k, _, _ in lenia_presets)
    assert len(list_presets()) == len(PRESETS)
    assert get_preset("nope") is None


def test_cli_run_and_export():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "out.json")
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["orbium", "--size", "32", "--steps", "4", "--every", "2",
                         "--seed", "00FF", "--export", path])
        assert code == 0
        text = out.getvalue()
        assert "[lenia] orbium @ 32x32, seed 00FF" in text
        assert "step     4" in text
        with open(path) as f:
            config = json.load(f)
        assert config["size"] == 32
        assert config["stats"]["step"] == 4


def test_cli_rejects_bad_input():
    out = io.StringIO()
    with redirect_stdout(out):
        assert main(["--bogus"]) == 2
        assert main(["--size", "30", "--steps", "1"]) == 2
        assert main(["--list"]) == 0
    assert "Unknown argument: --bogus" in out.getvalue()
    assert "power of two" in out.getvalue()
    assert "prism" in out.getvalue()


if __name__ == "__main__":
    print("\n=== Testing config, seeding, presets and CLI ===\n")
    for _name, _fn in sorted(globals().items()):
        if _name.startswith("test_") and callable(_fn):
            _fn()
            print(f"  ✓ {_name}")
    print("\n✓ All tests passed!\n")
