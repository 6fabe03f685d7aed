"""
Tests for Generator Strategies
==============================
Tests for the four strategies and the generate/generate_batch entry points
in randstring/strategies.py.
"""

import errno
import os
import time
import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from randstring.alphabet import REACHABLE
from randstring.errors import AcquisitionFailure, UnknownStrategy
from randstring.sources import HardwareRng
from randstring.strategies import (
    STRATEGIES,
    STRATEGY_ORDER,
    describe,
    generate,
    generate_batch,
    hardware_string,
    std_my_random_string,
    std_random_string,
    xorshift_string,
)

SEEDED = ('xorshift', 'std-random', 'std-my-random')


@pytest.fixture
def fake_hardware(tmp_path):
    """cpuinfo with rdrand plus a device holding enough bytes for 256 draws."""
    cpuinfo = tmp_path / "cpuinfo"
    cpuinfo.write_text("flags\t\t: fpu sse2 rdrand\n")
    device = tmp_path / "hwrng"
    device.write_bytes(os.urandom(4 * 256))
    return {"device": str(device), "cpuinfo_path": str(cpuinfo)}


@pytest.fixture
def no_hardware(tmp_path):
    return {"device": str(tmp_path / "missing"), "cpuinfo_path": str(tmp_path / "missing_cpuinfo")}


class TestRegistry:
    """Tests for strategy lookup."""

    def test_order(self):
        assert STRATEGY_ORDER == ('xorshift', 'hardware', 'std-random', 'std-my-random')
        assert set(STRATEGY_ORDER) == set(STRATEGIES)

    def test_describe(self):
        info = describe('xorshift')
        assert info.mixer == 'xorshift32'
        assert info.seeded is True
        assert (info.low, info.high) == (0, 61)
        assert describe('hardware').seeded is False

    def test_unknown_strategy(self):
        with pytest.raises(UnknownStrategy):
            generate('nope', 10)

    def test_unknown_strategy_is_value_error(self):
        with pytest.raises(ValueError) as exc_info:
            describe('nope')
        assert 'std-random' in str(exc_info.value)


class TestLengths:
    """Every strategy returns exactly the requested length."""

    @pytest.mark.parametrize("name", SEEDED)
    def test_all_lengths(self, name):
        for length in range(0, 257):
            assert len(generate(name, length, seed=length)) == length

    def test_hardware_all_lengths(self, fake_hardware):
        for length in (0, 1, 31, 32, 255, 256):
            assert len(hardware_string(length, **fake_hardware)) == length

    @pytest.mark.parametrize("name", SEEDED)
    def test_zero_length(self, name):
        assert generate(name, 0) == ""

    @pytest.mark.parametrize("name", STRATEGY_ORDER)
    def test_negative_length(self, name):
        with pytest.raises(ValueError):
            generate(name, -1)

    def test_unseeded_strings_have_length(self):
        assert len(xorshift_string(40)) == 40
        assert len(std_random_string(40)) == 40
        assert len(std_my_random_string(40)) == 40


class TestCharacterSet:
    """No strategy reaches '+' or '/'."""

    @pytest.mark.parametrize("name", SEEDED)
    def test_seeded_only_reachable_symbols(self, name):
        for seed in range(20):
            text = generate(name, 256, seed=seed)
            assert set(text) <= set(REACHABLE)
            assert '+' not in text and '/' not in text

    def test_hardware_only_reachable_symbols(self, fake_hardware):
        text = hardware_string(256, **fake_hardware)
        assert set(text) <= set(REACHABLE)

    def test_hardware_extreme_values(self, tmp_path, fake_hardware):
        """Raw values 62 and 63 wrap to 'A' and 'B' instead of '+' and '/'."""
        device = tmp_path / "fixed"
        device.write_bytes((62).to_bytes(4, 'little') + (63).to_bytes(4, 'little'))
        text = hardware_string(2, device=str(device), cpuinfo_path=fake_hardware["cpuinfo_path"])
        assert text == "AB"


class TestReproducibility:
    """Injected seeds make the seeded strategies deterministic."""

    @pytest.mark.parametrize("name", SEEDED)
    def test_same_seed_same_output(self, name):
        assert generate(name, 64, seed=2024) == generate(name, 64, seed=2024)

    @pytest.mark.parametrize("name", SEEDED)
    def test_different_seed_different_output(self, name):
        assert generate(name, 64, seed=1) != generate(name, 64, seed=2)

    def test_xorshift_differs_from_std_random(self):
        """Same seed, different mixer and mapper."""
        assert xorshift_string(64, seed=5) != std_random_string(64, seed=5)

    def test_std_random_and_std_my_random_share_mapping(self):
        assert std_random_string(64, seed=5) == std_my_random_string(64, seed=5)

    def test_prefix_stable(self):
        """A shorter string is a prefix of a longer one with the same seed."""
        long = std_random_string(50, seed=77)
        short = std_random_string(20, seed=77)
        assert long.startswith(short)

    def test_batch_end_to_end(self):
        batch = generate_batch('std-random', 10, 3, seed=31337)
        assert len(batch) == 3
        for text in batch:
            assert len(text) == 10
            assert set(text) <= set(REACHABLE)
        assert generate_batch('std-random', 10, 3, seed=31337) == batch
        assert len(set(batch)) == 3

    def test_batch_seed_offsets(self):
        batch = generate_batch('xorshift', 12, 2, seed=100)
        assert batch == [xorshift_string(12, seed=100), xorshift_string(12, seed=101)]

    def test_batch_seed_wraps(self):
        batch = generate_batch('std-random', 8, 2, seed=0xFFFFFFFF)
        assert batch[1] == std_random_string(8, seed=0)

    def test_batch_empty(self):
        assert generate_batch('std-random', 10, 0) == []

    def test_batch_negative_count(self):
        with pytest.raises(ValueError):
            generate_batch('std-random', 10, -1)


class TestHardwareStrategy:
    """Tests for the hardware strategy's failure handling."""

    def test_unavailable_returns_empty(self, no_hardware):
        start = time.monotonic()
        assert hardware_string(32, **no_hardware) == ""
        assert time.monotonic() - start < 1.0

    def test_unavailable_through_generate(self, no_hardware):
        assert generate('hardware', 32, **no_hardware) == ""

    def test_seed_is_ignored(self, fake_hardware):
        assert len(generate('hardware', 16, seed=1, **fake_hardware)) == 16

    def test_exhaustion_mid_string_returns_empty(self, tmp_path, fake_hardware):
        """Device runs dry after one value: the whole result is empty."""
        device = tmp_path / "dry"
        device.write_bytes(b"\x05\x00\x00\x00")
        text = hardware_string(3, device=str(device), retries=2,
                               cpuinfo_path=fake_hardware["cpuinfo_path"])
        assert text == ""

    def test_read_error_returns_empty(self, fake_hardware, monkeypatch):
        """A device that passes the probe but fails on read gives an empty string."""
        class BrokenHandle:
            def read(self, n):
                raise OSError(errno.EIO, "Input/output error")

            def close(self):
                pass

        def open_broken(self):
            self._handle = BrokenHandle()
            return self

        monkeypatch.setattr(HardwareRng, "open", open_broken)
        assert hardware_string(4, **fake_hardware) == ""

    def test_unavailable_is_logged(self, no_hardware, caplog):
        with caplog.at_level("INFO", logger="randstring.strategies"):
            hardware_string(8, **no_hardware)
        assert "no hardware RNG" in caplog.text


class TestStdMyRandom:
    """Tests for the OS-seeded strategy."""

    def test_seed_comes_from_os_handle(self, tmp_path):
        device = tmp_path / "urandom"
        device.write_bytes((4242).to_bytes(4, 'little'))
        assert std_my_random_string(24, device=str(device)) == std_random_string(24, seed=4242)

    def test_acquisition_failure_propagates(self, tmp_path):
        with pytest.raises(AcquisitionFailure):
            std_my_random_string(8, device=str(tmp_path / "missing"))

    def test_injected_seed_skips_os_handle(self, tmp_path):
        text = std_my_random_string(8, seed=3, device=str(tmp_path / "missing"))
        assert len(text) == 8
