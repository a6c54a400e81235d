"""Shared pytest fixtures: synthetic MLG files built by tools/sim_logger.py."""
from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest

REPO = Path(__file__).resolve().parents[1]


def _load_sim():
    spec = importlib.util.spec_from_file_location("sim_logger", REPO / "tools" / "sim_logger.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="session")
def sim():
    """The sim_logger module (field(), pack_measurement(), pack_marker(), build_mlg())."""
    return _load_sim()


@pytest.fixture()
def sample_fields(sim) -> list[dict]:
    return [
        sim.field("RPM", "rpm", ftype=2, digits=0),
        sim.field("Lambda", "", ftype=7, scale=2.0, transform=5.0, digits=1),
        sim.field("Fan", "", ftype=10, style=sim.STYLE_ON_OFF),
    ]


@pytest.fixture()
def sample_bytes(sim, sample_fields) -> bytes:
    """Two measurement blocks around one marker."""
    blocks = [
        sim.pack_measurement(sample_fields, 0, 100, [1234, 10.0, 1]),
        sim.pack_marker(1, 150, "Lap 1"),
        sim.pack_measurement(sample_fields, 2, 200, [5000, 0.5, 0], crc=0xAB),
    ]
    return sim.build_mlg(sample_fields, blocks, bit_field_names=b"bits\x00", info=b"Firmware : sim\x00\x00")


@pytest.fixture()
def sample_file(tmp_path, sample_bytes) -> Path:
    p = tmp_path / "sample.mlg"
    p.write_bytes(sample_bytes)
    return p
