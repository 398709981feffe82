"""Tests for patient identifier generation."""

from __future__ import annotations

import random
import re
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[3]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from services.patient_registry.identifiers import (
    generate_id,
    generate_uuid_id,
    get_id_generator,
)

TIMESTAMP_ID = re.compile(r"PAT-(\d+)-(\d{1,3})")


def test_generate_id_uses_epoch_millis_and_small_suffix() -> None:
    patient_id = generate_id(clock=lambda: 1714557600.5, rng=random.Random(7))

    match = TIMESTAMP_ID.fullmatch(patient_id)
    assert match is not None
    assert match.group(1) == "1714557600500"
    assert 0 <= int(match.group(2)) <= 999


def test_generate_id_default_sources() -> None:
    for _ in range(50):
        match = TIMESTAMP_ID.fullmatch(generate_id())
        assert match is not None
        assert 0 <= int(match.group(2)) <= 999


def test_generate_uuid_id_format_and_uniqueness() -> None:
    ids = {generate_uuid_id() for _ in range(100)}

    assert len(ids) == 100
    assert all(re.fullmatch(r"PAT-[0-9a-f]{32}", value) for value in ids)


def test_get_id_generator_resolves_strategies() -> None:
    assert get_id_generator("timestamp") is generate_id
    assert get_id_generator("uuid") is generate_uuid_id


def test_get_id_generator_rejects_unknown_strategy() -> None:
    with pytest.raises(ValueError, match="Unknown identifier strategy"):
        get_id_generator("sequential")
