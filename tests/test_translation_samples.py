from __future__ import annotations

import random

import pytest

from linguastore.schemas.translation import TranslationCreate
from linguastore.utils import generate_translation_samples, sample_translation_map
from scripts.seed_translations import _parse_args


def test_sample_map_has_requested_unique_keys() -> None:
    mapping = sample_translation_map(entries=10, seed=7)

    assert len(mapping) == 10
    assert all(value.endswith(".") for value in mapping.values())


def test_samples_are_reproducible_and_valid() -> None:
    first = list(generate_translation_samples(5, seed=42))
    second = list(generate_translation_samples(5, rng=random.Random(42)))

    assert first == second
    for payload in first:
        TranslationCreate(**payload)
        assert payload["context"] in {"mobile", "web", "desktop"}


def test_negative_count_yields_nothing() -> None:
    assert list(generate_translation_samples(-1, seed=1)) == []


def test_seed_cli_defaults() -> None:
    args = _parse_args([])

    assert args.count == 100_000
    assert args.batch_size == 1000
    assert args.entries == 10
    assert args.dry_run is False


def test_seed_cli_rejects_bad_sizes() -> None:
    with pytest.raises(SystemExit):
        _parse_args(["--batch-size", "0"])
