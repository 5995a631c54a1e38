"""Unit tests for the article identifier generator."""

import random
import threading

import pytest

from tinypress.infrastructure.identifiers import ALPHANUMERIC, IdentifierGenerator, generate_id


def test_generate_has_fixed_length_and_alphabet():
    generator = IdentifierGenerator()
    for _ in range(200):
        identifier = generator.generate()
        assert len(identifier) == 8
        assert set(identifier) <= set(ALPHANUMERIC)


def test_alphabet_is_62_symbols():
    assert len(ALPHANUMERIC) == 62
    assert len(set(ALPHANUMERIC)) == 62


def test_seeded_generator_is_deterministic():
    first = IdentifierGenerator(rng=random.Random(42))
    second = IdentifierGenerator(rng=random.Random(42))
    assert [first.generate() for _ in range(5)] == [second.generate() for _ in range(5)]


def test_consecutive_ids_differ():
    generator = IdentifierGenerator()
    ids = {generator.generate() for _ in range(1000)}
    assert len(ids) == 1000


def test_custom_length():
    generator = IdentifierGenerator(length=12)
    assert len(generator.generate()) == 12
    assert generator.length == 12


def test_invalid_configuration_rejected():
    with pytest.raises(ValueError):
        IdentifierGenerator(length=0)
    with pytest.raises(ValueError):
        IdentifierGenerator(alphabet="")


@pytest.mark.parametrize(
    "candidate, expected",
    [
        ("ab12CD34", True),
        ("ab12CD3", False),
        ("ab12CD345", False),
        ("ab12CD3!", False),
        ("../../x1", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid(candidate, expected):
    assert IdentifierGenerator().is_valid(candidate) is expected


def test_concurrent_generation_is_safe():
    generator = IdentifierGenerator()
    results: list[str] = []
    lock = threading.Lock()

    def worker() -> None:
        batch = [generator.generate() for _ in range(200)]
        with lock:
            results.extend(batch)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 1600
    assert all(len(r) == 8 for r in results)


def test_module_helper():
    assert len(generate_id()) == 8
