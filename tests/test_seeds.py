from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

import pytest

from transducer.exceptions import UnsupportedSeed
from transducer.seeds import clone_seed, validate_seed


@pytest.mark.parametrize(
    "seed",
    [0, 1.5, "text", b"raw", True, Decimal("1.10"), Fraction(1, 3), (1, "a"), frozenset({1})],
)
def test_plain_seeds_are_accepted(seed) -> None:
    validate_seed(seed)
    assert clone_seed(seed) == seed


def test_nested_containers_are_deep_copied() -> None:
    seed = {"totals": [0, 0], "tags": {"a"}, "meta": {"nested": [1, [2]]}}
    validate_seed(seed)

    copy = clone_seed(seed)
    copy["totals"].append(1)
    copy["meta"]["nested"][1].append(3)

    assert seed == {"totals": [0, 0], "tags": {"a"}, "meta": {"nested": [1, [2]]}}


def test_shared_references_are_not_cycles() -> None:
    shared = [1]
    validate_seed({"a": shared, "b": shared})


def test_reference_cycle_is_rejected() -> None:
    seed: list = []
    seed.append(seed)
    with pytest.raises(UnsupportedSeed, match="cycle"):
        validate_seed(seed)


@pytest.mark.parametrize("seed", [len, object(), {"fn": lambda: None}, [1, open]])
def test_non_data_seeds_are_rejected(seed) -> None:
    with pytest.raises(UnsupportedSeed):
        validate_seed(seed)


def test_unsupported_dict_key_is_rejected() -> None:
    with pytest.raises(UnsupportedSeed):
        validate_seed({object(): 1})
