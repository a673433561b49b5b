import math

import pytest
from hypothesis import given, settings
from hypothesis.strategies import integers, lists

from core.fraction import Fraction, simplify
from core.seed import RNG
from core.target import (TargetSelectionError, proper_divisors, pick_reachable_target,
                         reachable_sums, pick_target_for_cells, is_correct)


class ScriptedRNG:
    """RNG mínimo que fija el divisor elegido y el valor de randrange."""

    def __init__(self, divisor: int, draw: int):
        self.divisor = divisor
        self.draw = draw

    def choice(self, seq):
        assert self.divisor in seq
        return self.divisor

    def randrange(self, n: int) -> int:
        assert 0 <= self.draw < n
        return self.draw


def test_simplify_examples() -> None:
    assert simplify(6, 8) == Fraction(3, 4)
    assert simplify(-6, 8) == Fraction(-3, 4)
    assert simplify(0, 5) == Fraction(0, 1)
    assert simplify(6, -8) == Fraction(-3, 4)
    assert str(simplify(4, 12)) == "1/3"


def test_simplify_rejects_zero_denominator() -> None:
    with pytest.raises(ValueError):
        simplify(1, 0)


@given(a=integers(-10**6, 10**6), b=integers(-10**6, 10**6).filter(lambda b: b != 0))
def test_simplify_is_reduced_and_equivalent(a: int, b: int) -> None:
    f = simplify(a, b)
    assert f.denominator > 0
    assert math.gcd(f.numerator, f.denominator) == 1
    assert f.numerator * b == a * f.denominator
    assert simplify(f.numerator, f.denominator) == f


def test_proper_divisors() -> None:
    assert proper_divisors(12) == [1, 2, 3, 4, 6]
    assert proper_divisors(16) == [1, 2, 4, 8]
    assert proper_divisors(2) == [1]
    assert proper_divisors(7) == [1]


@pytest.mark.parametrize("draw", [0, 1])
def test_scripted_divisor_four_of_twelve(draw: int) -> None:
    target_units, frac = pick_reachable_target(12, ScriptedRNG(4, draw))
    assert target_units == 4
    assert frac == Fraction(1, 3)


@settings(max_examples=100)
@given(total=integers(2, 2000), seed=integers(0, 2**32))
def test_target_strictly_inside_total(total: int, seed: int) -> None:
    target_units, frac = pick_reachable_target(total, RNG(seed))
    assert 0 < target_units < total
    assert frac == simplify(target_units, total)
    assert total % frac.denominator == 0


@pytest.mark.parametrize("total", [0, 1])
def test_total_below_two_fails_fast(total: int) -> None:
    with pytest.raises(TargetSelectionError):
        pick_reachable_target(total, RNG(1))


def test_reachable_sums_table() -> None:
    reach = reachable_sums([4, 1, 1])
    assert [s for s in range(len(reach)) if reach[s]] == [0, 1, 2, 4, 5, 6]


@settings(max_examples=60)
@given(units=lists(integers(1, 16), min_size=2, max_size=20), seed=integers(0, 2**32))
def test_target_for_cells_is_subset_reachable(units, seed: int) -> None:
    total = sum(units)
    target_units, frac = pick_target_for_cells(units, RNG(seed))
    assert 0 < target_units < total
    assert reachable_sums(units)[target_units]
    assert frac == simplify(target_units, total)


def test_target_for_cells_falls_back_to_reachable_sum() -> None:
    target_units, frac = pick_target_for_cells([3, 3], RNG(1), max_attempts=0)
    assert target_units == 3
    assert frac == Fraction(1, 2)


def test_target_for_cells_needs_two_cells() -> None:
    with pytest.raises(TargetSelectionError):
        pick_target_for_cells([4], RNG(1))


def test_is_correct_uses_exact_equality() -> None:
    assert is_correct(4, 4)
    assert not is_correct(5, 4)
