import math

import pytest

from deadzone_calc.errors import InvalidArgumentError
from deadzone_calc.probability import (
    add_to_map_value,
    binomial_pmf,
    check_mass,
    cumulative_at_least,
    expected_value,
    normalize_map_values,
    total_mass,
)


def test_add_to_map_value_initialises_missing_key():
    m = {}
    add_to_map_value(m, 3, 1)
    add_to_map_value(m, 3, 2)
    add_to_map_value(m, -1, 0)
    assert m == {3: 3, -1: 0}


def test_normalize_map_values_divides_in_place():
    m = {0: 2, 1: 6}
    normalize_map_values(m, 8)
    assert m == {0: 0.25, 1: 0.75}


def test_normalize_map_values_rejects_zero_divisor():
    with pytest.raises(InvalidArgumentError):
        normalize_map_values({0: 1}, 0)


@pytest.mark.parametrize("n,p", [(0, 0.375), (1, 0.375), (5, 0.2), (12, 0.375), (40, 0.9)])
def test_binomial_pmf_sums_to_one(n, p):
    assert math.fsum(binomial_pmf(n, k, p) for k in range(n + 1)) == pytest.approx(1.0)


def test_binomial_pmf_known_values():
    assert binomial_pmf(1, 1, 0.375) == 0.375
    assert binomial_pmf(4, 0, 0.375) == pytest.approx(0.625 ** 4)
    assert binomial_pmf(2, 1, 0.375) == pytest.approx(2 * 0.375 * 0.625)
    assert binomial_pmf(3, 3, 1.0) == 1.0
    assert binomial_pmf(3, 0, 0.0) == 1.0
    assert binomial_pmf(3, 1, 0.0) == 0.0


def test_binomial_pmf_large_pool_is_finite():
    val = binomial_pmf(60, 30, 0.375)
    assert 0.0 < val < 1.0


@pytest.mark.parametrize("n,k,p", [(2, 3, 0.5), (2, -1, 0.5), (-1, 0, 0.5), (2, 1, 1.5)])
def test_binomial_pmf_rejects_bad_arguments(n, k, p):
    with pytest.raises(InvalidArgumentError):
        binomial_pmf(n, k, p)


def test_summary_helpers():
    m = {-1: 0.2, 0: 0.5, 2: 0.3}
    assert total_mass(m) == pytest.approx(1.0)
    assert expected_value(m) == pytest.approx(0.4)
    assert cumulative_at_least(m) == pytest.approx({2: 0.3, 0: 0.8, -1: 1.0})


def test_check_mass_flags_drift():
    assert check_mass({0: 0.5, 1: 0.5})
    assert not check_mass({0: 0.5, 1: 0.4})
