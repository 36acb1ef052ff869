import pytest

from deadzone_calc.errors import InvalidArgumentError
from deadzone_calc.multi_round import calc_multi_round_damage


def test_one_round_is_identity():
    single = {-1: 0.25, 0: 0.5, 3: 0.25}
    out = calc_multi_round_damage(single, 1)
    assert out == single
    assert out is not single


def test_two_rounds_of_coin_flip():
    assert calc_multi_round_damage({0: 0.5, 1: 0.5}, 2) == pytest.approx({0: 0.25, 1: 0.5, 2: 0.25})


def test_negative_keys_are_offset_correctly():
    out = calc_multi_round_damage({-1: 0.5, 1: 0.5}, 2)
    assert out == pytest.approx({-2: 0.25, 0: 0.5, 2: 0.25})


def test_three_rounds_preserve_mass_and_range():
    single = {-2: 0.1, 0: 0.6, 1: 0.2, 4: 0.1}
    out = calc_multi_round_damage(single, 3)
    assert sum(out.values()) == pytest.approx(1.0)
    assert min(out) == -6 and max(out) == 12
    assert out[-6] == pytest.approx(0.1 ** 3)
    assert out[12] == pytest.approx(0.1 ** 3)


def test_rejects_zero_rounds():
    with pytest.raises(InvalidArgumentError):
        calc_multi_round_damage({0: 1.0}, 0)
