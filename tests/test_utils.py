import pytest

from cliffordscope.utils import (
    RGB,
    Direction,
    make_rng,
    random_float,
)


class _FixedBits:
    def __init__(self, value):
        self.value = value

    def getrandbits(self, k):
        assert k == 32
        return self.value


def test_random_float_scales_bits():
    assert random_float(_FixedBits(0)) == 0.0
    assert random_float(_FixedBits(2**31)) == 0.5


def test_random_float_stays_below_one():
    assert random_float(_FixedBits(2**32 - 1)) < 1.0


def test_random_float_range_with_real_rng():
    rng = make_rng(1234)
    values = [random_float(rng) for _ in range(1000)]
    assert all(0.0 <= v < 1.0 for v in values)
    assert len(set(values)) > 900


def test_make_rng_is_deterministic_for_seed():
    a = make_rng(42)
    b = make_rng(42)
    assert [random_float(a) for _ in range(10)] == [random_float(b) for _ in range(10)]


def test_different_seeds_differ():
    a = make_rng(1)
    b = make_rng(2)
    assert [random_float(a) for _ in range(5)] != [random_float(b) for _ in range(5)]


def test_rgb_holds_channels():
    colour = RGB(1, 2, 3)
    assert (colour.r, colour.g, colour.b) == (1, 2, 3)


@pytest.mark.parametrize("channels", [(-1, 0, 0), (0, 256, 0), (0, 0, 300)])
def test_rgb_rejects_out_of_range(channels):
    with pytest.raises(ValueError):
        RGB(*channels)


def test_direction_members_and_lookup():
    members = list(Direction)
    assert [m.name for m in members] == ["FRONT", "BACK", "LEFT", "RIGHT", "UP", "DOWN"]
    assert [Direction(m.value) for m in members] == members