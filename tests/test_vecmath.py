import math

import pytest

from polygraph.vecmath import Vec2, Vec3, Vec3Ord


def test_round_trip_through_ord():
    v = Vec3(1.5, -2.25, 3.0)
    assert v.to_ord().to_vec() == v


def test_ord_equal_for_equal_vectors_and_hash_matches():
    a = Vec3(0.1, 0.2, 0.3).to_ord()
    b = Vec3(0.1, 0.2, 0.3).to_ord()
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_ord_is_lexicographic():
    low = Vec3(0.0, 0.0, 1.0).to_ord()
    mid = Vec3(0.0, 1.0, 0.0).to_ord()
    high = Vec3(1.0, 0.0, 0.0).to_ord()
    assert sorted([high, low, mid]) == [low, mid, high]


def test_nan_equals_itself_and_sorts_last():
    nan = Vec3(math.nan, 0.0, 0.0).to_ord()
    other = Vec3(math.nan, 0.0, 0.0).to_ord()
    inf = Vec3(math.inf, 0.0, 0.0).to_ord()
    assert nan == other
    assert hash(nan) == hash(other)
    assert inf < nan


def test_negative_zero_sorts_before_zero():
    assert Vec3(-0.0, 0.0, 0.0).to_ord() < Vec3(0.0, 0.0, 0.0).to_ord()


def test_ord_usable_as_dict_key():
    table = {Vec3(1.0, 2.0, 3.0).to_ord(): "a"}
    assert table[Vec3Ord((1.0, 2.0, 3.0))] == "a"


def test_vec3_arithmetic_invariants():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(4.0, -5.0, 6.5)
    assert a + b - b == a
    assert a * 2 == a + a
    assert 2 * a == a * 2
    assert -a + a == Vec3.ZERO
    assert (a * 4) / 4 == a


def test_vec3_axes_combine_to_one():
    total = Vec3.X + Vec3.Y + Vec3.Z
    assert total.to_ord() == Vec3(1.0, 1.0, 1.0).to_ord()
    assert total.to_ord().to_vec() == Vec3.ONE
    assert tuple(Vec3(0.0, 1.0, 0.0)) == (0.0, 1.0, 0.0)


def test_vec2_arithmetic_invariants():
    a = Vec2(3.0, -1.0)
    b = Vec2(0.5, 2.0)
    assert a + b - b == a
    assert a - a == Vec2.ZERO
    assert Vec2.ONE * 3 == Vec2(3.0, 3.0)


def test_vectors_are_immutable():
    v = Vec3(1.0, 2.0, 3.0)
    with pytest.raises(AttributeError):
        v.x = 5.0  # type: ignore[misc]
    assert v.x == 1.0
    assert v.to_ord().to_vec() == Vec3(1.0, 2.0, 3.0)