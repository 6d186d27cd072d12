"""Tests for sequence sources and validation."""
import pytest

from sequence import InvalidInput, is_sorted, parse_custom_input, random_sequence, validate_sequence


class TestRandomSequence:
    def test_size_and_range(self):
        values = random_sequence(50)
        assert len(values) == 50
        assert all(1 <= v <= 100 for v in values)

    def test_seeded_is_reproducible(self):
        assert random_sequence(20, seed=7) == random_sequence(20, seed=7)

    def test_custom_range(self):
        assert set(random_sequence(30, low=4, high=4)) == {4}

    def test_zero_size(self):
        assert random_sequence(0) == []

    def test_negative_size(self):
        with pytest.raises(InvalidInput):
            random_sequence(-1)

    def test_empty_range(self):
        with pytest.raises(InvalidInput):
            random_sequence(5, low=10, high=1)


class TestParseCustomInput:
    def test_skips_invalid_tokens(self):
        assert parse_custom_input("64, 34, x, 25,, 3.5, -2") == [64, 34, 25, 3, -2]

    def test_takes_leading_integer_of_each_token(self):
        assert parse_custom_input("3abc, 1_000, +7, 12px, - 4") == [3, 1, 7, 12]

    def test_ignores_non_ascii_digits(self):
        assert parse_custom_input("\u0663, 5, \uff17") == [5]

    def test_nothing_valid(self):
        with pytest.raises(InvalidInput):
            parse_custom_input("a, b, ,")
        with pytest.raises(InvalidInput):
            parse_custom_input("")

    def test_limit(self):
        assert parse_custom_input("1,2,3", limit=3) == [1, 2, 3]
        with pytest.raises(InvalidInput):
            parse_custom_input("1,2,3,4", limit=3)


class TestValidateSequence:
    def test_returns_copy(self):
        values = [3, 1]
        copy = validate_sequence(values)
        copy.append(9)
        assert values == [3, 1]

    def test_accepts_tuples_and_floats(self):
        assert validate_sequence((1.5, -2)) == [1.5, -2]

    @pytest.mark.parametrize("bad", [[float("nan")], [float("-inf")], [None], [True], ["1"], "12"])
    def test_rejects(self, bad):
        with pytest.raises(InvalidInput):
            validate_sequence(bad)

    def test_integers_only(self):
        assert validate_sequence([1, -4], integers_only=True) == [1, -4]
        with pytest.raises(InvalidInput):
            validate_sequence([1, 2.0], integers_only=True)

    def test_invalid_input_is_value_error(self):
        assert issubclass(InvalidInput, ValueError)


def test_is_sorted():
    assert is_sorted([])
    assert is_sorted([1, 1, 2])
    assert not is_sorted([2, 1])
