from itertools import combinations

import pytest
from Crypto.Random import random as crypto_random

from server.errors import (
    InsufficientPointsError,
    InvalidDigitError,
    InvalidSelectionError,
    NonIntegerResultError,
    ShareDocumentError,
    ZeroDenominatorError,
)
from server.fraction import Fraction
from server.shamir_core import (
    Share,
    ShareSet,
    interpolate_at_zero,
    parse_positions,
    reconstruct,
    recover_secret,
    select_shares,
)


def test_end_to_end_line_example():
    # y = 9x + 1 con y en bases mezcladas
    points = [
        Share.from_raw("1", 16, "a"),
        Share.from_raw("2", 10, "19"),
        Share.from_raw("3", 16, "1c"),
    ]
    assert [p.y for p in points] == [10, 19, 28]
    assert reconstruct(points) == 1


def test_any_k_subset_recovers_secret(polynomial):
    secret = crypto_random.getrandbits(256)
    coeffs = [secret] + [crypto_random.getrandbits(256) for _ in range(3)]
    shares = [Share(x, polynomial(coeffs, x)) for x in range(1, 8)]

    for subset in combinations(shares, 4):
        assert reconstruct(subset) == secret


def test_negative_and_unordered_x(polynomial):
    coeffs = [-17, 4, 0, 2]
    shares = [Share(x, polynomial(coeffs, x)) for x in (5, -3, 11, -1)]
    assert reconstruct(shares) == -17


def test_single_point_returns_y():
    assert reconstruct([Share(7, 123456789)]) == 123456789
    assert reconstruct([Share(0, 5)]) == 5


def test_duplicate_x_raises_zero_denominator():
    with pytest.raises(ZeroDenominatorError):
        reconstruct([Share(1, 10), Share(1, 11)])


def test_inconsistent_points_give_wrong_integer():
    # para x = 1, 2, 3 los pesos en 0 son 3, -3, 1: siempre entero
    assert reconstruct([Share(1, 10), Share(2, 19), Share(3, 29)]) == 2


def test_inconsistent_points_give_non_integer():
    assert reconstruct([Share(1, 10), Share(3, 28)]) == 1

    with pytest.raises(NonIntegerResultError) as exc_info:
        reconstruct([Share(1, 10), Share(3, 29)])
    assert exc_info.value.fraction == Fraction(1, 2)


def test_interpolate_at_zero_returns_exact_fraction():
    assert interpolate_at_zero([Share(2, 3), Share(4, 4)]) == Fraction(2)
    assert interpolate_at_zero([Share(2, 3), Share(4, 6)]) == Fraction(0)
    assert interpolate_at_zero([Share(2, 1), Share(4, 4)]) == Fraction(-2)
    assert interpolate_at_zero([Share(2, 1), Share(4, 2)]) == Fraction(0)
    assert interpolate_at_zero([Share(2, 1), Share(6, 2)]) == Fraction(1, 2)


def test_empty_points_rejected():
    with pytest.raises(InsufficientPointsError):
        reconstruct([])


def test_share_from_raw_errors():
    with pytest.raises(ShareDocumentError):
        Share.from_raw("uno", 10, "5")
    with pytest.raises(ShareDocumentError):
        Share.from_raw("1", "hex", "5")
    with pytest.raises(InvalidDigitError):
        Share.from_raw("1", "8", "9")
    assert Share.from_raw("-4", "36", "Z") == Share(-4, 35)


def _share_set():
    # y = x^2 + 3, entregados desordenados
    return ShareSet(3, (Share(6, 39), Share(2, 7), Share(1, 4), Share(3, 12)))


def test_share_set_orders_by_x():
    assert [s.x for s in _share_set().shares] == [1, 2, 3, 6]
    assert len(_share_set()) == 4


def test_default_selection_takes_first_k():
    assert select_shares(_share_set()) == (Share(1, 4), Share(2, 7), Share(3, 12))
    assert recover_secret(_share_set()) == 3


def test_default_selection_ignores_bad_extra_share():
    share_set = ShareSet(3, _share_set().shares + (Share(9, 1),))
    assert recover_secret(share_set) == 3


def test_explicit_selection_uses_positions():
    assert select_shares(_share_set(), [4, 1, 2]) == (Share(6, 39), Share(1, 4), Share(2, 7))
    assert recover_secret(_share_set(), [1, 2, 4]) == 3
    assert recover_secret(_share_set(), (2, 3, 4)) == 3


@pytest.mark.parametrize("positions", [[1, 2], [1, 2, 3, 4], [0, 1, 2], [1, 2, 5], [1, 1, 2], [1, 2, "3"]])
def test_invalid_selection(positions):
    with pytest.raises(InvalidSelectionError):
        select_shares(_share_set(), positions)


def test_insufficient_points_for_default_selection():
    share_set = ShareSet(5, _share_set().shares)
    with pytest.raises(InsufficientPointsError) as exc_info:
        select_shares(share_set)
    assert (exc_info.value.available, exc_info.value.required) == (4, 5)


def test_parse_positions():
    assert parse_positions("1, 3,5") == [1, 3, 5]
    assert parse_positions("2") == [2]
    with pytest.raises(InvalidSelectionError):
        parse_positions("1,a,3")
    with pytest.raises(InvalidSelectionError):
        parse_positions("1,,3")


@pytest.mark.parametrize("threshold", [0, -1, True, "3", 2.0])
def test_share_set_rejects_invalid_threshold(threshold):
    with pytest.raises(InvalidSelectionError):
        ShareSet(threshold, _share_set().shares)


@pytest.mark.parametrize("key", ["1_0", "١", "0x10", " 1", ""])
def test_share_key_must_be_ascii_decimal(key):
    with pytest.raises(ShareDocumentError):
        Share.from_raw(key, 10, "5")


@pytest.mark.parametrize("base", ["1_6", "١٦", "+16", " 16"])
def test_string_base_must_be_ascii_decimal(base):
    with pytest.raises(ShareDocumentError):
        Share.from_raw("1", base, "5")


def test_positions_must_be_ascii_decimal():
    with pytest.raises(InvalidSelectionError):
        parse_positions("1_0,2")
    with pytest.raises(InvalidSelectionError):
        parse_positions("١,2")
