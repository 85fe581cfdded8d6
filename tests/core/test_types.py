"""Tests for square coordinates."""

import pytest

from fenboard.core.errors import FormatError, RangeError
from fenboard.core.types import (
    A1,
    A8,
    E4,
    H1,
    H8,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
    square_to_coordinate,
)


class TestLayout:
    def test_corners(self) -> None:
        assert (A8, H8, A1, H1) == (0, 7, 56, 63)

    def test_rank_and_file(self) -> None:
        assert rank_of(E4) == 4
        assert file_of(E4) == 4

    def test_make_square(self) -> None:
        assert make_square(4, 4) == E4
        assert make_square(7, 7) == H1

    @pytest.mark.parametrize(("rank", "file"), [(-1, 0), (8, 0), (0, -1), (0, 8)])
    def test_make_square_out_of_range(self, rank: int, file: int) -> None:
        with pytest.raises(RangeError):
            make_square(rank, file)

    @pytest.mark.parametrize(("rank", "file"), [(1.5, 0), (0, 2.0), ("0", 0), (True, 0)])
    def test_make_square_rejects_non_integers(self, rank: object, file: object) -> None:
        with pytest.raises(RangeError):
            make_square(rank, file)  # type: ignore[arg-type]


class TestSquareToCoordinate:
    def test_e4(self) -> None:
        assert square_to_coordinate(E4) == ("e", "4")

    def test_names(self) -> None:
        assert square_name(0) == "a8"
        assert square_name(63) == "h1"

    @pytest.mark.parametrize("sq", [-1, 64, 100])
    def test_out_of_range(self, sq: int) -> None:
        with pytest.raises(RangeError, match="outside board"):
            square_to_coordinate(sq)

    def test_range_error_is_index_error(self) -> None:
        with pytest.raises(IndexError):
            square_name(64)


class TestParseSquare:
    def test_e4(self) -> None:
        sq = parse_square("e4")
        assert sq == E4
        assert square_name(sq) == "e4"

    def test_inverse_for_every_square(self) -> None:
        for sq in range(64):
            assert parse_square(square_name(sq)) == sq

    @pytest.mark.parametrize("text", ["i9", "e", "", "e44", "E4", "e0", "e9", "4e"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(FormatError, match="Invalid square name"):
            parse_square(text)

    def test_format_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_square("z1")
