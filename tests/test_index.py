"""
Tests for hexgrid.index: bit layout, validation and the hex string form.
"""

import pytest

from hexgrid.errors import ErrorCode, InvalidIndexError, MalformedStringError
from hexgrid.ijk import Direction
from hexgrid.index import (
    DIRECTED_EDGE_MODE,
    NULL_INDEX,
    VERTEX_MODE,
    from_string,
    get_base_cell,
    get_digit,
    get_mode,
    get_resolution,
    is_pentagon,
    is_valid_cell,
    is_valid_index,
    new_cell,
    set_digit,
    set_mode,
    set_reserved_bits,
    to_string,
)

SF_RES9 = 0x8928308280fffff


class TestLayout:
    """Field extraction from a known index."""

    def test_fields(self):
        assert get_mode(SF_RES9) == 1
        assert get_resolution(SF_RES9) == 9
        assert get_base_cell(SF_RES9) == 20
        assert get_digit(SF_RES9, 8) == 0
        assert get_digit(SF_RES9, 9) == 3
        # unused digits hold the sentinel
        for r in range(10, 16):
            assert get_digit(SF_RES9, r) == 7

    def test_new_cell(self):
        assert new_cell(0, 20) == 0x8029fffffffffff
        assert new_cell(0, 4) == 0x8009fffffffffff


class TestIsValidCell:
    """Structural validation of cell indexes."""

    def test_known_cell(self):
        assert is_valid_cell(SF_RES9)

    @pytest.mark.parametrize("value", [NULL_INDEX, -1, 1 << 64, "8928308280fffff", 3.0, None, True])
    def test_rejects_non_cells(self, value):
        assert not is_valid_cell(value)

    def test_rejects_high_bit(self):
        assert not is_valid_cell(SF_RES9 | (1 << 63))

    def test_rejects_other_modes(self):
        assert not is_valid_cell(set_mode(SF_RES9, DIRECTED_EDGE_MODE))

    def test_rejects_reserved_bits(self):
        assert not is_valid_cell(set_reserved_bits(SF_RES9, 1))

    def test_rejects_base_cell_out_of_range(self):
        assert not is_valid_cell(new_cell(0, 122))
        assert is_valid_cell(new_cell(0, 121))

    def test_rejects_sentinel_below_resolution(self):
        assert not is_valid_cell(set_digit(SF_RES9, 9, 7))

    def test_rejects_digit_past_resolution(self):
        assert not is_valid_cell(set_digit(SF_RES9, 10, 0))

    def test_pentagon_leading_k_rejected(self):
        h = new_cell(2, 4, Direction.CENTER)
        assert is_valid_cell(h)
        assert not is_valid_cell(set_digit(h, 1, Direction.K))
        assert not is_valid_cell(set_digit(h, 2, Direction.K))

    def test_pentagon_k_after_leading_digit_allowed(self):
        h = new_cell(2, 4, Direction.CENTER)
        h = set_digit(h, 1, Direction.J)
        h = set_digit(h, 2, Direction.K)
        assert is_valid_cell(h)

    def test_hexagon_leading_k_allowed(self):
        h = set_digit(new_cell(1, 20, Direction.CENTER), 1, Direction.K)
        assert is_valid_cell(h)


class TestIsValidIndex:
    """Edge and vertex modes pass the structural check."""

    def test_cell(self):
        assert is_valid_index(SF_RES9)

    def test_directed_edge(self):
        edge = set_reserved_bits(set_mode(SF_RES9, DIRECTED_EDGE_MODE), 3)
        assert is_valid_index(edge)
        assert not is_valid_cell(edge)
        assert not is_valid_index(set_reserved_bits(edge, 0))
        assert not is_valid_index(set_reserved_bits(edge, 7))

    def test_vertex(self):
        vertex = set_reserved_bits(set_mode(SF_RES9, VERTEX_MODE), 5)
        assert is_valid_index(vertex)
        assert not is_valid_index(set_reserved_bits(vertex, 6))

    def test_unknown_mode(self):
        assert not is_valid_index(set_mode(SF_RES9, 3))


class TestPentagon:
    def test_res0_pentagon(self):
        assert is_pentagon(new_cell(0, 4))
        assert not is_pentagon(new_cell(0, 20))

    def test_centre_lineage_only(self):
        h = new_cell(3, 4, Direction.CENTER)
        assert is_pentagon(h)
        assert not is_pentagon(set_digit(h, 3, Direction.J))


class TestStrings:
    """Canonical lowercase hex form."""

    def test_to_string(self):
        assert to_string(SF_RES9) == "8928308280fffff"

    def test_from_string(self):
        assert from_string("8928308280fffff") == SF_RES9

    def test_case_insensitive(self):
        assert from_string("8928308280FFFFF") == SF_RES9

    def test_zero_parses_to_null(self):
        assert from_string("0") == NULL_INDEX
        assert not is_valid_cell(from_string("0"))

    @pytest.mark.parametrize("text", ["", "0x8928308280fffff", "8928308280fffffg", "1" * 17, " 89", "-1"])
    def test_malformed(self, text):
        with pytest.raises(MalformedStringError) as excinfo:
            from_string(text)
        assert excinfo.value.code == ErrorCode.MALFORMED_STRING

    def test_non_string(self):
        with pytest.raises(MalformedStringError):
            from_string(0x8928308280fffff)

    def test_to_string_rejects_non_int(self):
        with pytest.raises(InvalidIndexError):
            to_string("8928308280fffff")

    def test_round_trip(self):
        for h in (SF_RES9, new_cell(0, 0), new_cell(15, 121, Direction.IJ)):
            assert from_string(to_string(h)) == h
