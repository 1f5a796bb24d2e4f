"""
Tests for hexgrid.traversal: neighbour stepping, grid disks and grid
distance, around hexagons and across pentagon distortion.
"""

import pytest

from hexgrid.codec import pentagons, res0_cells
from hexgrid.config import GridConfig, get_config, set_config
from hexgrid.errors import (
    DomainError,
    ErrorCode,
    IncompatibleResolutionError,
    InvalidIndexError,
    NotComparableError,
    PentagonDirectionError,
)
from hexgrid.hierarchy import children, parent
from hexgrid.ijk import Direction
from hexgrid.index import NULL_INDEX, from_string, is_pentagon, is_valid_cell
from hexgrid.traversal import (
    GridDiskEntry,
    grid_disk,
    grid_disk_distances,
    grid_distance,
    max_grid_disk_size,
    neighbor,
    neighbors,
)

SF_RES9 = 0x8928308280fffff

SF_DISK_1 = {
    "8928308280fffff",
    "8928308280bffff",
    "89283082807ffff",
    "89283082877ffff",
    "89283082803ffff",
    "89283082873ffff",
    "8928308283bffff",
}


@pytest.fixture
def restore_config():
    """Put the process-wide config back after a test changes it."""
    original = get_config()
    yield
    set_config(original)


class TestNeighbor:
    """Single steps on the lattice."""

    def test_centre_direction_is_identity(self):
        assert neighbor(SF_RES9, Direction.CENTER) == SF_RES9

    def test_known_neighbours(self):
        found = {format(neighbor(SF_RES9, d), "x") for d in range(1, 7)}
        assert found | {"8928308280fffff"} == SF_DISK_1

    def test_pentagon_k_direction(self):
        for pentagon in pentagons(4):
            with pytest.raises(PentagonDirectionError) as excinfo:
                neighbor(pentagon, Direction.K)
            assert excinfo.value.code == ErrorCode.NOT_COMPARABLE

    def test_neighbour_counts_res1(self):
        for base in res0_cells():
            for h in children(base, 1):
                expected = 5 if is_pentagon(h) else 6
                assert len(neighbors(h)) == expected

    def test_neighbours_are_mutual(self):
        """Stepping across any res 1 edge can be undone."""
        for base in res0_cells():
            for h in children(base, 1):
                for n in neighbors(h):
                    assert is_valid_cell(n)
                    assert n != h
                    assert h in neighbors(n)

    def test_res0_neighbours_follow_table(self):
        for h in res0_cells():
            for n in neighbors(h):
                assert h in neighbors(n)


class TestGridDisk:
    """Breadth-first disks."""

    def test_k0(self):
        assert grid_disk(SF_RES9, 0) == [SF_RES9]

    def test_k1_san_francisco(self):
        disk = grid_disk(SF_RES9, 1)
        assert disk[0] == SF_RES9
        assert {format(h, "x") for h in disk} == SF_DISK_1

    @pytest.mark.parametrize("k", [1, 2, 3, 5])
    def test_hexagon_disk_size(self, k):
        disk = grid_disk(SF_RES9, k)
        assert len(disk) == len(set(disk)) == max_grid_disk_size(k)

    def test_pentagon_disk(self):
        for pentagon in pentagons(5):
            disk = grid_disk(pentagon, 2)
            assert disk[0] == pentagon
            # one cell fewer per ring distance
            assert len(disk) == 1 + 5 + 10
            assert len(set(disk)) == len(disk)
            assert len(disk) <= max_grid_disk_size(2)

    def test_res0_pentagon_disk(self):
        for pentagon in pentagons(0):
            assert len(grid_disk(pentagon, 1)) == 6

    def test_same_resolution(self):
        for h in grid_disk(SF_RES9, 3):
            assert parent(h, 9) == h

    def test_invalid_origin(self):
        with pytest.raises(InvalidIndexError):
            grid_disk(NULL_INDEX, 1)

    def test_negative_k(self):
        with pytest.raises(DomainError):
            grid_disk(SF_RES9, -1)

    @pytest.mark.parametrize("origin", [SF_RES9, 0x81d47ffffffffff] + pentagons(3))
    def test_every_cell_valid(self, origin):
        for entry in grid_disk_distances(origin, 3):
            assert is_valid_cell(entry.index)

    def test_invalid_step_rejected(self, monkeypatch):
        """A neighbour step producing a malformed index fails the disk."""
        monkeypatch.setattr("hexgrid.traversal.neighbor", lambda cell, direction: NULL_INDEX)
        with pytest.raises(InvalidIndexError):
            grid_disk(SF_RES9, 1)


class TestGridDiskDistances:
    def test_entries(self):
        entries = grid_disk_distances(SF_RES9, 2)
        assert entries[0] == GridDiskEntry(SF_RES9, 0)
        assert [e.distance for e in entries] == sorted(e.distance for e in entries)
        counts = {}
        for entry in entries:
            counts[entry.distance] = counts.get(entry.distance, 0) + 1
        assert counts == {0: 1, 1: 6, 2: 12}

    def test_matches_disk(self):
        entries = grid_disk_distances(SF_RES9, 3)
        assert [e.index for e in entries] == grid_disk(SF_RES9, 3)

    def test_entry_is_frozen(self):
        entry = GridDiskEntry(SF_RES9, 0)
        with pytest.raises(AttributeError):
            entry.distance = 1


class TestMaxGridDiskSize:
    @pytest.mark.parametrize("k,expected", [(0, 1), (1, 7), (2, 19), (10, 331)])
    def test_formula(self, k, expected):
        assert max_grid_disk_size(k) == expected

    def test_default_limit(self):
        assert max_grid_disk_size(13780510) == 3 * 13780510 * 13780511 + 1
        with pytest.raises(DomainError):
            max_grid_disk_size(13780511)

    @pytest.mark.parametrize("k", [-1, 1.5, "2", None])
    def test_invalid_k(self, k):
        with pytest.raises(DomainError):
            max_grid_disk_size(k)

    def test_configured_limit(self, restore_config):
        set_config(GridConfig(max_grid_disk_k=3))
        assert max_grid_disk_size(3) == 37
        with pytest.raises(DomainError):
            grid_disk(SF_RES9, 4)


class TestGridDistance:
    """Lattice distance between cells."""

    def test_self(self):
        assert grid_distance(SF_RES9, SF_RES9) == 0

    def test_neighbours(self):
        for h in SF_DISK_1 - {"8928308280fffff"}:
            assert grid_distance(SF_RES9, from_string(h)) == 1

    def test_matches_disk_distance(self):
        for entry in grid_disk_distances(SF_RES9, 4):
            assert grid_distance(SF_RES9, entry.index) == entry.distance

    def test_symmetric(self):
        for h in grid_disk(SF_RES9, 3):
            assert grid_distance(SF_RES9, h) == grid_distance(h, SF_RES9)

    def test_pentagon_neighbours(self):
        for pentagon in pentagons(5):
            for n in neighbors(pentagon):
                assert grid_distance(pentagon, n) == 1

    def test_different_resolutions(self):
        with pytest.raises(IncompatibleResolutionError) as excinfo:
            grid_distance(SF_RES9, parent(SF_RES9, 8))
        assert excinfo.value.code == ErrorCode.INCOMPATIBLE_RESOLUTION

    def test_distant_base_cells(self):
        cells = res0_cells()
        with pytest.raises(NotComparableError):
            grid_distance(cells[0], cells[121])

    def test_invalid_cell(self):
        with pytest.raises(InvalidIndexError):
            grid_distance(SF_RES9, NULL_INDEX)
