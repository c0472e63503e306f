import pytest

from logicsweeper.utils import Position, get_neighborhoods, parse_position_key, position_key


def test_corner_edge_and_interior_neighbor_counts():
    nbrs = get_neighborhoods(4, 5)
    assert len(nbrs[Position(0, 0)]) == 3
    assert len(nbrs[Position(0, 2)]) == 5
    assert len(nbrs[Position(3, 4)]) == 3
    assert len(nbrs[Position(2, 2)]) == 8


def test_neighbors_exclude_cell_itself_and_stay_in_bounds():
    for pos, nbrs in get_neighborhoods(3, 3).items():
        assert pos not in nbrs
        for n in nbrs:
            assert 0 <= n.row < 3 and 0 <= n.col < 3
            assert max(abs(n.row - pos.row), abs(n.col - pos.col)) == 1


def test_neighborhoods_are_cached_per_shape():
    assert get_neighborhoods(6, 7) is get_neighborhoods(6, 7)
    assert get_neighborhoods(6, 7) is not get_neighborhoods(7, 6)


def test_non_positive_shape_rejected():
    with pytest.raises(ValueError):
        get_neighborhoods(0, 5)


def test_position_key_round_trip():
    assert position_key(3, 12) == "3-12"
    assert parse_position_key("3-12") == Position(3, 12)
    with pytest.raises(ValueError):
        parse_position_key("3")
