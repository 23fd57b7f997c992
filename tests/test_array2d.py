import pytest

from cookie_crunch.utils.array2d import Array2D


def test_cells_start_empty():
    grid = Array2D(3, 2)
    assert all(grid.get(c, r) is None for c in range(3) for r in range(2))
    assert list(grid.values()) == []


def test_set_and_get_by_column_row():
    grid = Array2D(3, 2)
    grid.set(2, 1, "a")
    grid.set(0, 1, "b")
    assert grid.get(2, 1) == "a"
    assert grid.get(0, 1) == "b"
    assert grid.get(1, 0) is None
    grid.set(2, 1, None)
    assert grid.get(2, 1) is None


@pytest.mark.parametrize("column,row", [(-1, 0), (0, -1), (3, 0), (0, 2), (5, 5)])
def test_out_of_bounds_access_raises(column, row):
    grid = Array2D(3, 2)
    with pytest.raises(IndexError):
        grid.get(column, row)
    with pytest.raises(IndexError):
        grid.set(column, row, "x")


def test_in_bounds_does_not_raise():
    grid = Array2D(3, 2)
    assert grid.in_bounds(2, 1)
    assert not grid.in_bounds(3, 1)
    assert not grid.in_bounds(0, -1)


def test_values_bottom_row_first():
    grid = Array2D(2, 2)
    grid.set(1, 1, "top-right")
    grid.set(0, 0, "bottom-left")
    assert list(grid.values()) == ["bottom-left", "top-right"]


def test_rejects_empty_dimensions():
    with pytest.raises(ValueError):
        Array2D(0, 4)
