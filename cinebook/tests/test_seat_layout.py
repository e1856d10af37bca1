import pytest

from cinebook.services.seat_layout import MAX_ROWS, generate_seat_grid


def test_rows_fill_left_to_right():
    grid = list(generate_seat_grid(12, 5))
    assert grid[:6] == [("A", 1), ("A", 2), ("A", 3), ("A", 4), ("A", 5), ("B", 1)]
    # last row is partial
    assert grid[-2:] == [("C", 1), ("C", 2)]
    assert len(grid) == 12


def test_every_seat_is_unique():
    grid = list(generate_seat_grid(100, 10))
    assert len(set(grid)) == 100


@pytest.mark.parametrize("total_seats, seats_per_row", [(0, 10), (10, 0), (MAX_ROWS * 2 + 1, 2)])
def test_invalid_layouts(total_seats, seats_per_row):
    with pytest.raises(ValueError):
        list(generate_seat_grid(total_seats, seats_per_row))
