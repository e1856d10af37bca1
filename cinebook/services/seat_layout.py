from string import ascii_uppercase
from typing import Iterator, Tuple

ROW_LABELS = ascii_uppercase
MAX_ROWS = len(ROW_LABELS)


def generate_seat_grid(total_seats: int, seats_per_row: int) -> Iterator[Tuple[str, int]]:
    """
    Yields (row, seat_number) for a showtime's seats, filling rows A, B, ...
    left to right; the last row may be partial.
    """
    if total_seats <= 0 or seats_per_row <= 0:
        raise ValueError("total_seats and seats_per_row must be positive")
    if total_seats > MAX_ROWS * seats_per_row:
        raise ValueError(f"At most {MAX_ROWS} rows of seats are supported")
    for index in range(total_seats):
        row, seat_number = divmod(index, seats_per_row)
        yield ROW_LABELS[row], seat_number + 1
