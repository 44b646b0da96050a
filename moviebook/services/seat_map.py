"""
Seat-map view logic: lays a showtime's seats out as a row/number grid and
works out how each seat should be shown given the current selection.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from moviebook.database.schemas import Seat, SeatStatus


def seat_key(seat: Seat) -> str:
    return f"{seat.row}{seat.number}"


def display_status(seat: Seat, selected_keys: Set[Tuple[str, int]]) -> SeatStatus:
    # a booked seat never shows as selected
    if seat.status == SeatStatus.BOOKED:
        return SeatStatus.BOOKED
    if seat.key in selected_keys:
        return SeatStatus.SELECTED
    return SeatStatus.AVAILABLE


@dataclass
class SeatCell:
    seat: Seat
    status: SeatStatus

    @property
    def label(self) -> str:
        return seat_key(self.seat)

    @property
    def selectable(self) -> bool:
        return self.status != SeatStatus.BOOKED


@dataclass
class SeatMap:
    rows: List[str] = field(default_factory=list)
    seats_per_row: int = 0
    # one list per row, None where the layout has a gap
    grid: List[List[Optional[SeatCell]]] = field(default_factory=list)

    def cell(self, row: str, number: int) -> Optional[SeatCell]:
        if row not in self.rows or not 1 <= number <= self.seats_per_row:
            return None
        return self.grid[self.rows.index(row)][number - 1]

    def count(self, status: SeatStatus) -> int:
        return sum(1 for line in self.grid for c in line if c is not None and c.status == status)


def build_seat_map(seats: Sequence[Seat], selected: Iterable[Seat] = ()) -> SeatMap:
    """Sorted row labels, the widest row as seats-per-row, and a grid with gaps."""
    if not seats:
        return SeatMap()
    selected_keys = {s.key for s in selected}
    rows = sorted({seat.row for seat in seats})
    seats_per_row = max(seat.number for seat in seats)
    by_key = {seat.key: seat for seat in seats}

    grid = []
    for row in rows:
        line = []
        for number in range(1, seats_per_row + 1):
            seat = by_key.get((row, number))
            line.append(SeatCell(seat, display_status(seat, selected_keys)) if seat else None)
        grid.append(line)
    return SeatMap(rows=rows, seats_per_row=seats_per_row, grid=grid)


def format_total(amount: float, currency: str = "₹") -> str:
    if float(amount).is_integer():
        return f"{currency}{int(amount)}"
    return f"{currency}{amount:.2f}"
