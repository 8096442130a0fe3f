"""Seat arithmetic for the four-player table.

Seats are numbered 0-3 clockwise. Opposite seats are partners, so team 0 is
seats {0, 2} and team 1 is seats {1, 3}.
"""

from __future__ import annotations

from typing import Iterator, Tuple

NUM_SEATS = 4
NUM_TEAMS = 2

SEATS: Tuple[int, ...] = tuple(range(NUM_SEATS))
TEAMS: Tuple[int, ...] = tuple(range(NUM_TEAMS))


def validate_seat(seat: int) -> int:
    if seat not in SEATS:
        raise ValueError(f"Seat must be one of {SEATS}, got {seat!r}.")
    return seat


def next_seat(seat: int, steps: int = 1) -> int:
    return (seat + steps) % NUM_SEATS


def partner_of(seat: int) -> int:
    return (seat + 2) % NUM_SEATS


def team_of(seat: int) -> int:
    return seat % NUM_TEAMS


def other_team(team: int) -> int:
    return 1 - team


def are_partners(first: int, second: int) -> bool:
    return team_of(first) == team_of(second)


def seats_from(start: int, count: int = NUM_SEATS) -> Iterator[int]:
    """Yield ``count`` seats in turn order, starting with ``start``."""
    for offset in range(count):
        yield next_seat(start, offset)
