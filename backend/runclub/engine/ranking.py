"""Ranking and summary metrics for weekly rosters."""

from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

from runclub.core.constants import METERS_PER_KM
from runclub.engine.roster import RosterEntry

T = TypeVar("T")


def assign_ranks(entries: Sequence[T], distance: Callable[[T], float]) -> list[T]:
    """Sort by distance descending and number entries 1..N.

    The sort is stable, so equal distances keep their incoming order and
    still get consecutive (never shared) ranks.
    """
    ranked = sorted(entries, key=distance, reverse=True)
    for position, entry in enumerate(ranked, start=1):
        entry.rank = position
    return ranked


def rank(entries: Sequence[RosterEntry]) -> list[RosterEntry]:
    return assign_ranks(entries, lambda e: e.distance_m)


@dataclass(frozen=True)
class WeeklyTotals:
    total_distance_m: float
    total_goal_km: float
    goals_met: int
    total_runners: int

    @property
    def total_distance_km(self) -> float:
        return self.total_distance_m / METERS_PER_KM


def summarize(entries: Sequence[RosterEntry]) -> WeeklyTotals:
    """Aggregate a roster.

    `goals_met` only counts entries that had a positive goal, even though a
    zero-goal entry reports `goal_met` individually.
    """
    return WeeklyTotals(
        total_distance_m=sum(e.distance_m for e in entries),
        total_goal_km=sum(e.goal_km for e in entries),
        goals_met=sum(1 for e in entries if e.goal_met and e.goal_km > 0),
        total_runners=len(entries),
    )
