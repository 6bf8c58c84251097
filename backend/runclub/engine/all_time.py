"""Cumulative all-time table across every loaded week."""

from dataclasses import dataclass
from typing import Sequence

from runclub.core.constants import METERS_PER_KM
from runclub.engine.goals import GoalTable
from runclub.engine.identity import AthleteProfile, IdentityRegistry
from runclub.engine.ranking import assign_ranks
from runclub.engine.roster import Week


@dataclass
class CumulativeEntry:
    athlete_id: str
    profile: AthleteProfile
    total_distance_m: float = 0.0
    total_goal_km: float = 0.0
    total_missed_km: float = 0.0
    rank: int = 0

    @property
    def total_distance_km(self) -> float:
        return self.total_distance_m / METERS_PER_KM


def build_cumulative(
    weeks: Sequence[Week],
    goals: GoalTable,
    identities: IdentityRegistry,
) -> list[CumulativeEntry]:
    """Fold all weeks into one ranked row per athlete.

    Missed distance is charged week by week: a shortfall in a week with
    activity, and the whole goal in a committed week without any. This is why
    it cannot be derived as total goal minus total distance.

    Rows start in goal table row order (goal CSV order), followed by
    athletes seen only in activity files by first appearance; that order
    breaks ties in the ranking.
    """
    totals: dict[str, CumulativeEntry] = {}

    # Everyone with goals, totalling every slot of their vector
    for athlete_id in goals.athlete_ids():
        totals[athlete_id] = CumulativeEntry(
            athlete_id=athlete_id,
            profile=identities.resolve(athlete_id),
            total_goal_km=goals.total_goal(athlete_id),
        )

    for week in weeks:
        for athlete_id, record in week.records.items():
            entry = totals.get(athlete_id)
            if entry is None:
                if athlete_id not in identities:
                    identities.upsert_from_activity(athlete_id, record.first_name, record.last_name, record.avatar)
                entry = totals[athlete_id] = CumulativeEntry(
                    athlete_id=athlete_id,
                    profile=identities.resolve(athlete_id),
                )
            entry.total_distance_m += record.distance_m
            week_goal = goals.goal_for(athlete_id, week.ordinal)
            entry.total_missed_km += max(0.0, week_goal - record.distance_m / METERS_PER_KM)

    for athlete_id, entry in totals.items():
        for week in weeks:
            week_goal = goals.goal_for(athlete_id, week.ordinal)
            if week_goal > 0 and not week.has_activity(athlete_id):
                entry.total_missed_km += week_goal

    return assign_ranks(list(totals.values()), lambda e: e.total_distance_m)
