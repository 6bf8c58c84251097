"""Weekly roster construction.

A week's roster is everyone with a recorded activity plus everyone who
committed to a positive goal that week but did not record anything.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from runclub.core.constants import METERS_PER_KM
from runclub.engine.goals import GoalTable
from runclub.engine.identity import AthleteProfile, IdentityRegistry, normalize_athlete_id


@dataclass
class ActivityRecord:
    athlete_id: str
    first_name: str
    last_name: str
    distance_m: float
    avatar: Optional[str] = None


@dataclass
class Week:
    ordinal: int
    week_id: str
    label: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    # athlete id -> record, in ingestion order
    records: dict[str, ActivityRecord] = field(default_factory=dict)

    def add_record(self, record: ActivityRecord) -> None:
        # Last write wins; the athlete keeps the position of their first record
        self.records[normalize_athlete_id(record.athlete_id)] = record

    def has_activity(self, athlete_id) -> bool:
        return normalize_athlete_id(athlete_id) in self.records


@dataclass
class RosterEntry:
    athlete_id: str
    profile: AthleteProfile
    distance_m: float
    goal_km: float
    rank: int = 0

    @property
    def distance_km(self) -> float:
        return self.distance_m / METERS_PER_KM

    @property
    def missed_km(self) -> float:
        return max(0.0, self.goal_km - self.distance_km)

    @property
    def goal_met(self) -> bool:
        # A 0 goal means "no commitment" and is trivially met
        return self.distance_km >= self.goal_km

    @property
    def percent_complete(self) -> Optional[float]:
        if self.goal_km <= 0:
            return None
        return self.distance_km / self.goal_km * 100.0


def build_roster(week: Week, goals: GoalTable, identities: IdentityRegistry) -> list[RosterEntry]:
    """Return the unranked roster for `week`.

    Order, which breaks ranking ties: activity records in file order, then
    committed athletes without activity in goal table row order (the order
    of the goal CSV, not numeric id order).
    """
    entries: list[RosterEntry] = []
    present: set[str] = set()

    for athlete_id, record in week.records.items():
        if athlete_id not in identities:
            identities.upsert_from_activity(athlete_id, record.first_name, record.last_name, record.avatar)
        entries.append(
            RosterEntry(
                athlete_id=athlete_id,
                profile=identities.resolve(athlete_id),
                distance_m=record.distance_m,
                goal_km=goals.goal_for(athlete_id, week.ordinal),
            )
        )
        present.add(athlete_id)

    for athlete_id in goals.athlete_ids():
        goal_km = goals.goal_for(athlete_id, week.ordinal)
        if goal_km <= 0 or athlete_id in present:
            continue
        entries.append(
            RosterEntry(
                athlete_id=athlete_id,
                profile=identities.resolve(athlete_id),
                distance_m=0.0,
                goal_km=goal_km,
            )
        )
        present.add(athlete_id)

    return entries
