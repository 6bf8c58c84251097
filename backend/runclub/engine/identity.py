"""Athlete identity registry.

Merges what the activity files and the goal table say about each athlete
into one display profile per identifier.
"""

from dataclasses import dataclass
from typing import Optional

from runclub.core.constants import UNKNOWN_FIRST_NAME, UNKNOWN_LAST_NAME

SOURCE_ACTIVITY = "activity"
SOURCE_GOALS = "goals"


def normalize_athlete_id(value) -> str:
    """Canonical string form of an athlete id.

    Activity JSON carries numeric ids while the goal CSV carries text, so
    123, "123", 123.0 and " 123 " must all map to "123".
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


@dataclass(frozen=True)
class AthleteProfile:
    first_name: str
    last_name: str
    avatar: Optional[str] = None
    source: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


UNKNOWN_PROFILE = AthleteProfile(first_name=UNKNOWN_FIRST_NAME, last_name=UNKNOWN_LAST_NAME)


class IdentityRegistry:
    def __init__(self):
        self._profiles: dict[str, AthleteProfile] = {}

    def __contains__(self, athlete_id) -> bool:
        return normalize_athlete_id(athlete_id) in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def upsert_from_activity(self, athlete_id, first_name, last_name, avatar=None) -> AthleteProfile:
        """Record what an activity record says about an athlete.

        Names stick once set from activity data; a later non-empty avatar
        replaces the stored one. A profile filled from the goal table is only
        a fallback and gives way to the first activity record.
        """
        key = normalize_athlete_id(athlete_id)
        avatar = avatar or None
        existing = self._profiles.get(key)

        if existing is None or existing.source == SOURCE_GOALS:
            profile = AthleteProfile(
                first_name=first_name or "",
                last_name=last_name or "",
                avatar=avatar or (existing.avatar if existing else None),
                source=SOURCE_ACTIVITY,
            )
        elif avatar:
            profile = AthleteProfile(existing.first_name, existing.last_name, avatar, existing.source)
        else:
            return existing

        self._profiles[key] = profile
        return profile

    def upsert_from_goal_source(self, athlete_id, full_name: str) -> AthleteProfile:
        """Fill a profile from the goal table's name column, only if unseen."""
        key = normalize_athlete_id(athlete_id)
        existing = self._profiles.get(key)
        if existing is not None:
            return existing

        name = (full_name or "").strip()
        first, _, rest = name.partition(" ")
        profile = AthleteProfile(
            first_name=first or name,
            last_name=rest.strip(),
            avatar=None,
            source=SOURCE_GOALS,
        )
        self._profiles[key] = profile
        return profile

    def resolve(self, athlete_id) -> AthleteProfile:
        return self._profiles.get(normalize_athlete_id(athlete_id), UNKNOWN_PROFILE)
