from datetime import date
from typing import Optional

from pydantic import BaseModel


class AthleteRead(BaseModel):
    athlete_id: str
    first_name: str
    last_name: str
    full_name: str
    avatar: Optional[str] = None


class WeekRead(BaseModel):
    ordinal: int
    week_id: str
    label: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    date_range: Optional[str] = None  # 'Jan 5 - Jan 11'
    runners: int  # athletes with recorded activity


class RosterEntryRead(BaseModel):
    rank: int
    athlete: AthleteRead
    goal_km: float
    distance_km: float
    missed_km: float
    goal_met: bool
    percent_complete: Optional[float] = None


class WeeklyTotalsRead(BaseModel):
    total_distance_km: float
    total_goal_km: float
    goals_met: int
    total_runners: int


class WeeklyViewRead(BaseModel):
    week: WeekRead
    roster: list[RosterEntryRead]
    totals: WeeklyTotalsRead


class CumulativeEntryRead(BaseModel):
    rank: int
    athlete: AthleteRead
    total_distance_km: float
    total_goal_km: float
    total_missed_km: float


class ReloadResult(BaseModel):
    weeks: int
    athletes_with_goals: int
