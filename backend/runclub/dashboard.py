"""Dashboard state and the entry points the API serves.

One Dashboard owns a state holding an identity registry, a goal table and
the loaded weeks. Loading fills it from the sources; views are computed
fresh from it on every call.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from fastapi import Request

from runclub.core.calendar import ordinal_from_week_id, week_date_range, week_label
from runclub.core.config import Settings
from runclub.engine.all_time import CumulativeEntry, build_cumulative
from runclub.engine.errors import SourceUnavailable, WeekNotFound
from runclub.engine.goals import GoalTable, parse_goal_rows
from runclub.engine.identity import IdentityRegistry, normalize_athlete_id
from runclub.engine.ranking import WeeklyTotals, rank, summarize
from runclub.engine.roster import ActivityRecord, RosterEntry, Week, build_roster
from runclub.sources import ActivitySource, GoalSource
from runclub.store import SourceStore

logger = logging.getLogger(__name__)


@dataclass
class WeeklyView:
    week: Week
    roster: list[RosterEntry]
    totals: WeeklyTotals


@dataclass
class DashboardState:
    """Everything a view reads, swapped as one reference on reload."""

    identities: IdentityRegistry = field(default_factory=IdentityRegistry)
    goals: GoalTable = field(default_factory=GoalTable)
    weeks: dict[int, Week] = field(default_factory=dict)


class Dashboard:
    def __init__(
        self,
        activity_source: ActivitySource,
        goal_source: GoalSource,
        week_ids: list[str],
        calendar_anchor: Optional[date] = None,
    ):
        self.activity_source = activity_source
        self.goal_source = goal_source
        self.week_ids = list(week_ids)
        self.calendar_anchor = calendar_anchor

        self._state = DashboardState()

    @property
    def identities(self) -> IdentityRegistry:
        return self._state.identities

    @property
    def goals(self) -> GoalTable:
        return self._state.goals

    @classmethod
    def from_settings(cls, settings: Settings, store: Optional[SourceStore] = None) -> "Dashboard":
        location = {
            "base_url": settings.data_base_url,
            "timeout": settings.source_timeout,
        }
        return cls(
            activity_source=ActivitySource(settings.data_dir, **location),
            goal_source=GoalSource(settings.data_dir, settings.goals_filename, store=store, **location),
            week_ids=settings.available_weeks,
            calendar_anchor=settings.calendar_anchor,
        )

    # --------- Ingestion --------- #

    def _week_id_for(self, ordinal: int) -> Optional[str]:
        for week_id in self.week_ids:
            if ordinal_from_week_id(week_id) == ordinal:
                return week_id
        return None

    def load_week(self, ordinal: int) -> Week:
        """Load one configured week; raises SourceUnavailable if it cannot be read."""
        week_id = self._week_id_for(ordinal)
        if week_id is None:
            raise SourceUnavailable(f"week {ordinal}", "not in the configured week list")

        records = self.activity_source.fetch_week(week_id)

        state = self._state
        week = Week(ordinal=ordinal, week_id=week_id, label=week_label(week_id))
        if self.calendar_anchor is not None:
            week.start_date, week.end_date = week_date_range(ordinal, self.calendar_anchor)

        for rec in records:
            athlete_id = normalize_athlete_id(rec.athlete_id)
            state.identities.upsert_from_activity(athlete_id, rec.first_name, rec.last_name, rec.avatar)
            week.add_record(
                ActivityRecord(
                    athlete_id=athlete_id,
                    first_name=rec.first_name,
                    last_name=rec.last_name,
                    distance_m=rec.distance_m,
                    avatar=rec.avatar,
                )
            )

        state.weeks[ordinal] = week
        logger.info("Loaded %s: %d runners", week_id, len(week.records))
        return week

    def load_all_weeks(self) -> list[Week]:
        """Load every configured week, skipping (and logging) the ones that fail."""
        loaded = []
        for week_id in self.week_ids:
            ordinal = ordinal_from_week_id(week_id)
            if ordinal is None:
                logger.warning("Ignoring week id without a number: %r", week_id)
                continue
            try:
                loaded.append(self.load_week(ordinal))
            except SourceUnavailable as e:
                logger.warning("Could not load %s", e)
        return loaded

    def load_goals(self) -> int:
        """Replace the goal table from the goal source; returns the athlete count.

        Athletes missing from the new source lose their goals. An unavailable
        goal source is logged and leaves the current table in place.
        """
        try:
            text = self.goal_source.fetch_text()
        except SourceUnavailable as e:
            logger.warning("Could not load goals: %s", e)
            return 0

        state = self._state
        goals = GoalTable()
        for row in parse_goal_rows(text):
            state.identities.upsert_from_goal_source(row.athlete_id, row.full_name)
            goals.set_goals(row.athlete_id, row.goals)
        state.goals = goals
        logger.info("Loaded goals for %d athletes", len(goals))
        return len(goals)

    def reload(self) -> DashboardState:
        """Rebuild all state from the sources, then swap it in as one reference.

        Returns the state that was swapped in.
        """
        fresh = Dashboard(self.activity_source, self.goal_source, self.week_ids, self.calendar_anchor)
        fresh.load_all_weeks()
        fresh.load_goals()
        self._state = fresh._state
        return fresh._state

    # --------- Views --------- #
    # Each view reads self._state once so a concurrent reload cannot mix
    # old weeks with new goals.

    def _ordered_weeks(self, state: DashboardState) -> list[Week]:
        ordered = []
        for week_id in self.week_ids:
            week = state.weeks.get(ordinal_from_week_id(week_id))
            if week is not None and week.week_id == week_id:
                ordered.append(week)
        return ordered

    def weeks(self) -> list[Week]:
        """Loaded weeks in configured order."""
        return self._ordered_weeks(self._state)

    def latest_week(self) -> Optional[Week]:
        loaded = self.weeks()
        return loaded[-1] if loaded else None

    def get_week(self, ordinal: int) -> Week:
        week = self._state.weeks.get(ordinal)
        if week is None:
            raise WeekNotFound(ordinal)
        return week

    def get_weekly_view(self, ordinal: int) -> WeeklyView:
        """Ranked roster and its totals, from a single roster construction."""
        state = self._state
        week = state.weeks.get(ordinal)
        if week is None:
            raise WeekNotFound(ordinal)
        roster = rank(build_roster(week, state.goals, state.identities))
        return WeeklyView(week=week, roster=roster, totals=summarize(roster))

    def get_all_time_view(self) -> list[CumulativeEntry]:
        state = self._state
        return build_cumulative(self._ordered_weeks(state), state.goals, state.identities)


def get_dashboard(request: Request) -> Dashboard:
    # Dependency for FastAPI routes
    return request.app.state.dashboard
