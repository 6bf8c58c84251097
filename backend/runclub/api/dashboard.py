from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from runclub.core.calendar import format_date_range
from runclub.core.constants import GOALS_OVERRIDE_KEY
from runclub.dashboard import Dashboard, WeeklyView, get_dashboard
from runclub.engine.errors import WeekNotFound
from runclub.engine.identity import AthleteProfile
from runclub.engine.roster import Week
from runclub.schemas.dashboard import (
    AthleteRead,
    CumulativeEntryRead,
    ReloadResult,
    RosterEntryRead,
    WeekRead,
    WeeklyTotalsRead,
    WeeklyViewRead,
)
from runclub.store import SourceStore


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_store() -> SourceStore:
    return SourceStore()


def _athlete(athlete_id: str, profile: AthleteProfile) -> AthleteRead:
    return AthleteRead(
        athlete_id=athlete_id,
        first_name=profile.first_name,
        last_name=profile.last_name,
        full_name=profile.full_name,
        avatar=profile.avatar,
    )


def _week(week: Week) -> WeekRead:
    date_range = None
    if week.start_date and week.end_date:
        date_range = format_date_range(week.start_date, week.end_date)
    return WeekRead(
        ordinal=week.ordinal,
        week_id=week.week_id,
        label=week.label,
        start_date=week.start_date,
        end_date=week.end_date,
        date_range=date_range,
        runners=len(week.records),
    )


def _weekly_view(view: WeeklyView) -> WeeklyViewRead:
    return WeeklyViewRead(
        week=_week(view.week),
        roster=[
            RosterEntryRead(
                rank=e.rank,
                athlete=_athlete(e.athlete_id, e.profile),
                goal_km=e.goal_km,
                distance_km=e.distance_km,
                missed_km=e.missed_km,
                goal_met=e.goal_met,
                percent_complete=e.percent_complete,
            )
            for e in view.roster
        ],
        totals=WeeklyTotalsRead(
            total_distance_km=view.totals.total_distance_km,
            total_goal_km=view.totals.total_goal_km,
            goals_met=view.totals.goals_met,
            total_runners=view.totals.total_runners,
        ),
    )


@router.get("/weeks", response_model=list[WeekRead])
def list_weeks(dashboard: Dashboard = Depends(get_dashboard)):
    return [_week(w) for w in dashboard.weeks()]


@router.get("/weeks/latest", response_model=WeeklyViewRead)
def get_latest_week(dashboard: Dashboard = Depends(get_dashboard)):
    """The default selection: the last week that loaded."""
    week = dashboard.latest_week()
    if week is None:
        raise HTTPException(status_code=404, detail="No weeks loaded")
    return _weekly_view(dashboard.get_weekly_view(week.ordinal))


@router.get("/weeks/{ordinal}", response_model=WeeklyViewRead)
def get_week(ordinal: int, dashboard: Dashboard = Depends(get_dashboard)):
    try:
        view = dashboard.get_weekly_view(ordinal)
    except WeekNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _weekly_view(view)


@router.get("/all-time", response_model=list[CumulativeEntryRead])
def get_all_time(dashboard: Dashboard = Depends(get_dashboard)):
    return [
        CumulativeEntryRead(
            rank=e.rank,
            athlete=_athlete(e.athlete_id, e.profile),
            total_distance_km=e.total_distance_km,
            total_goal_km=e.total_goal_km,
            total_missed_km=e.total_missed_km,
        )
        for e in dashboard.get_all_time_view()
    ]


def _reload(dashboard: Dashboard) -> ReloadResult:
    state = dashboard.reload()
    return ReloadResult(weeks=len(state.weeks), athletes_with_goals=len(state.goals))


def _save_goals_and_reload(dashboard: Dashboard, store: SourceStore, text: str) -> ReloadResult:
    store.save(GOALS_OVERRIDE_KEY, text)
    return _reload(dashboard)


@router.post("/reload", response_model=ReloadResult)
def reload_sources(dashboard: Dashboard = Depends(get_dashboard)):
    return _reload(dashboard)


@router.put("/goals", response_model=ReloadResult)
async def upload_goals(
    request: Request,
    dashboard: Dashboard = Depends(get_dashboard),
    store: SourceStore = Depends(get_store),
):
    """Replace the goal table with an uploaded CSV (raw UTF-8 text body)."""
    try:
        text = (await request.body()).decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=422, detail="goals CSV must be UTF-8 text")
    if not text.strip():
        raise HTTPException(status_code=422, detail="goals CSV body is empty")
    # Store commit and source reads block; keep them off the event loop
    return await run_in_threadpool(_save_goals_and_reload, dashboard, store, text)


@router.delete("/goals", response_model=ReloadResult)
def clear_uploaded_goals(
    dashboard: Dashboard = Depends(get_dashboard),
    store: SourceStore = Depends(get_store),
):
    """Drop an uploaded goals CSV and go back to the configured source."""
    store.delete(GOALS_OVERRIDE_KEY)
    return _reload(dashboard)
