import json
import os
from datetime import date

import pytest

# Use in-memory sqlite for tests; must be set before runclub is imported
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")


def runner(athlete_id, first, last, distance, picture=None):
    """A record shaped like the weekly activity files."""
    return {
        "athlete_id": athlete_id,
        "athlete_firstname": first,
        "athlete_lastname": last,
        "athlete_picture_url": picture,
        "distance": distance,
    }


@pytest.fixture
def data_dir(tmp_path):
    os.makedirs(tmp_path / "strava")
    return tmp_path


@pytest.fixture
def write_week(data_dir):
    def _write(week_id, rows):
        with open(data_dir / "strava" / f"{week_id}.json", "w") as f:
            json.dump({"data": rows}, f)
    return _write


@pytest.fixture
def write_goals(data_dir):
    def _write(text):
        with open(data_dir / "goals.csv", "w") as f:
            f.write(text)
    return _write


@pytest.fixture
def make_dashboard(data_dir):
    from runclub.dashboard import Dashboard
    from runclub.sources import ActivitySource, GoalSource

    def _make(week_ids=("week1", "week2", "week3"), store=None):
        return Dashboard(
            activity_source=ActivitySource(str(data_dir)),
            goal_source=GoalSource(str(data_dir), "goals.csv", store=store),
            week_ids=list(week_ids),
            calendar_anchor=date(2026, 1, 5),
        )
    return _make
