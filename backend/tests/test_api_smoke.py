import pytest

from conftest import runner


@pytest.fixture
def client(write_week, write_goals, make_dashboard):
    # Import after env is set so engine is created with sqlite
    from runclub.main import app  # noqa: WPS433
    from runclub.dashboard import get_dashboard  # noqa: WPS433
    from runclub.store import SourceStore  # noqa: WPS433
    from fastapi.testclient import TestClient  # noqa: WPS433

    write_week("week1", [
        runner(1, "Ana", "Silva", 12000, "https://img/1.png"),
        runner(2, "Ben", "Okafor", 12000),
    ])
    write_week("week2", [runner(2, "Ben", "Okafor", 2500)])
    write_goals("#,Name,athlete_id,W1,W2\n1,Ana Silva,1,10,10\n2,Cam Lee,3,0,6\n")

    dashboard = make_dashboard(week_ids=["week1", "week2", "week3"], store=SourceStore())
    dashboard.reload()
    app.dependency_overrides[get_dashboard] = lambda: dashboard
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root_ok(client):
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert "message" in data


def test_list_weeks(client):
    r = client.get("/dashboard/weeks")
    assert r.status_code == 200
    weeks = r.json()
    assert [w["week_id"] for w in weeks] == ["week1", "week2"]
    assert weeks[0]["date_range"] == "Jan 5 - Jan 11"
    assert weeks[1]["label"] == "Week 2"
    assert weeks[1]["runners"] == 1


def test_weekly_view(client):
    r = client.get("/dashboard/weeks/1")
    assert r.status_code == 200, r.text
    view = r.json()
    roster = view["roster"]
    assert [(e["rank"], e["athlete"]["full_name"]) for e in roster] == [(1, "Ana Silva"), (2, "Ben Okafor")]
    assert roster[0]["goal_met"] is True
    assert roster[0]["percent_complete"] == pytest.approx(120.0)
    assert roster[1]["goal_km"] == 0
    assert roster[1]["percent_complete"] is None
    assert view["totals"] == {
        "total_distance_km": 24.0,
        "total_goal_km": 10.0,
        "goals_met": 1,
        "total_runners": 2,
    }


def test_latest_week_includes_committed_no_shows(client):
    r = client.get("/dashboard/weeks/latest")
    assert r.status_code == 200
    view = r.json()
    assert view["week"]["ordinal"] == 2
    by_id = {e["athlete"]["athlete_id"]: e for e in view["roster"]}
    assert set(by_id) == {"2", "1", "3"}
    assert by_id["3"]["distance_km"] == 0
    assert by_id["3"]["missed_km"] == 6
    assert by_id["3"]["athlete"]["first_name"] == "Cam"


def test_unknown_week_404(client):
    r = client.get("/dashboard/weeks/3")
    assert r.status_code == 404


def test_all_time(client):
    r = client.get("/dashboard/all-time")
    assert r.status_code == 200
    rows = {e["athlete"]["athlete_id"]: e for e in r.json()}
    assert rows["2"]["rank"] == 1
    assert rows["2"]["total_distance_km"] == pytest.approx(14.5)
    assert rows["1"]["total_missed_km"] == pytest.approx(10)
    assert rows["3"]["total_missed_km"] == pytest.approx(6)


def test_upload_goals_and_clear(client):
    r = client.put("/dashboard/goals", content="#,Name,athlete_id,W1,W2\n1,Dee Vee,9,4,4\n")
    assert r.status_code == 200, r.text
    assert r.json() == {"weeks": 2, "athletes_with_goals": 1}
    ids = [e["athlete"]["athlete_id"] for e in client.get("/dashboard/weeks/2").json()["roster"]]
    assert ids == ["2", "9"]

    r = client.delete("/dashboard/goals")
    assert r.status_code == 200
    assert r.json()["athletes_with_goals"] == 2


def test_upload_empty_goals_rejected(client):
    r = client.put("/dashboard/goals", content="   ")
    assert r.status_code == 422


def test_reload(client):
    r = client.post("/dashboard/reload")
    assert r.status_code == 200
    assert r.json() == {"weeks": 2, "athletes_with_goals": 2}


def test_upload_non_utf8_goals_rejected(client):
    r = client.put("/dashboard/goals", content=b"#,Name,athlete_id,W1\n1,Jos\xe9,5,3\n")
    assert r.status_code == 422
    # Nothing was stored; the file-based goals are still in effect
    assert client.post("/dashboard/reload").json() == {"weeks": 2, "athletes_with_goals": 2}
