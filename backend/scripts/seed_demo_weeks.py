#!/usr/bin/env python3
"""
Write a demo data set for the dashboard: weekly activity files and a goals CSV.

Layout written under --data-dir (defaults to the configured data_dir):
  strava/week1.json ... strava/weekN.json
  goals.csv

Usage:
  python backend/scripts/seed_demo_weeks.py --weeks 7 --runners 12
"""

import argparse
import json
import os
import random

from runclub.core.config import settings

FIRST_NAMES = ["Ana", "Ben", "Chloe", "Dev", "Eli", "Fatima", "Gus", "Hana",
               "Ivan", "Jo", "Kai", "Lena", "Mo", "Nina", "Omar", "Pia"]
LAST_NAMES = ["Silva", "Okafor", "Martin", "Patel", "Novak", "Kim", "Berg",
              "Rossi", "Haddad", "Larsen", "Ito", "Costa", "Walsh", "Meyer"]


def make_runners(count: int, rng: random.Random) -> list[dict]:
    runners = []
    for i in range(count):
        runners.append({
            "athlete_id": 1000 + i,
            "athlete_firstname": rng.choice(FIRST_NAMES),
            "athlete_lastname": rng.choice(LAST_NAMES),
            "athlete_picture_url": f"https://example.com/avatars/{1000 + i}.png" if rng.random() < 0.7 else None,
        })
    return runners


def make_goals(runners: list[dict], weeks: int, rng: random.Random) -> dict[int, list[float]]:
    """Weekly km goals; some runners skip weeks (goal 0)."""
    goals = {}
    for r in runners:
        base = rng.choice([10, 15, 20, 25, 30, 40])
        goals[r["athlete_id"]] = [0 if rng.random() < 0.15 else base + 5 * (w // 3) for w in range(weeks)]
    return goals


def write_week(data_dir: str, week: int, runners: list[dict], goals: dict, rng: random.Random) -> int:
    rows = []
    for r in runners:
        if rng.random() < 0.2:
            continue  # didn't run this week
        goal_km = goals[r["athlete_id"]][week - 1] or 15
        distance_m = round(goal_km * rng.uniform(0.5, 1.3) * 1000, 1)
        rows.append({**r, "distance": distance_m})
    rows.sort(key=lambda x: x["distance"], reverse=True)
    for rank, row in enumerate(rows, start=1):
        row["rank"] = rank

    path = os.path.join(data_dir, "strava", f"week{week}.json")
    with open(path, "w") as f:
        json.dump({"data": rows}, f, indent=2)
    return len(rows)


def write_goals(data_dir: str, runners: list[dict], goals: dict, weeks: int) -> None:
    header = ["#", "Strava Name", "athlete_id"] + [f"Week {w}" for w in range(1, weeks + 1)]
    lines = [",".join(header)]
    for i, r in enumerate(runners, start=1):
        name = f"{r['athlete_firstname']} {r['athlete_lastname']}"
        cells = [str(i), name, str(r["athlete_id"])] + [f"{g:g}" for g in goals[r["athlete_id"]]]
        lines.append(",".join(cells))
    with open(os.path.join(data_dir, settings.goals_filename), "w") as f:
        f.write("\n".join(lines) + "\n")


def main() -> None:
    ap = argparse.ArgumentParser(description="Write demo week files and a goals CSV")
    ap.add_argument("--data-dir", default=settings.data_dir, help="Directory to write into")
    ap.add_argument("--weeks", type=int, default=len(settings.available_weeks))
    ap.add_argument("--runners", type=int, default=12)
    ap.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    args = ap.parse_args()

    rng = random.Random(args.seed)
    os.makedirs(os.path.join(args.data_dir, "strava"), exist_ok=True)

    runners = make_runners(args.runners, rng)
    goals = make_goals(runners, args.weeks, rng)
    for week in range(1, args.weeks + 1):
        n = write_week(args.data_dir, week, runners, goals, rng)
        print(f"week{week}: {n} runners")
    write_goals(args.data_dir, runners, goals, args.weeks)

    print(f"Seed complete: {args.weeks} weeks written to {args.data_dir}")


if __name__ == "__main__":
    main()
