"""Per-athlete weekly goal table and the goal CSV parser."""

import csv
import io
import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator

from runclub.core.constants import GOAL_FIRST_WEEK_COL, GOAL_ID_COL, GOAL_NAME_COL
from runclub.engine.errors import MalformedGoalRow
from runclub.engine.identity import normalize_athlete_id

logger = logging.getLogger(__name__)


def parse_goal_value(token) -> float:
    """Coerce one goal cell to a number of kilometers.

    Blank, non-numeric, NaN and infinite values all become 0.
    """
    if isinstance(token, bool) or token is None:
        return 0.0
    try:
        value = float(token.strip() if isinstance(token, str) else token)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


class GoalTable:
    """Sparse athlete x week matrix of goal distances (km).

    Index 0 of an athlete's vector is week 1. Lookups outside what was
    loaded are 0, never an error.
    """

    def __init__(self):
        self._vectors: dict[str, list[float]] = {}

    def __contains__(self, athlete_id) -> bool:
        return normalize_athlete_id(athlete_id) in self._vectors

    def __len__(self) -> int:
        return len(self._vectors)

    def set_goals(self, athlete_id, values: Iterable) -> None:
        self._vectors[normalize_athlete_id(athlete_id)] = [parse_goal_value(v) for v in values]

    def goal_for(self, athlete_id, ordinal: int) -> float:
        if ordinal < 1:
            return 0.0
        vector = self._vectors.get(normalize_athlete_id(athlete_id))
        if vector is None or ordinal > len(vector):
            return 0.0
        return parse_goal_value(vector[ordinal - 1])

    def goals_of(self, athlete_id) -> list[float]:
        return list(self._vectors.get(normalize_athlete_id(athlete_id), []))

    def total_goal(self, athlete_id) -> float:
        return sum(self.goals_of(athlete_id))

    def athlete_ids(self) -> list[str]:
        return list(self._vectors)


@dataclass
class GoalRow:
    athlete_id: str
    full_name: str
    goals: list[float]


def _parse_row(line_no: int, row: list[str]) -> GoalRow:
    if len(row) <= GOAL_FIRST_WEEK_COL:
        raise MalformedGoalRow(line_no, f"expected at least {GOAL_FIRST_WEEK_COL + 1} columns, got {len(row)}")
    athlete_id = normalize_athlete_id(row[GOAL_ID_COL])
    if not athlete_id:
        raise MalformedGoalRow(line_no, "missing athlete id")
    return GoalRow(
        athlete_id=athlete_id,
        full_name=row[GOAL_NAME_COL],
        goals=[parse_goal_value(v) for v in row[GOAL_FIRST_WEEK_COL:]],
    )


def parse_goal_rows(text: str) -> Iterator[GoalRow]:
    """Yield goal rows from CSV text, skipping the header and malformed rows.

    Example: 'x,Jane Doe,123,5,,abc,10' -> GoalRow('123', 'Jane Doe', [5, 0, 0, 10])
    """
    reader = csv.reader(io.StringIO(text, newline=None))
    next(reader, None)  # header
    for line_no, row in enumerate(reader, start=2):
        try:
            yield _parse_row(line_no, row)
        except MalformedGoalRow as e:
            logger.debug("Skipping %s", e)
