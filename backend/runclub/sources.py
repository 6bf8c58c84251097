"""Readers for the raw week activity files and the goal table.

Sources come from a local data directory, or over HTTP when a base URL is
configured. Any failure surfaces as SourceUnavailable; callers decide how
to isolate it.
"""

import json
import logging
import os
from typing import Optional

import httpx
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from runclub.core.constants import GOALS_OVERRIDE_KEY
from runclub.engine.errors import SourceUnavailable
from runclub.schemas.activity import ActivityRecordIn, WeekFileIn
from runclub.store import SourceStore

logger = logging.getLogger(__name__)

ACTIVITY_SUBDIR = "strava"


class _Location:
    def __init__(
        self,
        data_dir: str,
        base_url: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.data_dir = data_dir
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    def read_text(self, relpath: str) -> str:
        if self.base_url:
            return self._fetch(relpath)
        path = os.path.join(self.data_dir, relpath)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailable(relpath, str(e)) from e

    def _fetch(self, relpath: str) -> str:
        url = f"{self.base_url.rstrip('/')}/{relpath}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                r = client.get(url)
        except httpx.HTTPError as e:
            raise SourceUnavailable(relpath, str(e)) from e
        if r.status_code != 200:
            raise SourceUnavailable(relpath, f"HTTP {r.status_code}")
        return r.text


class ActivitySource(_Location):
    def fetch_week(self, week_id: str) -> list[ActivityRecordIn]:
        """Return the parsed records of one week file.

        Records that fail validation are logged and dropped; an unreadable
        or non-JSON file raises SourceUnavailable.
        """
        relpath = f"{ACTIVITY_SUBDIR}/{week_id}.json"
        text = self.read_text(relpath)
        try:
            payload = WeekFileIn.model_validate(json.loads(text))
        except (ValueError, ValidationError) as e:
            raise SourceUnavailable(relpath, f"invalid week file: {e}") from e

        records: list[ActivityRecordIn] = []
        for i, raw in enumerate(payload.data or []):
            try:
                records.append(ActivityRecordIn.model_validate(raw))
            except ValidationError as e:
                logger.debug("Skipping record %d of %s: %s", i, relpath, e)
        return records


class GoalSource(_Location):
    def __init__(self, data_dir: str, filename: str, store: Optional[SourceStore] = None, **kwargs):
        super().__init__(data_dir, **kwargs)
        self.filename = filename
        self.store = store

    def fetch_text(self) -> str:
        """Goal CSV text, preferring an uploaded override when one is stored."""
        if self.store is not None:
            try:
                override = self.store.load(GOALS_OVERRIDE_KEY)
            except SQLAlchemyError as e:
                logger.warning("Stored goals unavailable, using %s: %s", self.filename, e)
                override = None
            if override is not None:
                return override
        return self.read_text(self.filename)
