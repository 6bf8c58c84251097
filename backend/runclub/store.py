"""Key-value store for raw source payloads (e.g. an uploaded goals CSV)."""

from typing import Optional

from sqlalchemy.orm import sessionmaker

from runclub.db import SessionLocal
from runclub.models.stored_source import StoredSource


class SourceStore:
    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory

    def load(self, key: str) -> Optional[str]:
        db = self._session_factory()
        try:
            row = db.query(StoredSource).filter(StoredSource.key == key).first()
            return row.value if row else None
        finally:
            db.close()

    def save(self, key: str, value: str) -> None:
        db = self._session_factory()
        try:
            row = db.query(StoredSource).filter(StoredSource.key == key).first()
            if not row:
                row = StoredSource(key=key, value=value)
                db.add(row)
            else:
                row.value = value
            db.commit()
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db = self._session_factory()
        try:
            db.query(StoredSource).filter(StoredSource.key == key).delete()
            db.commit()
        finally:
            db.close()
