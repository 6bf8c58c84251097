from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func
from runclub.db import Base


class StoredSource(Base):
    __tablename__ = "stored_sources"

    # e.g. "goals_csv"
    key = Column(String(64), primary_key=True)

    # Raw source payload, exactly as uploaded
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
