from sqlalchemy import Column, Integer, JSON
from billflow.database import Base


class SettingsRecord(Base):
    """Single-row table; the row always has id 1."""
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    company = Column(JSON, nullable=False, default=dict)
    preferences = Column(JSON, nullable=False, default=dict)
    security = Column(JSON, nullable=False, default=dict)
