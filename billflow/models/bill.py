from sqlalchemy import Column, Integer, String, Float, Date, DateTime, JSON, func
from billflow.database import Base


class BillRecord(Base):
    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, index=True)
    bill_number = Column(String, nullable=False, unique=True)
    client_id = Column(Integer, nullable=False, index=True)
    items = Column(JSON, nullable=False, default=list)
    total = Column(Float, nullable=False, default=0.0)
    status = Column(String, nullable=False, default="pending")
    due_date = Column(Date, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
