from sqlalchemy import Column, Integer, String, Float, Date, DateTime, JSON, func
from billflow.database import Base


class QuotationRecord(Base):
    __tablename__ = "quotations"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, nullable=False, index=True)
    items = Column(JSON, nullable=False, default=list)
    total = Column(Float, nullable=False, default=0.0)
    valid_until = Column(Date, nullable=False)
    status = Column(String, nullable=False, default="draft")
    notes = Column(String, nullable=True)
    bill_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
