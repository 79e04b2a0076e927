from sqlalchemy import Column, Integer, String, Float, DateTime, func
from billflow.database import Base


class PaymentRecord(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    bill_id = Column(Integer, nullable=False, index=True)
    amount = Column(Float, nullable=False)
    method = Column(String, nullable=False)
    date = Column(DateTime, server_default=func.now())
    notes = Column(String, nullable=True)
