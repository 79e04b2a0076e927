from sqlalchemy import Column, Integer, String, DateTime, func
from billflow.database import Base


class ClientRecord(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    payment_terms = Column(Integer, nullable=False, default=30)
    created_at = Column(DateTime, server_default=func.now())
