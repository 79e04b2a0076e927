from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, func
from billflow.database import Base


class ServiceRecord(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False, index=True)
    price = Column(Float, nullable=False)
    unit = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
