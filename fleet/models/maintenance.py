"""Maintenance log per vehicle, with an optional follow-up reminder date and invoice."""

import datetime as dt

from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from fleet.database import Base


class Maintenance(Base):
    __tablename__ = "maintenances"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    maintenance_type = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(Date, nullable=False, index=True)
    reminder_date = Column(Date, index=True)
    invoice_path = Column(String(255))
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    vehicle = relationship("Vehicle", back_populates="maintenances")

    @property
    def is_reminder_due(self) -> bool:
        return self.reminder_date is not None and self.reminder_date <= dt.date.today()

    def __repr__(self):
        return f"<Maintenance {self.id} vehicle={self.vehicle_id} type={self.maintenance_type}>"
