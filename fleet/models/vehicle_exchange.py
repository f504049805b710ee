"""
Chauffeur-to-chauffeur vehicle exchange requests.

Status moves only pending → approved or pending → rejected, once. All status
changes go through next_status(), which refuses anything else.
"""

import enum

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from fleet.database import Base
from fleet.exceptions import InvalidTransitionError


class ExchangeStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


TRANSITIONS = {
    ExchangeStatus.PENDING: {ExchangeStatus.APPROVED, ExchangeStatus.REJECTED},
    ExchangeStatus.APPROVED: set(),
    ExchangeStatus.REJECTED: set(),
}


def next_status(current, target) -> ExchangeStatus:
    """Return target if current → target is allowed, else raise InvalidTransitionError."""
    current, target = ExchangeStatus(current), ExchangeStatus(target)
    if target not in TRANSITIONS[current]:
        raise InvalidTransitionError()
    return target


class VehicleExchange(Base):
    __tablename__ = "vehicle_exchanges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    from_driver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    to_driver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    request_date = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), default=ExchangeStatus.PENDING.value, nullable=False, index=True)
    before_photo_path = Column(String(255))
    after_photo_path = Column(String(255))
    note = Column(Text)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    from_driver = relationship("User", foreign_keys=[from_driver_id], back_populates="initiated_exchanges")
    to_driver = relationship("User", foreign_keys=[to_driver_id], back_populates="received_exchanges")
    vehicle = relationship("Vehicle", back_populates="exchanges")

    @property
    def is_pending(self) -> bool:
        return self.status == ExchangeStatus.PENDING

    def involves(self, user) -> bool:
        return user.id in (self.from_driver_id, self.to_driver_id)

    def move_to(self, target: ExchangeStatus):
        self.status = next_status(self.status, target).value

    def __repr__(self):
        return f"<VehicleExchange {self.id} vehicle={self.vehicle_id} status={self.status}>"
