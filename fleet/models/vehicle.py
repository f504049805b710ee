"""
Fleet vehicles. Archiving flips status and stamps archived_at; restoring
clears both. archived_at is set if and only if status is archived.
"""

import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from fleet.database import Base


class VehicleStatus(str, enum.Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    registration_number = Column(String(255), unique=True, nullable=False, index=True)
    model = Column(String(255), nullable=False)
    year = Column(Integer, nullable=False)
    status = Column(String(20), default=VehicleStatus.ACTIVE.value, nullable=False, index=True)
    archived_at = Column(DateTime)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    assigned_user = relationship("User", back_populates="vehicle", uselist=False)
    documents = relationship("VehicleDocument", back_populates="vehicle", cascade="all, delete-orphan")
    maintenances = relationship("Maintenance", back_populates="vehicle", cascade="all, delete-orphan")
    exchanges = relationship("VehicleExchange", back_populates="vehicle", cascade="all, delete-orphan")

    @property
    def is_archived(self) -> bool:
        return self.status == VehicleStatus.ARCHIVED

    def archive(self):
        # Re-archiving an archived vehicle just moves archived_at forward
        self.status = VehicleStatus.ARCHIVED.value
        self.archived_at = datetime.utcnow()
        self.updated_at = self.archived_at

    def restore(self):
        self.status = VehicleStatus.ACTIVE.value
        self.archived_at = None
        self.updated_at = datetime.utcnow()

    def __repr__(self):
        return f"<Vehicle {self.registration_number} status={self.status}>"
