"""
Users table: admins and chauffeurs.
A chauffeur holds at most one vehicle (vehicle_id); the unique index on
vehicle_id stops two users from holding the same vehicle.
"""

import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from fleet.database import Base


class Role(str, enum.Enum):
    ADMIN = "admin"
    CHAUFFEUR = "chauffeur"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)   # werkzeug hash, never serialised
    role = Column(String(20), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="SET NULL"), unique=True)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    vehicle = relationship("Vehicle", back_populates="assigned_user")
    tokens = relationship("AccessToken", back_populates="user", cascade="all, delete-orphan")
    initiated_exchanges = relationship(
        "VehicleExchange", foreign_keys="VehicleExchange.from_driver_id",
        back_populates="from_driver", cascade="all, delete-orphan",
    )
    received_exchanges = relationship(
        "VehicleExchange", foreign_keys="VehicleExchange.to_driver_id",
        back_populates="to_driver", cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_chauffeur(self) -> bool:
        return self.role == Role.CHAUFFEUR

    def __repr__(self):
        return f"<User {self.id} {self.email} role={self.role}>"
