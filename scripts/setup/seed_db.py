# scripts/setup/seed_db.py
"""
Seed demo data: one admin, one chauffeur, two vehicles, the first assigned
to the chauffeur. Safe to run repeatedly.
Usage: python scripts/setup/seed_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from datetime import datetime
from sqlalchemy.orm import Session
from fleet.database import SessionLocal, create_tables
from fleet.models.user import Role, User
from fleet.models.vehicle import Vehicle, VehicleStatus
from fleet.services.auth_service import hash_password

DEMO_PASSWORD = "password"

USERS = [
    {"name": "Admin User", "email": "admin@example.com", "role": Role.ADMIN},
    {"name": "Chauffeur User", "email": "chauffeur@example.com", "role": Role.CHAUFFEUR},
]

VEHICLES = [
    {"registration_number": "ABC-123", "model": "Toyota Camry", "year": 2022},
    {"registration_number": "XYZ-789", "model": "Honda Civic", "year": 2021},
]


def get_or_create_user(db: Session, name: str, email: str, role: Role) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user:
        return user
    now = datetime.utcnow()
    user = User(name=name, email=email, password=hash_password(DEMO_PASSWORD), role=role.value,
                created_at=now, updated_at=now)
    db.add(user)
    db.flush()
    print(f"   + user {email} ({role.value})")
    return user


def get_or_create_vehicle(db: Session, registration_number: str, model: str, year: int) -> Vehicle:
    vehicle = db.query(Vehicle).filter(Vehicle.registration_number == registration_number).first()
    if vehicle:
        return vehicle
    now = datetime.utcnow()
    vehicle = Vehicle(registration_number=registration_number, model=model, year=year,
                      status=VehicleStatus.ACTIVE.value, created_at=now, updated_at=now)
    db.add(vehicle)
    db.flush()
    print(f"   + vehicle {registration_number}")
    return vehicle


def seed(db: Session):
    users = [get_or_create_user(db, **u) for u in USERS]
    vehicles = [get_or_create_vehicle(db, **v) for v in VEHICLES]

    chauffeur, first_vehicle = users[1], vehicles[0]
    holder = db.query(User).filter(User.vehicle_id == first_vehicle.id).first()
    if holder is None:
        chauffeur.vehicle_id = first_vehicle.id
        print(f"   = {first_vehicle.registration_number} assigned to {chauffeur.email}")
    db.commit()


def main():
    print("Fleet API demo seed")
    print("=" * 40)
    create_tables()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()
    print(f"\nDone. Log in with admin@example.com / {DEMO_PASSWORD}")


if __name__ == "__main__":
    main()
