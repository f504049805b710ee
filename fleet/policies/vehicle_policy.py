# fleet/policies/vehicle_policy.py
"""
Who may do what with a vehicle. Pure functions of (actor, vehicle).

Anyone signed in may list vehicles. A single vehicle is visible to admins and
to the chauffeur it is assigned to. Every change is admin-only.
"""

from fleet.models.user import User
from fleet.models.vehicle import Vehicle


def view_any(user: User) -> bool:
    return True


def view(user: User, vehicle: Vehicle) -> bool:
    return user.is_admin or (user.vehicle_id is not None and user.vehicle_id == vehicle.id)


def create(user: User) -> bool:
    return user.is_admin


def update(user: User, vehicle: Vehicle) -> bool:
    return user.is_admin


def delete(user: User, vehicle: Vehicle) -> bool:
    return user.is_admin


def archive(user: User, vehicle: Vehicle) -> bool:
    return user.is_admin


def restore(user: User, vehicle: Vehicle) -> bool:
    return user.is_admin
