# fleet/policies/exchange_policy.py
"""
Who may do what with a vehicle exchange. Pure functions of (actor, exchange).

approve/reject only check the role here; the pending half of that rule is the
status transition itself (next_status), which answers 422 rather than 403.
"""

from fleet.models.user import User
from fleet.models.vehicle_exchange import VehicleExchange


def view_any(user: User) -> bool:
    return True


def view(user: User, exchange: VehicleExchange) -> bool:
    return user.is_admin or exchange.involves(user)


def create(user: User) -> bool:
    return user.is_chauffeur


def update(user: User, exchange: VehicleExchange) -> bool:
    return exchange.from_driver_id == user.id and exchange.is_pending


def delete(user: User, exchange: VehicleExchange) -> bool:
    return user.is_admin or (exchange.from_driver_id == user.id and exchange.is_pending)


def approve(user: User) -> bool:
    return user.is_admin


def reject(user: User) -> bool:
    return user.is_admin
