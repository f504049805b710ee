# fleet/schemas/detail.py
"""Nested views that combine several resources (kept apart to avoid import cycles)."""

from typing import Optional
from fleet.schemas.user import UserOut
from fleet.schemas.vehicle import VehicleOut
from fleet.schemas.document import DocumentOut
from fleet.schemas.maintenance import MaintenanceOut
from fleet.schemas.exchange import ExchangeBrief


class UserWithVehicle(UserOut):
    vehicle: Optional[VehicleOut] = None


class UserDetail(UserWithVehicle):
    initiated_exchanges: list[ExchangeBrief] = []
    received_exchanges: list[ExchangeBrief] = []


class VehicleDetail(VehicleOut):
    documents: list[DocumentOut] = []
    maintenances: list[MaintenanceOut] = []
    exchanges: list[ExchangeBrief] = []
