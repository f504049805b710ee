# tests/test_policies.py
"""Unit tests for the vehicle and exchange policies (no database needed)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fleet.models.user import User
from fleet.models.vehicle import Vehicle
from fleet.models.vehicle_exchange import VehicleExchange
from fleet.policies import exchange_policy, vehicle_policy


def make_user(user_id, role="chauffeur", vehicle_id=None):
    return User(id=user_id, name=f"U{user_id}", email=f"u{user_id}@x.io", role=role, vehicle_id=vehicle_id)


def make_exchange(from_id=1, to_id=2, status="pending"):
    return VehicleExchange(id=10, from_driver_id=from_id, to_driver_id=to_id, vehicle_id=5, status=status)


class TestVehiclePolicy:
    def test_anyone_may_list(self):
        assert vehicle_policy.view_any(make_user(1))
        assert vehicle_policy.view_any(make_user(2, role="admin"))

    def test_admin_sees_every_vehicle(self):
        assert vehicle_policy.view(make_user(1, role="admin"), Vehicle(id=7))

    def test_chauffeur_sees_only_assigned_vehicle(self):
        chauffeur = make_user(1, vehicle_id=7)
        assert vehicle_policy.view(chauffeur, Vehicle(id=7))
        assert not vehicle_policy.view(chauffeur, Vehicle(id=8))

    def test_unassigned_chauffeur_sees_nothing(self):
        assert not vehicle_policy.view(make_user(1), Vehicle(id=7))

    def test_changes_are_admin_only(self):
        admin, chauffeur, vehicle = make_user(1, role="admin"), make_user(2, vehicle_id=7), Vehicle(id=7)
        assert vehicle_policy.create(admin)
        assert not vehicle_policy.create(chauffeur)
        for check in (vehicle_policy.update, vehicle_policy.delete, vehicle_policy.archive, vehicle_policy.restore):
            assert check(admin, vehicle)
            assert not check(chauffeur, vehicle)


class TestExchangePolicy:
    def test_parties_and_admin_can_view(self):
        exchange = make_exchange(from_id=1, to_id=2)
        assert exchange_policy.view(make_user(1), exchange)
        assert exchange_policy.view(make_user(2), exchange)
        assert exchange_policy.view(make_user(9, role="admin"), exchange)
        assert not exchange_policy.view(make_user(3), exchange)

    def test_only_chauffeurs_create(self):
        assert exchange_policy.create(make_user(1))
        assert not exchange_policy.create(make_user(1, role="admin"))

    def test_update_requires_initiator_and_pending(self):
        assert exchange_policy.update(make_user(1), make_exchange())
        assert not exchange_policy.update(make_user(2), make_exchange())
        assert not exchange_policy.update(make_user(1), make_exchange(status="approved"))

    def test_delete(self):
        assert exchange_policy.delete(make_user(1), make_exchange())
        assert not exchange_policy.delete(make_user(1), make_exchange(status="rejected"))
        assert not exchange_policy.delete(make_user(2), make_exchange())
        assert exchange_policy.delete(make_user(9, role="admin"), make_exchange(status="approved"))

    def test_decisions_are_admin_only(self):
        assert exchange_policy.approve(make_user(9, role="admin"))
        assert exchange_policy.reject(make_user(9, role="admin"))
        assert not exchange_policy.approve(make_user(1))
        assert not exchange_policy.reject(make_user(1))
