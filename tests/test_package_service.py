"""Unit tests for the package lifecycle: assign, deliver, pickup."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock, AsyncMock, patch
from lockerhub.config import settings
from lockerhub.errors import ErrorCode
from lockerhub.models.audit_log import AssignmentLog, PickupLog
from lockerhub.models.enums import LockerSize, LockerStatus, PackageStatus
from lockerhub.models.locker import Locker
from lockerhub.models.package import Package
from lockerhub.services import locker_service, package_service

from factories import make_store, make_user, make_courier, make_locker, make_package, count_rows, load


async def setup_queued():
    store = make_store()
    user = await make_user(store)
    courier = await make_courier(store)
    locker = await make_locker(store)
    pkg = await make_package(store, user)
    return store, user, courier, locker, pkg


class TestIntake:
    @pytest.mark.asyncio
    async def test_new_package_is_queued_without_locker(self):
        store = make_store()
        user = await make_user(store)
        pkg = await make_package(store, user, size=LockerSize.SMALL, description="Books")

        assert pkg.status == PackageStatus.QUEUED
        assert pkg.locker_id is None
        assert pkg.tracking_number.startswith("TRK")
        assert pkg.assigned_at is None and pkg.delivered_at is None and pkg.picked_up_at is None

    @pytest.mark.asyncio
    async def test_ids_and_tracking_numbers_are_unique(self):
        store = make_store()
        user = await make_user(store)
        pkgs = [await make_package(store, user) for _ in range(20)]

        assert len({p.id for p in pkgs}) == 20
        assert len({p.tracking_number for p in pkgs}) == 20


class TestRoundTrip:
    @pytest.mark.asyncio
    async def test_assign_deliver_pickup(self):
        store, user, courier, locker, pkg = await setup_queued()

        assigned = await package_service.assign_locker(store, pkg.id, locker.id, courier.id)
        assert assigned.success
        assert assigned.data.status == PackageStatus.ASSIGNED
        assert assigned.data.locker_id == locker.id
        assert load(store, Locker, locker.id).status == LockerStatus.OCCUPIED.value
        assert count_rows(store, AssignmentLog) == 1

        delivered = await package_service.mark_delivered(store, pkg.id)
        assert delivered.success
        assert delivered.data.status == PackageStatus.DELIVERED
        assert load(store, Locker, locker.id).status == LockerStatus.OCCUPIED.value

        picked = await package_service.pickup(store, pkg.id, user.id)
        assert picked.success
        assert picked.data.status == PackageStatus.PICKED_UP
        assert picked.data.locker_id == locker.id   # kept as provenance
        assert load(store, Locker, locker.id).status == LockerStatus.AVAILABLE.value
        assert count_rows(store, PickupLog) == 1

        final = picked.data
        assert final.assigned_at <= final.delivered_at <= final.picked_up_at

    @pytest.mark.asyncio
    async def test_assignment_log_records_who_and_where(self):
        store, user, courier, locker, pkg = await setup_queued()
        await package_service.assign_locker(store, pkg.id, locker.id, courier.id)

        with store.transaction() as db:
            row = db.query(AssignmentLog).one()
            assert (row.package_id, row.locker_id, row.assigned_by) == (pkg.id, locker.id, courier.id)

    @pytest.mark.asyncio
    async def test_pickup_log_records_verification(self):
        store, user, courier, locker, pkg = await setup_queued()
        await package_service.assign_locker(store, pkg.id, locker.id, courier.id)
        await package_service.mark_delivered(store, pkg.id)
        await package_service.pickup(store, pkg.id, user.id)

        with store.transaction() as db:
            row = db.query(PickupLog).one()
            assert (row.package_id, row.user_id, row.locker_id) == (pkg.id, user.id, locker.id)
            assert row.facial_recognition_verified is True


class TestAssign:
    @pytest.mark.asyncio
    async def test_occupied_locker_rejected_without_mutation(self):
        store, user, courier, locker, pkg = await setup_queued()
        other = await make_package(store, user)
        await package_service.assign_locker(store, other.id, locker.id, courier.id)

        result = await package_service.assign_locker(store, pkg.id, locker.id, courier.id)

        assert not result.success
        assert result.error == "Locker not available"
        assert result.error_code == ErrorCode.INVALID_STATE
        row = load(store, Package, pkg.id)
        assert row.status == PackageStatus.QUEUED.value and row.locker_id is None
        assert count_rows(store, AssignmentLog) == 1

    @pytest.mark.asyncio
    async def test_maintenance_locker_rejected(self):
        store, user, courier, locker, pkg = await setup_queued()
        await locker_service.update_locker_status(store, locker.id, LockerStatus.MAINTENANCE)

        result = await package_service.assign_locker(store, pkg.id, locker.id, courier.id)

        assert not result.success
        assert result.error == "Locker not available"
        assert load(store, Locker, locker.id).status == LockerStatus.MAINTENANCE.value

    @pytest.mark.asyncio
    async def test_unknown_package_and_locker(self):
        store, user, courier, locker, pkg = await setup_queued()

        missing_pkg = await package_service.assign_locker(store, "nope", locker.id, courier.id)
        missing_locker = await package_service.assign_locker(store, pkg.id, "nope", courier.id)

        assert missing_pkg.error == "Package not found"
        assert missing_pkg.error_code == ErrorCode.NOT_FOUND
        assert missing_locker.error == "Locker not found"
        assert load(store, Locker, locker.id).status == LockerStatus.AVAILABLE.value

    @pytest.mark.asyncio
    async def test_assigned_package_cannot_be_reassigned(self):
        store, user, courier, locker, pkg = await setup_queued()
        second = await make_locker(store, number="L2")
        await package_service.assign_locker(store, pkg.id, locker.id, courier.id)

        result = await package_service.assign_locker(store, pkg.id, second.id, courier.id)

        assert not result.success
        assert result.error_code == ErrorCode.INVALID_STATE
        assert load(store, Package, pkg.id).locker_id == locker.id
        assert load(store, Locker, second.id).status == LockerStatus.AVAILABLE.value

    @pytest.mark.asyncio
    async def test_failure_mid_assignment_rolls_everything_back(self):
        store, user, courier, locker, pkg = await setup_queued()

        with patch("lockerhub.services.package_service.AssignmentLog",
                   MagicMock(side_effect=RuntimeError("audit store unavailable"))):
            with pytest.raises(RuntimeError):
                await package_service.assign_locker(store, pkg.id, locker.id, courier.id)

        row = load(store, Package, pkg.id)
        assert row.status == PackageStatus.QUEUED.value
        assert row.locker_id is None and row.assigned_at is None
        assert load(store, Locker, locker.id).status == LockerStatus.AVAILABLE.value
        assert count_rows(store, AssignmentLog) == 0


class TestDeliver:
    @pytest.mark.asyncio
    async def test_queued_package_can_skip_to_delivered_by_default(self):
        store, user, courier, locker, pkg = await setup_queued()

        result = await package_service.mark_delivered(store, pkg.id)

        assert result.success
        assert result.data.status == PackageStatus.DELIVERED
        assert result.data.locker_id is None

    @pytest.mark.asyncio
    async def test_strict_gate_requires_assignment(self):
        store, user, courier, locker, pkg = await setup_queued()

        with patch.object(settings, "STRICT_DELIVERY_GATE", True):
            result = await package_service.mark_delivered(store, pkg.id)

        assert not result.success
        assert result.error_code == ErrorCode.INVALID_STATE
        assert load(store, Package, pkg.id).status == PackageStatus.QUEUED.value

    @pytest.mark.asyncio
    async def test_delivery_timestamp_set_once(self):
        store, user, courier, locker, pkg = await setup_queued()
        await package_service.assign_locker(store, pkg.id, locker.id, courier.id)
        first = (await package_service.mark_delivered(store, pkg.id)).data

        again = await package_service.mark_delivered(store, pkg.id)

        assert not again.success
        assert load(store, Package, pkg.id).delivered_at == first.delivered_at

    @pytest.mark.asyncio
    async def test_picked_up_is_terminal(self):
        store, user, courier, locker, pkg = await setup_queued()
        await package_service.assign_locker(store, pkg.id, locker.id, courier.id)
        await package_service.mark_delivered(store, pkg.id)
        await package_service.pickup(store, pkg.id, user.id)

        result = await package_service.mark_delivered(store, pkg.id)

        assert not result.success
        assert load(store, Package, pkg.id).status == PackageStatus.PICKED_UP.value

    @pytest.mark.asyncio
    async def test_unknown_package(self):
        store = make_store()
        result = await package_service.mark_delivered(store, "missing")
        assert result.error == "Package not found"


class TestPickup:
    @pytest.mark.asyncio
    async def test_queued_package_rejected(self):
        store, user, courier, locker, pkg = await setup_queued()

        result = await package_service.pickup(store, pkg.id, user.id)

        assert not result.success
        assert result.error == "Package not ready for pickup"
        assert result.error_code == ErrorCode.INVALID_STATE
        assert load(store, Package, pkg.id).status == PackageStatus.QUEUED.value
        assert load(store, Locker, locker.id).status == LockerStatus.AVAILABLE.value
        assert count_rows(store, PickupLog) == 0

    @pytest.mark.asyncio
    async def test_assigned_package_rejected(self):
        store, user, courier, locker, pkg = await setup_queued()
        await package_service.assign_locker(store, pkg.id, locker.id, courier.id)

        result = await package_service.pickup(store, pkg.id, user.id)

        assert not result.success
        assert load(store, Locker, locker.id).status == LockerStatus.OCCUPIED.value
        assert count_rows(store, PickupLog) == 0

    @pytest.mark.asyncio
    async def test_second_pickup_rejected(self):
        store, user, courier, locker, pkg = await setup_queued()
        await package_service.assign_locker(store, pkg.id, locker.id, courier.id)
        await package_service.mark_delivered(store, pkg.id)
        await package_service.pickup(store, pkg.id, user.id)

        again = await package_service.pickup(store, pkg.id, user.id)

        assert not again.success
        assert count_rows(store, PickupLog) == 1

    @pytest.mark.asyncio
    async def test_injected_verifier_result_is_logged(self):
        store, user, courier, locker, pkg = await setup_queued()
        await package_service.assign_locker(store, pkg.id, locker.id, courier.id)
        await package_service.mark_delivered(store, pkg.id)
        verifier = AsyncMock(return_value=False)

        result = await package_service.pickup(store, pkg.id, user.id, verifier=verifier)

        assert result.success
        verifier.assert_awaited_once()
        assert verifier.call_args[0][0] == user.id
        with store.transaction() as db:
            assert db.query(PickupLog).one().facial_recognition_verified is False

    @pytest.mark.asyncio
    async def test_failed_verification_blocks_pickup_when_required(self):
        store, user, courier, locker, pkg = await setup_queued()
        await package_service.assign_locker(store, pkg.id, locker.id, courier.id)
        await package_service.mark_delivered(store, pkg.id)

        with patch.object(settings, "REQUIRE_IDENTITY_VERIFICATION", True):
            result = await package_service.pickup(store, pkg.id, user.id, verifier=AsyncMock(return_value=False))

        assert not result.success
        assert result.error == "Identity verification failed"
        assert load(store, Package, pkg.id).status == PackageStatus.DELIVERED.value
        assert load(store, Locker, locker.id).status == LockerStatus.OCCUPIED.value
        assert count_rows(store, PickupLog) == 0

    @pytest.mark.asyncio
    async def test_pickup_without_locker_leaves_lockers_alone(self):
        store, user, courier, locker, pkg = await setup_queued()
        await package_service.mark_delivered(store, pkg.id)
        before = load(store, Locker, locker.id)

        result = await package_service.pickup(store, pkg.id, user.id)

        assert result.success
        assert result.data.status == PackageStatus.PICKED_UP
        with store.transaction() as db:
            assert db.query(PickupLog).one().locker_id is None
        after = load(store, Locker, locker.id)
        assert after.status == LockerStatus.AVAILABLE.value
        assert after.updated_at == before.updated_at


class TestQueries:
    @pytest.mark.asyncio
    async def test_my_packages_covers_sender_and_recipient(self):
        store = make_store()
        alice = await make_user(store, email="alice@example.com")
        bob = await make_user(store, email="bob@example.com")
        to_alice = await make_package(store, alice, sender_id=bob.id)
        to_bob = await make_package(store, bob)

        mine = await package_service.get_my_packages(store, bob.id)
        received = await package_service.get_packages_by_recipient(store, bob.id)

        assert {p.id for p in mine.data} == {to_alice.id, to_bob.id}
        assert [p.id for p in received.data] == [to_bob.id]

    @pytest.mark.asyncio
    async def test_returned_list_is_a_snapshot(self):
        store, user, courier, locker, pkg = await setup_queued()
        before = (await package_service.get_all_packages(store)).data

        await package_service.assign_locker(store, pkg.id, locker.id, courier.id)
        await make_package(store, user)

        assert len(before) == 1
        assert before[0].status == PackageStatus.QUEUED
        assert before[0].locker_id is None
