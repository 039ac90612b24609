"""Unit tests for locker sessions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from lockerhub.errors import ErrorCode
from lockerhub.models.enums import SessionStatus, SessionType
from lockerhub.services import session_service

from factories import make_store, make_user, make_locker, make_package


class TestSessions:
    @pytest.mark.asyncio
    async def test_create_starts_active_and_unverified(self):
        store = make_store()
        user = await make_user(store)
        locker = await make_locker(store)
        pkg = await make_package(store, user)

        result = await session_service.create_session(store, user.id, locker.id, SessionType.PICKUP, pkg.id)

        assert result.success
        session = result.data
        assert session.status == SessionStatus.ACTIVE
        assert session.facial_recognition_verified is False
        assert session.package_id == pkg.id
        assert session.completed_at is None

    @pytest.mark.asyncio
    async def test_create_requires_known_user_and_locker(self):
        store = make_store()
        user = await make_user(store)
        locker = await make_locker(store)

        no_user = await session_service.create_session(store, "ghost", locker.id, SessionType.ACCESS)
        no_locker = await session_service.create_session(store, user.id, "ghost", SessionType.ACCESS)
        no_package = await session_service.create_session(store, user.id, locker.id, SessionType.PICKUP, "ghost")

        assert no_user.error == "User not found"
        assert no_locker.error == "Locker not found"
        assert no_package.error == "Package not found"
        assert (await session_service.get_all_sessions(store)).data == []

    @pytest.mark.asyncio
    async def test_complete_once(self):
        store = make_store()
        user = await make_user(store)
        locker = await make_locker(store)
        session = (await session_service.create_session(store, user.id, locker.id, SessionType.DELIVERY)).data

        done = await session_service.complete_session(store, session.id)
        again = await session_service.complete_session(store, session.id)

        assert done.success
        assert done.data.status == SessionStatus.COMPLETED
        assert done.data.completed_at >= done.data.started_at
        assert not again.success
        assert again.error_code == ErrorCode.INVALID_STATE

    @pytest.mark.asyncio
    async def test_complete_unknown_session(self):
        store = make_store()
        result = await session_service.complete_session(store, "missing")
        assert result.error == "Session not found"

    @pytest.mark.asyncio
    async def test_filters_by_user_and_activity(self):
        store = make_store()
        alice = await make_user(store, email="alice@example.com")
        bob = await make_user(store, email="bob@example.com")
        locker = await make_locker(store)
        a1 = (await session_service.create_session(store, alice.id, locker.id, SessionType.ACCESS)).data
        a2 = (await session_service.create_session(store, alice.id, locker.id, SessionType.PICKUP)).data
        b1 = (await session_service.create_session(store, bob.id, locker.id, SessionType.ACCESS)).data
        await session_service.complete_session(store, a1.id)

        mine = await session_service.get_my_sessions(store, alice.id)
        by_user = await session_service.get_sessions_by_user(store, alice.id)
        my_active = await session_service.get_my_active_sessions(store, alice.id)
        active = await session_service.get_active_sessions(store)

        assert {s.id for s in mine.data} == {a1.id, a2.id}
        assert {s.id for s in by_user.data} == {a1.id, a2.id}
        assert [s.id for s in my_active.data] == [a2.id]
        assert {s.id for s in active.data} == {a2.id, b1.id}

    @pytest.mark.asyncio
    async def test_unknown_session_type_rejected(self):
        store = make_store()
        user = await make_user(store)
        locker = await make_locker(store)

        result = await session_service.create_session(store, user.id, locker.id, "teleport")

        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert (await session_service.get_all_sessions(store)).data == []
