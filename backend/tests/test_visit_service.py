"""
Portfolio Backend — Visit Service Unit Tests
==============================================

What:  Tests for the location deduplication decision.
How:   Mock DB sessions for the decision logic; an in-memory SQLite database
       for ordering and the concurrent-report case.

What we test:
    ✅ First report for an identity is stored
    ✅ Same coordinates as the previous visit are not stored
    ✅ A ~1.11 km move is stored
    ✅ Invalid coordinates / missing address fail before touching the DB
    ✅ Store failures surface as DatabaseError
    ✅ Concurrent identical reports from one client store a single row
"""

import asyncio
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select

from app.exceptions import AddressExtractionError, DatabaseError, InvalidLocationError
from app.models.visit import Visit
from app.services.identity import derive_client_identity
from app.services.visit_service import IdentityLocks, VisitService

ADDRESS = "203.0.113.7"
FINGERPRINT = "f" * 64


def previous_visit(latitude=28.6139, longitude=77.2090):
    return SimpleNamespace(latitude=latitude, longitude=longitude)


def prime_lookup(session, previous):
    """Make the 'latest visit for identity' query return `previous`."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = previous
    session.execute = AsyncMock(return_value=result)


def assign_ids_on_flush(session):
    """Emulate the database assigning a primary key on flush."""
    async def flush():
        for call in session.add.call_args_list:
            row = call.args[0]
            if getattr(row, "id", None) is None:
                row.id = 1
    session.flush = AsyncMock(side_effect=flush)


class TestRecordLocation:

    def setup_method(self):
        self.service = VisitService(threshold_km=1.0)

    @pytest.mark.asyncio
    async def test_first_visit_is_stored(self, mock_db_session):
        prime_lookup(mock_db_session, None)
        assign_ids_on_flush(mock_db_session)

        result = await self.service.record_location(
            mock_db_session, ADDRESS, FINGERPRINT, "28.6139", "77.2090"
        )

        assert result.stored is True
        assert result.distance_km is None
        assert result.visit.location.latitude == 28.6139
        assert result.visit.client_identity == derive_client_identity(ADDRESS, FINGERPRINT)
        mock_db_session.add.assert_called_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_same_coordinates_not_stored(self, mock_db_session):
        prime_lookup(mock_db_session, previous_visit())

        result = await self.service.record_location(
            mock_db_session, ADDRESS, FINGERPRINT, 28.6139, 77.2090
        )

        assert result.stored is False
        assert result.distance_km == 0.0
        assert result.visit is None
        assert "insufficient movement" in result.message
        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_small_move_not_stored(self, mock_db_session):
        prime_lookup(mock_db_session, previous_visit())

        # 0.005° north ≈ 0.56 km
        result = await self.service.record_location(
            mock_db_session, ADDRESS, FINGERPRINT, 28.6189, 77.2090
        )

        assert result.stored is False
        assert 0.5 < result.distance_km < 0.6

    @pytest.mark.asyncio
    async def test_move_over_one_km_is_stored(self, mock_db_session):
        prime_lookup(mock_db_session, previous_visit())
        assign_ids_on_flush(mock_db_session)

        result = await self.service.record_location(
            mock_db_session, ADDRESS, FINGERPRINT, 28.6239, 77.2090
        )

        assert result.stored is True
        assert result.distance_km == pytest.approx(1.112, abs=0.005)
        stored = mock_db_session.add.call_args.args[0]
        assert isinstance(stored, Visit)
        assert stored.latitude == 28.6239
        assert stored.network_address == ADDRESS
        assert stored.device_fingerprint == FINGERPRINT

    @pytest.mark.asyncio
    async def test_threshold_is_configurable(self, mock_db_session):
        prime_lookup(mock_db_session, previous_visit())
        assign_ids_on_flush(mock_db_session)
        service = VisitService(threshold_km=0.5)

        result = await service.record_location(
            mock_db_session, ADDRESS, FINGERPRINT, 28.6189, 77.2090
        )

        assert result.stored is True

    @pytest.mark.asyncio
    async def test_invalid_location_rejected_before_lookup(self, mock_db_session):
        with pytest.raises(InvalidLocationError):
            await self.service.record_location(
                mock_db_session, ADDRESS, FINGERPRINT, "north", "77.2090"
            )
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_address_rejected(self, mock_db_session):
        with pytest.raises(AddressExtractionError):
            await self.service.record_location(
                mock_db_session, "", FINGERPRINT, 28.6139, 77.2090
            )
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lookup_failure_raises_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("connection reset"))

        with pytest.raises(DatabaseError):
            await self.service.record_location(
                mock_db_session, ADDRESS, FINGERPRINT, 28.6139, 77.2090
            )

    @pytest.mark.asyncio
    async def test_write_failure_raises_database_error(self, mock_db_session):
        prime_lookup(mock_db_session, None)
        mock_db_session.flush = AsyncMock(side_effect=RuntimeError("disk full"))

        with pytest.raises(DatabaseError):
            await self.service.record_location(
                mock_db_session, ADDRESS, FINGERPRINT, 28.6139, 77.2090
            )
        mock_db_session.commit.assert_not_awaited()


class TestVisitHistory:

    def setup_method(self):
        self.service = VisitService(threshold_km=1.0)

    @pytest.mark.asyncio
    async def test_last_visit_none_when_empty(self, session_factory):
        async with session_factory() as session:
            assert await self.service.get_last_visit(session) is None

    @pytest.mark.asyncio
    async def test_last_visit_is_most_recent_across_clients(self, session_factory):
        now = datetime.now(timezone.utc)
        async with session_factory() as session:
            session.add_all([
                Visit(client_identity="a|1", network_address="a", device_fingerprint="1",
                      latitude=10.0, longitude=10.0, recorded_at=now - timedelta(hours=2)),
                Visit(client_identity="b|2", network_address="b", device_fingerprint="2",
                      latitude=20.0, longitude=20.0, recorded_at=now),
                Visit(client_identity="a|1", network_address="a", device_fingerprint="1",
                      latitude=30.0, longitude=30.0, recorded_at=now - timedelta(hours=1)),
            ])
            await session.commit()

        async with session_factory() as session:
            last = await self.service.get_last_visit(session)
            history = await self.service.list_visits(session)

        assert last.client_identity == "b|2"
        assert [v.location.latitude for v in history] == [20.0, 30.0, 10.0]

    @pytest.mark.asyncio
    async def test_dedup_compares_against_latest_visit_of_same_client(self, session_factory):
        identity = derive_client_identity(ADDRESS, FINGERPRINT)
        now = datetime.now(timezone.utc)
        async with session_factory() as session:
            session.add_all([
                Visit(client_identity=identity, network_address=ADDRESS, device_fingerprint=FINGERPRINT,
                      latitude=0.0, longitude=0.0, recorded_at=now - timedelta(days=1)),
                Visit(client_identity=identity, network_address=ADDRESS, device_fingerprint=FINGERPRINT,
                      latitude=28.6139, longitude=77.2090, recorded_at=now),
            ])
            await session.commit()

        async with session_factory() as session:
            result = await self.service.record_location(
                session, ADDRESS, FINGERPRINT, 28.6139, 77.2090
            )

        assert result.stored is False

    @pytest.mark.asyncio
    async def test_other_clients_do_not_suppress_a_first_visit(self, session_factory):
        async with session_factory() as session:
            await self.service.record_location(session, ADDRESS, FINGERPRINT, 28.6139, 77.2090)

        async with session_factory() as session:
            result = await self.service.record_location(
                session, ADDRESS, "0" * 64, 28.6139, 77.2090
            )

        assert result.stored is True

    @pytest.mark.asyncio
    async def test_concurrent_reports_store_one_row(self, session_factory):
        async def report():
            async with session_factory() as session:
                return await self.service.record_location(
                    session, ADDRESS, FINGERPRINT, 28.6139, 77.2090
                )

        results = await asyncio.gather(*(report() for _ in range(5)))

        assert sum(r.stored for r in results) == 1
        async with session_factory() as session:
            count = (await session.execute(select(func.count(Visit.id)))).scalar()
        assert count == 1


class TestIdentityLocks:

    @pytest.mark.asyncio
    async def test_entries_removed_after_release(self):
        locks = IdentityLocks()
        async with locks.hold("a"):
            assert len(locks) == 1
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self):
        locks = IdentityLocks()
        events = []

        async def worker(name):
            async with locks.hold("same"):
                events.append(f"{name}-in")
                await asyncio.sleep(0.01)
                events.append(f"{name}-out")

        await asyncio.gather(worker("x"), worker("y"))

        assert events in (
            ["x-in", "x-out", "y-in", "y-out"],
            ["y-in", "y-out", "x-in", "x-out"],
        )
