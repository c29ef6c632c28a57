"""
Portfolio Backend — Visit Service (Location Deduplication)
============================================================

What:  Decides whether an incoming visitor location is stored, and serves the
       stored visit history.
Who:   Called by the /api/visited route handlers.

Decision Flow (POST /api/visited/location):
    ┌───────────┐    ┌──────────────┐    ┌───────────────┐    ┌──────────┐
    │  Parse    │───▶│ Latest visit │───▶│ Distance ≥    │───▶│  Insert  │
    │  lat/lon  │    │ for identity │    │ threshold?    │    │  visit   │
    └───────────┘    └──────────────┘    └───────────────┘    └──────────┘
                          │ none                 │ no
                          └──▶ insert            └──▶ respond "not stored"

    The threshold is settings.dedup_threshold_km (1 km by default) and the
    comparison is inclusive: a move of exactly the threshold is stored.

Concurrency:
    The lookup and the insert form a read-then-write sequence. Two reports
    from one client arriving together could both see the same "latest" row
    and both insert. Reports are therefore serialized per client identity
    with an asyncio.Lock, and the insert is committed before the lock is
    released. The lock is per process; with several worker processes the
    race is narrowed, not removed.
"""

import asyncio
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import DatabaseError
from app.models.visit import Visit
from app.schemas.visit import LocationRecordResponse, VisitResponse
from app.services.geo import GeoPoint, haversine_km, parse_point
from app.services.identity import derive_client_identity

logger = logging.getLogger(__name__)


class IdentityLocks:
    """
    Registry of asyncio locks keyed by client identity.

    Entries are dropped as soon as no coroutine holds or waits on them, so
    the registry only grows with the number of clients reporting right now.
    """

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = defaultdict(int)

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] += 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


class VisitService:
    """
    Business logic for visitor location tracking.

    Responsibilities:
        - record_location(): dedup-by-distance insert
        - get_last_visit(): most recent visit across all clients
        - list_visits(): full visit history, newest first
    """

    def __init__(self, threshold_km: Optional[float] = None) -> None:
        self._threshold_km = threshold_km
        self._locks = IdentityLocks()

    @property
    def threshold_km(self) -> float:
        if self._threshold_km is not None:
            return self._threshold_km
        return settings.dedup_threshold_km

    async def record_location(
        self,
        db: AsyncSession,
        network_address: str,
        fingerprint: str,
        latitude,
        longitude,
    ) -> LocationRecordResponse:
        """
        Store a location report unless the client hasn't moved far enough.

        Args:
            db: Async database session
            network_address: Client IP (must be non-empty)
            fingerprint: Device fingerprint for the request
            latitude, longitude: Numbers or numeric strings

        Returns:
            LocationRecordResponse with stored=True and the new visit, or
            stored=False and the measured distance.

        Raises:
            InvalidLocationError: coordinates can't be parsed (→ 422)
            AddressExtractionError: empty network address (→ 400)
            DatabaseError: lookup or insert failed (→ 500)
        """
        point = parse_point(latitude, longitude)
        identity = derive_client_identity(network_address, fingerprint)

        async with self._locks.hold(identity):
            previous = await self._latest_for_identity(db, identity)

            distance_km: Optional[float] = None
            if previous is not None:
                distance_km = haversine_km(
                    GeoPoint(previous.latitude, previous.longitude), point
                )
                if distance_km < self.threshold_km:
                    logger.info(
                        "Visit not stored for %s: moved %.3f km (< %.3f km)",
                        network_address, distance_km, self.threshold_km,
                    )
                    return LocationRecordResponse(
                        message="Location not stored: insufficient movement since last visit",
                        stored=False,
                        distance_km=round(distance_km, 3),
                    )

            visit = Visit(
                client_identity=identity,
                network_address=network_address,
                device_fingerprint=fingerprint,
                latitude=point.latitude,
                longitude=point.longitude,
                recorded_at=datetime.now(timezone.utc),
            )
            try:
                db.add(visit)
                await db.flush()
                await db.commit()
            except Exception as e:
                logger.error("Failed to store visit for %s: %s", network_address, str(e), exc_info=True)
                raise DatabaseError(
                    message="Could not save your location. Please try again.",
                    context={"error_type": type(e).__name__},
                )

        logger.info(
            "Visit %s stored for %s (%s)",
            visit.id,
            network_address,
            "first visit" if distance_km is None else f"moved {distance_km:.3f} km",
        )
        return LocationRecordResponse(
            message="Location stored successfully",
            stored=True,
            distance_km=None if distance_km is None else round(distance_km, 3),
            visit=VisitResponse.from_model(visit),
        )

    async def _latest_for_identity(self, db: AsyncSession, identity: str) -> Optional[Visit]:
        try:
            result = await db.execute(
                select(Visit)
                .where(Visit.client_identity == identity)
                .order_by(Visit.recorded_at.desc(), Visit.id.desc())
                .limit(1)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error looking up last visit: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save your location. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_last_visit(self, db: AsyncSession) -> Optional[VisitResponse]:
        """Return the most recent visit from any client, or None when there are none."""
        try:
            result = await db.execute(
                select(Visit).order_by(Visit.recorded_at.desc(), Visit.id.desc()).limit(1)
            )
            visit = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching last visit: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching last user visit",
                context={"error_type": type(e).__name__},
            )
        return VisitResponse.from_model(visit) if visit is not None else None

    async def list_visits(self, db: AsyncSession) -> List[VisitResponse]:
        """Return every stored visit, newest first."""
        try:
            result = await db.execute(
                select(Visit).order_by(Visit.recorded_at.desc(), Visit.id.desc())
            )
            visits = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing visits: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching user visits",
                context={"error_type": type(e).__name__},
            )
        return [VisitResponse.from_model(v) for v in visits]


# ── Singleton Instance ────────────────────────────────────────────────────
# Shared so that the per-identity locks cover every request in the process
visit_service = VisitService()
