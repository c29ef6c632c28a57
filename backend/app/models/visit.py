"""
Portfolio Backend — Visit SQLAlchemy Model
============================================

What:  ORM model representing the `visits` table (one row per accepted
       location report).
Who:   Written by VisitService when a report passes the movement threshold;
       read by the /api/visited endpoints.

Table Design Rationale:
    - Integer primary key: visits are an append-only log; the autoincrement
      id breaks ties between rows recorded in the same instant, which keeps
      "most recent per identity" well-defined.
    - client_identity: network address + device fingerprint, the
      deduplication key.
    - latitude/longitude: plain floats; no spatial index is needed because
      each request compares against exactly one prior point.

    Index on (client_identity, recorded_at DESC):
        Serves the dedup lookup "latest visit for this client" as an index seek.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Visit(Base):
    """
    A persisted location report for one client identity.

    Lifecycle:
        Created by the visit deduplication service; never updated or deleted.
    """

    __tablename__ = "visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    client_identity: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        comment="Network address + device fingerprint, the deduplication key",
    )

    network_address: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Client IP address as seen by the server",
    )

    device_fingerprint: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="Hash of client request headers",
    )

    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When this location was recorded (UTC)",
    )

    __table_args__ = (
        Index("idx_visits_identity_recorded_at", "client_identity", recorded_at.desc()),
        Index("idx_visits_recorded_at", recorded_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Visit(id={self.id}, identity='{self.client_identity}', "
            f"lat={self.latitude}, lon={self.longitude})>"
        )
