"""Create portfolio tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the visit log, the visitor submission tables, the catalog
       tables and the user profile table.
Rollback: downgrade() drops every table (destructive, all data is lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── Visits ────────────────────────────────────────────────────────────
    op.create_table(
        "visits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "client_identity",
            sa.String(512),
            nullable=False,
            comment="Network address + device fingerprint, the deduplication key",
        ),
        sa.Column(
            "network_address",
            sa.String(64),
            nullable=False,
            comment="Client IP address as seen by the server",
        ),
        sa.Column(
            "device_fingerprint",
            sa.String(128),
            nullable=False,
            comment="Hash of client request headers",
        ),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column(
            "recorded_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this location was recorded (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # Serves "latest visit for this client", the dedup lookup
    op.create_index(
        "idx_visits_identity_recorded_at",
        "visits",
        ["client_identity", sa.text("recorded_at DESC")],
    )
    op.create_index(
        "idx_visits_recorded_at",
        "visits",
        [sa.text("recorded_at DESC")],
    )

    # ── Visitor submissions ───────────────────────────────────────────────
    op.create_table(
        "contact_submissions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("wants_collaboration", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("phone_number", sa.String(32), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "feedback_entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("feedback", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "query_entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("query", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # ── Catalog ───────────────────────────────────────────────────────────
    op.create_table(
        "certifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "title",
            sa.String(255),
            nullable=False,
            comment="Display title, also the lookup key for /api/certifications/{title}",
        ),
        sa.Column(
            "image_urls",
            sa.JSON(),
            nullable=False,
            comment="Ordered certificate image references",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("title"),
    )
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.JSON(), nullable=False),
        sa.Column("additional_details", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_projects_category", "projects", ["category"])

    # ── User profiles ─────────────────────────────────────────────────────
    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("last_sign_in_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop every portfolio table. All data is lost."""
    op.drop_table("user_profiles")
    op.drop_index("idx_projects_category", table_name="projects")
    op.drop_table("projects")
    op.drop_table("certifications")
    op.drop_table("query_entries")
    op.drop_table("feedback_entries")
    op.drop_table("contact_submissions")
    op.drop_index("idx_visits_recorded_at", table_name="visits")
    op.drop_index("idx_visits_identity_recorded_at", table_name="visits")
    op.drop_table("visits")
