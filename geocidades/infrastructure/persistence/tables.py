"""SQLAlchemy Core table definitions."""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)

metadata = MetaData()


# ============================================================================
# USERS TABLE (profiles)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", String, primary_key=True),  # UUID as string
    Column("email", String(320), nullable=False, unique=True),
    Column("full_name", String(255), nullable=False),
    Column("status", String(16), nullable=False),  # UserStatus value
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=True),
)

Index("ix_users_status", users_table.c.status)


# ============================================================================
# USER ROLES TABLE (exactly one row per user)
# ============================================================================
user_roles_table = Table(
    "user_roles",
    metadata,
    Column(
        "user_id",
        String,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("role", String(32), nullable=False),  # Role value
    Column("assigned_by", String, nullable=True),
    Column("assigned_at", DateTime(timezone=True), nullable=False),
)

Index("ix_user_roles_role", user_roles_table.c.role)


# ============================================================================
# CREDENTIALS TABLE
# ============================================================================
credentials_table = Table(
    "credentials",
    metadata,
    Column(
        "user_id",
        String,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("password_hash", String(255), nullable=False),
)


# ============================================================================
# EVENTS TABLE (transactional outbox)
# ============================================================================
events_table = Table(
    "events",
    metadata,
    Column("id", String, primary_key=True),
    Column("event_type", String(128), nullable=False),
    Column("payload", JSON, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("status", String(32), nullable=False, server_default=text("'pending'")),
    Column("retry_count", Integer, nullable=False, server_default=text("0")),
    Column("delivery_error", Text, nullable=True),
    Column("delivered_at", DateTime(timezone=True), nullable=True),
)

# Worker polling index
Index("idx_events_status_created", events_table.c.status, events_table.c.created_at)
