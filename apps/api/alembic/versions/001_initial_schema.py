"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def _player_fk(name: str = "player_id", ondelete: str = "CASCADE", nullable: bool = False):
    return sa.Column(
        name,
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("players.id", ondelete=ondelete),
        nullable=nullable,
    )


def upgrade() -> None:
    # Players table
    op.create_table(
        "players",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(32), unique=True, nullable=False),
        sa.Column("coins", sa.BigInteger, nullable=False, server_default="0"),
        _created_at(),
    )
    op.create_index("ix_players_username", "players", ["username"])

    # Sessions table
    op.create_table(
        "sessions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _player_fk(),
        sa.Column("token", sa.String(64), unique=True, nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
    )
    op.create_index("ix_sessions_token", "sessions", ["token"])
    op.create_index("ix_sessions_player_id", "sessions", ["player_id"])
    op.create_index("ix_sessions_expires_at", "sessions", ["expires_at"])

    # Floors table
    op.create_table(
        "floors",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _player_fk(),
        sa.Column("idx", sa.Integer, nullable=False),
        sa.Column("unlocked", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("trap_count", sa.Integer, nullable=False, server_default="0"),
        sa.CheckConstraint("trap_count >= 0 AND trap_count <= 5", name="ck_floors_trap_count"),
    )
    op.create_index("ix_floors_player_idx", "floors", ["player_id", "idx"], unique=True)

    # Plots table (timestamps are epoch milliseconds)
    op.create_table(
        "plots",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "floor_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("floors.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("slot", sa.Integer, nullable=False),
        sa.Column("pot_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("pot_type", sa.String(20), nullable=True),
        sa.Column("pot_speed_mult", sa.Float, nullable=True),
        sa.Column("pot_yield_mult", sa.Float, nullable=True),
        sa.Column("seed_class", sa.String(50), nullable=True),
        sa.Column("mutation", sa.String(20), nullable=True),
        sa.Column("base_price", sa.BigInteger, nullable=True),
        sa.Column("stage", sa.String(20), nullable=False, server_default="empty"),
        sa.Column("planted_at", sa.BigInteger, nullable=True),
        sa.Column("mature_at", sa.BigInteger, nullable=True),
        sa.Column("locked", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_plots_floor_slot", "plots", ["floor_id", "slot"], unique=True)
    op.create_index("ix_plots_stage", "plots", ["stage"])

    # Inventory tables
    op.create_table(
        "inventory_seeds",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _player_fk(),
        sa.Column("seed_class", sa.String(50), nullable=False),
        sa.Column("base_price", sa.BigInteger, nullable=False),
        sa.Column("is_mature", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("mutation", sa.String(20), nullable=True),
    )
    op.create_index("ix_inventory_seeds_player_id", "inventory_seeds", ["player_id"])
    op.create_index(
        "ix_inventory_seeds_player_mature_class",
        "inventory_seeds",
        ["player_id", "is_mature", "seed_class"],
    )

    op.create_table(
        "inventory_pots",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _player_fk(),
        sa.Column("pot_type", sa.String(20), nullable=False),
        sa.Column("speed_mult", sa.Float, nullable=False),
        sa.Column("yield_mult", sa.Float, nullable=False),
    )
    op.create_index("ix_inventory_pots_player_id", "inventory_pots", ["player_id"])

    # Seed price catalog
    op.create_table(
        "seed_catalog",
        sa.Column("seed_class", sa.String(50), primary_key=True),
        sa.Column("base_price", sa.BigInteger, nullable=False),
    )

    # Market listings (never deleted)
    op.create_table(
        "market_listings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _player_fk("seller_id"),
        _player_fk("buyer_id", ondelete="SET NULL", nullable=True),
        sa.Column("seed_class", sa.String(50), nullable=False),
        sa.Column("base_price", sa.BigInteger, nullable=False),
        sa.Column("mutation", sa.String(20), nullable=True),
        sa.Column("ask_price", sa.BigInteger, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="open"),
        _created_at(),
    )
    op.create_index(
        "ix_market_listings_status_created", "market_listings", ["status", "created_at"]
    )
    op.create_index("ix_market_listings_seller_id", "market_listings", ["seller_id"])

    # Gacha profile, one per player
    op.create_table(
        "gacha_profiles",
        sa.Column(
            "player_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("players.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("total_pulls", sa.Integer, nullable=False, server_default="0"),
        sa.Column("pity10", sa.Integer, nullable=False, server_default="0"),
        sa.Column("pity90", sa.Integer, nullable=False, server_default="0"),
        sa.Column("step", sa.Integer, nullable=False, server_default="0"),
        sa.Column("queue", postgresql.JSONB, nullable=False, server_default="[]"),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
    )

    # Gacha roll history (append-only)
    op.create_table(
        "gacha_rolls",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _player_fk(),
        sa.Column("consumed_class", sa.String(50), nullable=False),
        sa.Column("consumed_count", sa.Integer, nullable=False),
        sa.Column("reward_type", sa.String(20), nullable=False),
        sa.Column("out_class", sa.String(50), nullable=True),
        sa.Column("out_mutation", sa.String(20), nullable=True),
        sa.Column("out_base", sa.BigInteger, nullable=False),
        sa.Column("pull_index", sa.Integer, nullable=False),
        sa.Column("pity10_after", sa.Integer, nullable=False),
        sa.Column("pity90_after", sa.Integer, nullable=False),
        sa.Column("step_after", sa.Integer, nullable=False),
        _created_at(),
    )
    op.create_index("ix_gacha_rolls_player_pull", "gacha_rolls", ["player_id", "pull_index"])

    # Action log
    op.create_table(
        "action_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _player_fk(nullable=True),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("payload", postgresql.JSONB, nullable=False, server_default="{}"),
        _created_at(),
    )
    op.create_index("ix_action_logs_player_created", "action_logs", ["player_id", "created_at"])


def downgrade() -> None:
    op.drop_table("action_logs")
    op.drop_table("gacha_rolls")
    op.drop_table("gacha_profiles")
    op.drop_table("market_listings")
    op.drop_table("seed_catalog")
    op.drop_table("inventory_pots")
    op.drop_table("inventory_seeds")
    op.drop_table("plots")
    op.drop_table("floors")
    op.drop_table("sessions")
    op.drop_table("players")
