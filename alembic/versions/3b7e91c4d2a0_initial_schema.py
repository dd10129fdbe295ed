"""initial schema

Revision ID: 3b7e91c4d2a0
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b7e91c4d2a0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "identity_user",
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=True),
        sa.Column("password_hash", sa.String(length=200), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_base_columns(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_identity_user")),
    )
    op.create_index(op.f("ix_identity_user_email"), "identity_user", ["email"], unique=True)
    op.create_index(op.f("ix_identity_user_created_at"), "identity_user", ["created_at"])

    op.create_table(
        "identity_profile",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=True),
        sa.Column("company_name", sa.String(length=200), nullable=True),
        sa.Column("website", sa.String(length=500), nullable=True),
        sa.Column("subscription_plan_id", sa.String(length=100), nullable=True),
        sa.Column(
            "subscription_status",
            sa.Enum(
                "ACTIVE",
                "CANCELED",
                "PAST_DUE",
                "TRIALING",
                name="subscriptionstatus",
                native_enum=False,
            ),
            nullable=True,
        ),
        sa.Column("subscription_end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("credits_remaining", sa.Integer(), nullable=False),
        sa.Column("credits_reset_date", sa.DateTime(timezone=True), nullable=True),
        *_base_columns(),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["identity_user.id"],
            name=op.f("fk_identity_profile_user_id_identity_user"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_identity_profile")),
    )
    op.create_index(
        op.f("ix_identity_profile_user_id"), "identity_profile", ["user_id"], unique=True
    )
    op.create_index(op.f("ix_identity_profile_created_at"), "identity_profile", ["created_at"])

    op.create_table(
        "niches_niche",
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=16), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_base_columns(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_niches_niche")),
        sa.UniqueConstraint("slug", name=op.f("uq_niches_niche_slug")),
    )
    op.create_index(op.f("ix_niches_niche_name"), "niches_niche", ["name"], unique=True)
    op.create_index(op.f("ix_niches_niche_created_at"), "niches_niche", ["created_at"])

    op.create_table(
        "captions_caption",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("niche_id", sa.Uuid(), nullable=False),
        sa.Column("prompt", sa.Text(), nullable=False),
        sa.Column("generated_caption", sa.Text(), nullable=False),
        sa.Column("is_favorite", sa.Boolean(), nullable=False),
        sa.Column("usage_count", sa.Integer(), nullable=False),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        *_base_columns(),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["identity_user.id"],
            name=op.f("fk_captions_caption_user_id_identity_user"),
        ),
        sa.ForeignKeyConstraint(
            ["niche_id"],
            ["niches_niche.id"],
            name=op.f("fk_captions_caption_niche_id_niches_niche"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_captions_caption")),
    )
    op.create_index(op.f("ix_captions_caption_user_id"), "captions_caption", ["user_id"])
    op.create_index(op.f("ix_captions_caption_niche_id"), "captions_caption", ["niche_id"])
    op.create_index(op.f("ix_captions_caption_created_at"), "captions_caption", ["created_at"])

    op.create_table(
        "usage_log",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("action_type", sa.String(length=50), nullable=False),
        sa.Column("credits_used", sa.Integer(), nullable=False),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["identity_user.id"],
            name=op.f("fk_usage_log_user_id_identity_user"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_usage_log")),
    )
    op.create_index(
        "ix_usage_log_user_action_created",
        "usage_log",
        ["user_id", "action_type", "created_at"],
    )

    op.create_table(
        "customization_ai_configuration",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("purpose", sa.String(length=500), nullable=False),
        sa.Column("tone", sa.String(length=200), nullable=False),
        sa.Column("preferences", sa.Text(), nullable=False),
        sa.Column("additional_traits", sa.Text(), nullable=True),
        sa.Column("niche_vocabulary", sa.JSON(), nullable=False),
        sa.Column("sample_posts", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_base_columns(),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["identity_user.id"],
            name=op.f("fk_customization_ai_configuration_user_id_identity_user"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_customization_ai_configuration")),
    )
    op.create_index(
        op.f("ix_customization_ai_configuration_user_id"),
        "customization_ai_configuration",
        ["user_id"],
    )
    op.create_index(
        op.f("ix_customization_ai_configuration_is_active"),
        "customization_ai_configuration",
        ["is_active"],
    )
    op.create_index(
        op.f("ix_customization_ai_configuration_created_at"),
        "customization_ai_configuration",
        ["created_at"],
    )

    op.create_table(
        "scheduling_scheduled_post",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("caption_id", sa.Uuid(), nullable=False),
        sa.Column("scheduled_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "platform",
            sa.Enum(
                "INSTAGRAM", "FACEBOOK", "TWITTER", "LINKEDIN", name="platform", native_enum=False
            ),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum(
                "SCHEDULED",
                "PUBLISHED",
                "FAILED",
                "CANCELLED",
                name="poststatus",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column(
            "content_type",
            sa.Enum(
                "PROMOTIONAL",
                "EDUCATIONAL",
                "ENTERTAINING",
                "ENGAGEMENT",
                name="contenttype",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("retry_count", sa.Integer(), nullable=False),
        sa.Column("next_retry_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("metadata_json", sa.JSON(), nullable=True),
        *_base_columns(),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["identity_user.id"],
            name=op.f("fk_scheduling_scheduled_post_user_id_identity_user"),
        ),
        sa.ForeignKeyConstraint(
            ["caption_id"],
            ["captions_caption.id"],
            name=op.f("fk_scheduling_scheduled_post_caption_id_captions_caption"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_scheduling_scheduled_post")),
    )
    for column in ("user_id", "caption_id", "scheduled_time", "status", "created_at"):
        op.create_index(
            op.f(f"ix_scheduling_scheduled_post_{column}"), "scheduling_scheduled_post", [column]
        )


def downgrade() -> None:
    op.drop_table("scheduling_scheduled_post")
    op.drop_table("customization_ai_configuration")
    op.drop_table("usage_log")
    op.drop_table("captions_caption")
    op.drop_table("niches_niche")
    op.drop_table("identity_profile")
    op.drop_table("identity_user")
