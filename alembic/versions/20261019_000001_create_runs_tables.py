"""create runs and derived tables

Revision ID: 7c2e4d1a9b30
Revises: 
Create Date: 2026-10-19 10:00:00

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "7c2e4d1a9b30"
down_revision = None
branch_labels = None
depends_on = None


def _run_fk() -> sa.Column:
    return sa.Column("run_id", sa.Integer(), sa.ForeignKey("runs.id"), nullable=True)


def upgrade() -> None:
    op.create_table(
        "runs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("timestamp", sa.Text(), nullable=True),
        sa.Column("vram_usage", sa.Text(), nullable=True),
        sa.Column("info", sa.Text(), nullable=True),
        sa.Column("system_info", sa.Text(), nullable=True),
        sa.Column("model_info", sa.Text(), nullable=True),
        sa.Column("device_info", sa.Text(), nullable=True),
        sa.Column("xformers", sa.Text(), nullable=True),
        sa.Column("model_name", sa.Text(), nullable=True),
        sa.Column("user", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_table(
        "ModelMap",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("model_name", sa.Text(), nullable=True),
        sa.Column("base_model", sa.Text(), nullable=True),
    )
    op.create_table(
        "performanceResult",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _run_fk(),
        sa.Column("its", sa.Text(), nullable=True),
        sa.Column("avg_its", sa.Float(), nullable=True),
    )
    op.create_table(
        "AppDetails",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _run_fk(),
        sa.Column("app_name", sa.Text(), nullable=True),
        sa.Column("updated", sa.Text(), nullable=True),
        sa.Column("hash", sa.Text(), nullable=True),
        sa.Column("url", sa.Text(), nullable=True),
    )
    op.create_table(
        "SystemInfo",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _run_fk(),
        sa.Column("arch", sa.Text(), nullable=True),
        sa.Column("cpu", sa.Text(), nullable=True),
        sa.Column("system", sa.Text(), nullable=True),
        sa.Column("release", sa.Text(), nullable=True),
        sa.Column("python", sa.Text(), nullable=True),
    )
    op.create_table(
        "Libraries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _run_fk(),
        sa.Column("torch", sa.Text(), nullable=True),
        sa.Column("xformers", sa.Text(), nullable=True),
        sa.Column("xformers1", sa.Text(), nullable=True),
        sa.Column("diffusers", sa.Text(), nullable=True),
        sa.Column("transformers", sa.Text(), nullable=True),
    )
    op.create_table(
        "GPU",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _run_fk(),
        sa.Column("device", sa.Text(), nullable=True),
        sa.Column("driver", sa.Text(), nullable=True),
        sa.Column("gpu_chip", sa.Text(), nullable=True),
        sa.Column("brand", sa.Text(), nullable=True),
        sa.Column("isLaptop", sa.Boolean(), nullable=True),
    )
    op.create_table(
        "RunMoreDetails",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _run_fk(),
        sa.Column("timestamp", sa.Text(), nullable=True),
        sa.Column("model_name", sa.Text(), nullable=True),
        sa.Column("user", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("ModelMapId", sa.Integer(), sa.ForeignKey("ModelMap.id"), nullable=True),
    )

    op.create_index("idx_performanceResult_run_id", "performanceResult", ["run_id"], unique=False)
    op.create_index("idx_AppDetails_run_id", "AppDetails", ["run_id"], unique=False)
    op.create_index("idx_SystemInfo_run_id", "SystemInfo", ["run_id"], unique=False)
    op.create_index("idx_Libraries_run_id", "Libraries", ["run_id"], unique=False)
    op.create_index("idx_GPU_run_id", "GPU", ["run_id"], unique=False)
    op.create_index("idx_GPU_device", "GPU", ["device"], unique=False)
    op.create_index("idx_RunMoreDetails_run_id", "RunMoreDetails", ["run_id"], unique=False)
    op.create_index("idx_RunMoreDetails_model_name", "RunMoreDetails", ["model_name"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_RunMoreDetails_model_name", table_name="RunMoreDetails")
    op.drop_index("idx_RunMoreDetails_run_id", table_name="RunMoreDetails")
    op.drop_index("idx_GPU_device", table_name="GPU")
    op.drop_index("idx_GPU_run_id", table_name="GPU")
    op.drop_index("idx_Libraries_run_id", table_name="Libraries")
    op.drop_index("idx_SystemInfo_run_id", table_name="SystemInfo")
    op.drop_index("idx_AppDetails_run_id", table_name="AppDetails")
    op.drop_index("idx_performanceResult_run_id", table_name="performanceResult")
    for table in ("RunMoreDetails", "GPU", "Libraries", "SystemInfo", "AppDetails", "performanceResult", "ModelMap", "runs"):
        op.drop_table(table)
