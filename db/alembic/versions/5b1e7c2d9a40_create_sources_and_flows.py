"""Create projects, sources and flow graph tables

Revision ID: 5b1e7c2d9a40
Revises:
Create Date: 2026-10-12 10:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5b1e7c2d9a40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = False) -> list[sa.Column]:
    columns = [
        sa.Column(
            "created_at",
            sa.DateTime(),
            server_default=sa.text("now()"),
            nullable=False,
            comment="Created at",
        )
    ]
    if updated:
        columns.append(
            sa.Column(
                "updated_at",
                sa.DateTime(),
                server_default=sa.text("now()"),
                nullable=False,
                comment="Updated at",
            )
        )
    return columns


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="ID"),
        sa.Column("name", sa.String(), nullable=False, comment="Name"),
        sa.Column(
            "api_token_hash",
            sa.String(),
            nullable=False,
            comment="API token SHA-256 hash",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, comment="Is active"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
    )
    op.create_index(
        "ix_projects_api_token_hash", "projects", ["api_token_hash"], unique=True
    )

    op.create_table(
        "sources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="ID"),
        sa.Column("project_id", sa.Integer(), nullable=False, comment="Project ID"),
        sa.Column("file_name", sa.String(), nullable=False, comment="File name"),
        sa.Column("file_type", sa.String(), nullable=False, comment="File type"),
        sa.Column(
            "file_source",
            sa.Enum("LOCAL", "URL", "GITHUB", "YOUTUBE", name="filesource"),
            nullable=False,
            comment="File source",
        ),
        sa.Column(
            "file_size", sa.Integer(), nullable=False, comment="File size in bytes"
        ),
        sa.Column("url", sa.String(), nullable=True, comment="Imported URL"),
        sa.Column(
            "partition_method",
            sa.Enum(
                "BASIC",
                "OCR",
                "YOLOX",
                "ADVANCED",
                "GRAPHORLM",
                name="partitionmethod",
            ),
            nullable=False,
            comment="Partition method",
        ),
        sa.Column(
            "status",
            sa.Enum(
                "NEW",
                "PROCESSING",
                "COMPLETED",
                "FAILED",
                "UNKNOWN",
                name="sourcestatus",
            ),
            nullable=False,
            comment="Status",
        ),
        sa.Column("message", sa.String(), nullable=True, comment="Status message"),
        sa.Column(
            "version", sa.Integer(), nullable=False, comment="Processing version"
        ),
        *_timestamps(updated=True),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
        sa.UniqueConstraint("project_id", "file_name"),
    )
    op.create_index("ix_sources_project_id", "sources", ["project_id"])

    op.create_table(
        "source_files",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="ID"),
        sa.Column("source_id", sa.Integer(), nullable=False, comment="Source ID"),
        sa.Column(
            "content_type", sa.String(), nullable=True, comment="Uploaded MIME type"
        ),
        sa.Column("content", sa.LargeBinary(), nullable=False, comment="Content"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["source_id"], ["sources.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
        sa.UniqueConstraint("source_id"),
    )

    op.create_table(
        "source_chunks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="ID"),
        sa.Column("source_id", sa.Integer(), nullable=False, comment="Source ID"),
        sa.Column(
            "position",
            sa.Integer(),
            nullable=False,
            comment="Position within the source",
        ),
        sa.Column("text", sa.Text(), nullable=False, comment="Text"),
        sa.Column("page", sa.Integer(), nullable=True, comment="Page number"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["source_id"], ["sources.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
    )
    op.create_index("ix_source_chunks_source_id", "source_chunks", ["source_id"])

    op.create_table(
        "flows",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="ID"),
        sa.Column("project_id", sa.Integer(), nullable=False, comment="Project ID"),
        sa.Column("name", sa.String(), nullable=False, comment="Name"),
        sa.Column("description", sa.String(), nullable=True, comment="Description"),
        sa.Column(
            "status",
            sa.Enum("NEW", "NOT_DEPLOYED", "DEPLOYED", "FAILED", name="flowstatus"),
            nullable=False,
            comment="Status",
        ),
        sa.Column("url", sa.String(), nullable=True, comment="Deployed URL"),
        sa.Column(
            "revision", sa.Integer(), nullable=False, comment="Revision counter"
        ),
        *_timestamps(updated=True),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
        sa.UniqueConstraint("project_id", "name"),
    )
    op.create_index("ix_flows_project_id", "flows", ["project_id"])

    op.create_table(
        "flow_nodes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="ID"),
        sa.Column("flow_id", sa.Integer(), nullable=False, comment="Flow ID"),
        sa.Column(
            "node_id", sa.String(), nullable=False, comment="Node ID within the flow"
        ),
        sa.Column(
            "type",
            sa.Enum(
                "DATASET",
                "CHUNKING",
                "RETRIEVAL",
                "RERANKING",
                "LLM",
                "RESPONSE",
                name="nodetype",
            ),
            nullable=False,
            comment="Type",
        ),
        sa.Column("name", sa.String(), nullable=False, comment="Name"),
        sa.Column("position", sa.JSON(), nullable=False, comment="Canvas position"),
        sa.Column("style", sa.JSON(), nullable=False, comment="Canvas style"),
        sa.Column("config", sa.JSON(), nullable=False, comment="Type specific config"),
        sa.Column(
            "result", sa.JSON(), nullable=True, comment="Last processing result"
        ),
        *_timestamps(updated=True),
        sa.ForeignKeyConstraint(["flow_id"], ["flows.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
        sa.UniqueConstraint("flow_id", "node_id"),
    )
    op.create_index("ix_flow_nodes_flow_id", "flow_nodes", ["flow_id"])

    op.create_table(
        "flow_edges",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="ID"),
        sa.Column("flow_id", sa.Integer(), nullable=False, comment="Flow ID"),
        sa.Column(
            "source_node_id", sa.String(), nullable=False, comment="Upstream node ID"
        ),
        sa.Column(
            "target_node_id",
            sa.String(),
            nullable=False,
            comment="Downstream node ID",
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["flow_id"], ["flows.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
        sa.UniqueConstraint("flow_id", "source_node_id", "target_node_id"),
    )
    op.create_index("ix_flow_edges_flow_id", "flow_edges", ["flow_id"])

    op.create_table(
        "flow_revisions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="ID"),
        sa.Column(
            "revision_id", sa.String(), nullable=False, comment="Revision UUID"
        ),
        sa.Column("flow_id", sa.Integer(), nullable=False, comment="Flow ID"),
        sa.Column("number", sa.Integer(), nullable=False, comment="Revision number"),
        sa.Column(
            "snapshot", sa.JSON(), nullable=False, comment="Node graph snapshot"
        ),
        sa.Column(
            "tool_description",
            sa.String(),
            nullable=True,
            comment="Tool description",
        ),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, comment="Receives run traffic"
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["flow_id"], ["flows.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
    )
    op.create_index(
        "ix_flow_revisions_revision_id", "flow_revisions", ["revision_id"], unique=True
    )
    op.create_index("ix_flow_revisions_flow_id", "flow_revisions", ["flow_id"])


def downgrade() -> None:
    op.drop_table("flow_revisions")
    op.drop_table("flow_edges")
    op.drop_table("flow_nodes")
    op.drop_table("flows")
    op.drop_table("source_chunks")
    op.drop_table("source_files")
    op.drop_table("sources")
    op.drop_table("projects")
    for enum_name in (
        "nodetype",
        "flowstatus",
        "sourcestatus",
        "partitionmethod",
        "filesource",
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
