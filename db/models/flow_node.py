from datetime import datetime
from typing import Any

from sqlalchemy import JSON, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from db.models.base import Base
from enums import NodeType


class FlowNode(Base):
    __tablename__ = "flow_nodes"
    __table_args__ = (UniqueConstraint("flow_id", "node_id"),)

    id: Mapped[int] = mapped_column(
        primary_key=True, autoincrement=True, unique=True, comment="ID"
    )

    flow_id: Mapped[int] = mapped_column(
        ForeignKey("flows.id", ondelete="CASCADE"),
        index=True,
        comment="Flow ID",
    )
    node_id: Mapped[str] = mapped_column(comment="Node ID within the flow")
    type: Mapped[NodeType] = mapped_column(comment="Type")
    name: Mapped[str] = mapped_column(comment="Name")
    position: Mapped[dict[str, Any]] = mapped_column(
        JSON, default=dict, comment="Canvas position"
    )
    style: Mapped[dict[str, Any]] = mapped_column(
        JSON, default=dict, comment="Canvas style"
    )
    config: Mapped[dict[str, Any]] = mapped_column(
        JSON, default=dict, comment="Type specific config"
    )
    result: Mapped[dict[str, Any] | None] = mapped_column(
        JSON, comment="Last processing result"
    )

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), comment="Created at"
    )
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), comment="Updated at"
    )
