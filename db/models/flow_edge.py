from datetime import datetime

from sqlalchemy import ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from db.models.base import Base


class FlowEdge(Base):
    __tablename__ = "flow_edges"
    __table_args__ = (UniqueConstraint("flow_id", "source_node_id", "target_node_id"),)

    id: Mapped[int] = mapped_column(
        primary_key=True, autoincrement=True, unique=True, comment="ID"
    )

    flow_id: Mapped[int] = mapped_column(
        ForeignKey("flows.id", ondelete="CASCADE"),
        index=True,
        comment="Flow ID",
    )
    source_node_id: Mapped[str] = mapped_column(comment="Upstream node ID")
    target_node_id: Mapped[str] = mapped_column(comment="Downstream node ID")

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), comment="Created at"
    )
