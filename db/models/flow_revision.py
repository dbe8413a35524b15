from datetime import datetime
from typing import Any

from sqlalchemy import JSON, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from db.models.base import Base


class FlowRevision(Base):
    __tablename__ = "flow_revisions"

    id: Mapped[int] = mapped_column(
        primary_key=True, autoincrement=True, unique=True, comment="ID"
    )

    revision_id: Mapped[str] = mapped_column(
        unique=True, index=True, comment="Revision UUID"
    )
    flow_id: Mapped[int] = mapped_column(
        ForeignKey("flows.id", ondelete="CASCADE"),
        index=True,
        comment="Flow ID",
    )
    number: Mapped[int] = mapped_column(comment="Revision number")
    snapshot: Mapped[dict[str, Any]] = mapped_column(
        JSON, comment="Node graph snapshot"
    )
    tool_description: Mapped[str | None] = mapped_column(comment="Tool description")
    is_active: Mapped[bool] = mapped_column(
        default=True, comment="Receives run traffic"
    )

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), comment="Created at"
    )
