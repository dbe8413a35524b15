from datetime import datetime

from sqlalchemy import ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from db.models.base import Base
from enums import FlowStatus


class Flow(Base):
    __tablename__ = "flows"
    __table_args__ = (UniqueConstraint("project_id", "name"),)

    id: Mapped[int] = mapped_column(
        primary_key=True, autoincrement=True, unique=True, comment="ID"
    )

    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        index=True,
        comment="Project ID",
    )
    name: Mapped[str] = mapped_column(comment="Name")
    description: Mapped[str | None] = mapped_column(comment="Description")
    status: Mapped[FlowStatus] = mapped_column(comment="Status")
    url: Mapped[str | None] = mapped_column(comment="Deployed URL")
    revision: Mapped[int] = mapped_column(default=0, comment="Revision counter")

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), comment="Created at"
    )
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), comment="Updated at"
    )
