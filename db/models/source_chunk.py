from datetime import datetime

from sqlalchemy import ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from db.models.base import Base


class SourceChunk(Base):
    __tablename__ = "source_chunks"

    id: Mapped[int] = mapped_column(
        primary_key=True, autoincrement=True, unique=True, comment="ID"
    )

    source_id: Mapped[int] = mapped_column(
        ForeignKey("sources.id", ondelete="CASCADE"),
        index=True,
        comment="Source ID",
    )
    position: Mapped[int] = mapped_column(comment="Position within the source")
    text: Mapped[str] = mapped_column(Text, comment="Text")
    page: Mapped[int | None] = mapped_column(comment="Page number")

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), comment="Created at"
    )
