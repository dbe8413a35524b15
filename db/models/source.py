from datetime import datetime

from sqlalchemy import ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from db.models.base import Base
from enums import FileSource, PartitionMethod, SourceStatus


class Source(Base):
    __tablename__ = "sources"
    __table_args__ = (UniqueConstraint("project_id", "file_name"),)

    id: Mapped[int] = mapped_column(
        primary_key=True, autoincrement=True, unique=True, comment="ID"
    )

    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        index=True,
        comment="Project ID",
    )
    file_name: Mapped[str] = mapped_column(comment="File name")
    file_type: Mapped[str] = mapped_column(comment="File type")
    file_source: Mapped[FileSource] = mapped_column(comment="File source")
    file_size: Mapped[int] = mapped_column(default=0, comment="File size in bytes")
    url: Mapped[str | None] = mapped_column(comment="Imported URL")
    partition_method: Mapped[PartitionMethod] = mapped_column(
        comment="Partition method"
    )
    status: Mapped[SourceStatus] = mapped_column(comment="Status")
    message: Mapped[str | None] = mapped_column(comment="Status message")
    version: Mapped[int] = mapped_column(default=1, comment="Processing version")

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), comment="Created at"
    )
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), comment="Updated at"
    )
