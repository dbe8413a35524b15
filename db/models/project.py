from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Mapped, mapped_column

from db.models.base import Base


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(
        primary_key=True, autoincrement=True, unique=True, comment="ID"
    )

    name: Mapped[str] = mapped_column(comment="Name")
    api_token_hash: Mapped[str] = mapped_column(
        unique=True, index=True, comment="API token SHA-256 hash"
    )
    is_active: Mapped[bool] = mapped_column(default=True, comment="Is active")

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), comment="Created at"
    )
