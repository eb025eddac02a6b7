from datetime import datetime
from sqlalchemy import String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.api.v1.base_model import Base


class Camera(Base):
    name: Mapped[str] = mapped_column(String(100))
    location: Mapped[str] = mapped_column(String(255), default="")
    status: Mapped[str] = mapped_column(String(20), default="ONLINE")
    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        default=datetime.utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    incidents: Mapped[list["Incident"]] = relationship(
        back_populates="camera",
        cascade="all, delete-orphan",
    )
