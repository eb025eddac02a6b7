from datetime import datetime
from sqlalchemy import ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.api.v1.base_model import Base


class Incident(Base):
    camera_iid: Mapped[int] = mapped_column(ForeignKey("cameras.iid"))
    type: Mapped[str] = mapped_column(String(50))
    ts_start: Mapped[datetime]
    ts_end: Mapped[datetime]
    thumbnail_url: Mapped[str] = mapped_column(String(512), default="")
    resolved: Mapped[bool] = mapped_column(default=False)
    severity: Mapped[str] = mapped_column(String(20), default="LOW")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        default=datetime.utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    camera: Mapped["Camera"] = relationship(back_populates="incidents", lazy="joined")
