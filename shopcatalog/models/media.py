"""media table."""

from typing import Optional

from sqlalchemy import BigInteger, Boolean, CheckConstraint, ForeignKey, Identity, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from shopcatalog.core.database import Base, TimestampMixin

MEDIA_TYPES = ("image", "video")


class Media(TimestampMixin, Base):
    __tablename__ = "media"

    id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    product_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    variant_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("variants.id", ondelete="SET NULL"), index=True
    )
    media_type: Mapped[str] = mapped_column(String(50), nullable=False)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    alt: Mapped[Optional[str]] = mapped_column(String(255))
    position: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))

    __table_args__ = (
        CheckConstraint(
            "media_type IN (" + ", ".join(f"'{t}'" for t in MEDIA_TYPES) + ")",
            name="media_type",
        ),
        # at most one primary media per product
        Index(
            "uq_media_primary_per_product",
            "product_id",
            unique=True,
            postgresql_where="is_primary = TRUE",
        ),
    )
