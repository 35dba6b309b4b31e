"""products table."""

from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, Identity, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from shopcatalog.core.database import Base, TimestampMixin

PRODUCT_STATUSES = ("active", "inactive")


class Product(TimestampMixin, Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    short_description: Mapped[Optional[str]] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, server_default=text("'active'")
    )

    __table_args__ = (
        CheckConstraint(
            "status IN (" + ", ".join(f"'{s}'" for s in PRODUCT_STATUSES) + ")", name="status"
        ),
    )
