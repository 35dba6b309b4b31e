"""categories table — two-level hierarchy (depth 0 root, depth 1 child)."""

from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Identity, SmallInteger, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from shopcatalog.core.database import Base, TimestampMixin


class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    depth: Mapped[int] = mapped_column(SmallInteger, nullable=False, server_default=text("0"))
    parent_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("categories.id", ondelete="RESTRICT"), index=True
    )

    __table_args__ = (
        CheckConstraint(
            "(depth = 0 AND parent_id IS NULL) OR (depth = 1 AND parent_id IS NOT NULL)",
            name="depth_matches_parent",
        ),
    )
