"""
SQLAlchemy ORM models.

These are purely infrastructure concerns. Domain entities are mapped to/from
these models inside the repository implementations.
"""
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from sneakers.infrastructure.database.connection import Base


class OwnerModel(Base):
    __tablename__ = "owners"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )


class SneakerModel(Base):
    __tablename__ = "sneakers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("owners.id"), nullable=False, index=True
    )

    # Listing data
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(String(1024), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    image: Mapped[str] = mapped_column(String(1024), nullable=False)

    # Geocoded location
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class OwnerSneakerModel(Base):
    """Membership set: one row per sneaker id an owner holds."""

    __tablename__ = "owner_sneakers"

    owner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("owners.id"), primary_key=True
    )
    sneaker_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("sneakers.id"), primary_key=True, unique=True
    )
