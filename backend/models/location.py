"""Campus location model."""

from __future__ import annotations

from sqlalchemy import Column, Float, Integer, String, Text
from sqlmodel import Field, SQLModel


class Location(SQLModel, table=True):
    """Named spot on the festival map that posts are pinned to."""

    __tablename__ = "locations"

    id: int | None = Field(default=None, sa_column=Column(Integer, primary_key=True))
    name: str = Field(sa_column=Column(String(100), nullable=False))
    latitude: float = Field(sa_column=Column(Float, nullable=False))
    longitude: float = Field(sa_column=Column(Float, nullable=False))
    description: str | None = Field(
        default=None, sa_column=Column(Text, nullable=True)
    )
