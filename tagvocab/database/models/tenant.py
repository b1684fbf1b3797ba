# tagvocab/database/models/tenant.py
from __future__ import annotations

from typing import List, TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tagvocab.database.core.main import Base
from tagvocab.database.core.service_object import ServiceObject

if TYPE_CHECKING:
    from .taxonomy import Tag


class Tenant(ServiceObject, Base):
    """Owner of a tag vocabulary. Tag names are unique per tenant, never across tenants."""
    __tablename__ = "tenant"
    __table_args__ = (
        UniqueConstraint("name", name="uq_tenant_name"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    tags: Mapped[List["Tag"]] = relationship(
        back_populates="tenant",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
