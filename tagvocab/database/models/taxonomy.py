# tagvocab/database/models/taxonomy.py
from __future__ import annotations

from typing import List, TYPE_CHECKING
from uuid import UUID as UUID_t

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tagvocab.database.core.main import Base
from tagvocab.database.core.service_object import ServiceObject

if TYPE_CHECKING:
    from .tenant import Tenant

NAME_MAX = 255
# Lowercasing can grow a string ("İ".lower() is two code points).
NAME_KEY_MAX = NAME_MAX * 2


# =======================
# Tags
# =======================
class Tag(ServiceObject, Base):
    __tablename__ = "tag"
    __table_args__ = (
        # The only concurrency control tag resolution relies on.
        UniqueConstraint("tenant_id", "name_key", name="uq_tag_tenant_name_key"),
        Index("ix_tag_tenant_taggings_count", "tenant_id", "taggings_count"),
    )

    tenant_id: Mapped[UUID_t] = mapped_column(
        ForeignKey("tenant.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX), nullable=False)
    # NameNormalizer output under the policy active at insert time
    name_key: Mapped[str] = mapped_column(String(NAME_KEY_MAX), nullable=False)
    # maintained by the tagging layer
    taggings_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    tenant: Mapped["Tenant"] = relationship(back_populates="tags")
    taggings: Mapped[List["Tagging"]] = relationship(
        back_populates="tag",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


# =======================
# Taggings (association rows; written by the tagging layer)
# =======================
class Tagging(ServiceObject, Base):
    __tablename__ = "tagging"
    __table_args__ = (
        UniqueConstraint(
            "tag_id", "taggable_type", "taggable_id", "context",
            name="uq_tagging_tag_taggable_context",
        ),
        Index("ix_tagging_taggable", "taggable_type", "taggable_id"),
        Index("ix_tagging_context", "context"),
    )

    tag_id: Mapped[UUID_t] = mapped_column(
        ForeignKey("tag.id", ondelete="CASCADE"),
        nullable=False,
    )
    tenant_id: Mapped[UUID_t] = mapped_column(
        ForeignKey("tenant.id", ondelete="CASCADE"),
        nullable=False,
    )
    taggable_type: Mapped[str] = mapped_column(String(128), nullable=False)
    taggable_id: Mapped[UUID_t] = mapped_column(Uuid(as_uuid=True), nullable=False)
    context: Mapped[str] = mapped_column(String(128), nullable=False, default="tags", server_default="tags")

    tag: Mapped["Tag"] = relationship(back_populates="taggings")
