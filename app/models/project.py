# /app/models/project.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.enums import ProjectState


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    permalink: Mapped[Optional[str]] = mapped_column(String(128), nullable=True, unique=True)
    state: Mapped[str] = mapped_column(
        String(32), nullable=False, default=ProjectState.draft.value
    )

    headline: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    about_html: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    video_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    online_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    budget: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    city_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    content_rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    all_public_tags: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)

    # admin-managed fields
    service_fee: Mapped[float] = mapped_column(Float, nullable=False, default=0.13)
    total_installments: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    recommended: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    origin_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    audited_user_name: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    audited_user_cpf: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    audited_user_phone_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    integrations: Mapped[List["ProjectIntegration"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectIntegration.id",
    )

    __table_args__ = (Index("ix_projects_user_state", "user_id", "state"),)

    @classmethod
    def attribute_names(cls) -> List[str]:
        return list(cls.__table__.columns.keys())


class ProjectIntegration(Base):
    __tablename__ = "project_integrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    project: Mapped[Project] = relationship(back_populates="integrations")
