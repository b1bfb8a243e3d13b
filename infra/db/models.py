# infra/db/models.py
from __future__ import annotations
from datetime import date
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Date,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infra.db.base import Base
from core.domain.enums import ActivityKind


class ScheduleORM(Base):
    __tablename__ = "schedules"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    root_id: Mapped[str] = mapped_column(String, nullable=False)
    constraint_start: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    constraint_finish: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    activities: Mapped[List["ActivityORM"]] = relationship(
        back_populates="schedule",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ActivityORM.position",
    )


class ActivityORM(Base):
    __tablename__ = "schedule_activities"
    __table_args__ = (UniqueConstraint("schedule_id", "activity_id", name="ux_schedule_activity"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    schedule_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("schedules.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    activity_id: Mapped[str] = mapped_column(String, nullable=False)
    kind: Mapped[ActivityKind] = mapped_column(SAEnum(ActivityKind), nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    progress: Mapped[int] = mapped_column(Integer, default=0)
    cost: Mapped[float] = mapped_column(Float, default=0.0)
    resource: Mapped[str] = mapped_column(String, default="")
    parent_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    depth: Mapped[int] = mapped_column(Integer, default=0)
    dependencies: Mapped[list] = mapped_column(JSON, default=list)
    adjustments: Mapped[list] = mapped_column(JSON, default=list)

    schedule: Mapped[ScheduleORM] = relationship(back_populates="activities")
Index("idx_schedule_activities_schedule_id", ActivityORM.schedule_id)
