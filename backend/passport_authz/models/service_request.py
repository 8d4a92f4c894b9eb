from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, DateTime, Text, text
from typing import Optional
from .authz import Base, new_id


class ServiceRequest(Base):
    __tablename__ = 'service_requests'
    STATUS_OPEN = 'OPEN'
    STATUS_ASSIGNED = 'ASSIGNED'
    STATUS_CLOSED = 'CLOSED'
    ALL_STATUSES = (STATUS_OPEN, STATUS_ASSIGNED, STATUS_CLOSED)
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    organization_id: Mapped[Optional[str]] = mapped_column(ForeignKey('organizations.id'), nullable=True, index=True)
    product_line: Mapped[Optional[str]] = mapped_column(String(8), nullable=True, index=True)
    department_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=STATUS_OPEN, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by_id: Mapped[Optional[str]] = mapped_column(ForeignKey('users.id'), nullable=True, index=True)
    updated_at: Mapped[str] = mapped_column(DateTime(timezone=True), server_default=text('CURRENT_TIMESTAMP'), server_onupdate=text('CURRENT_TIMESTAMP'))
