from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, DateTime, text
from typing import Optional
from .authz import Base, new_id
from passport_authz.constants.enums import DeviceStatus


class DevicePassport(Base):
    """Device passport record.

    Passports have no organization column of their own; ownership is expressed
    through the supplier and customer organizations.
    """
    __tablename__ = 'device_passports'
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    passport_code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    product_line: Mapped[str] = mapped_column(String(8), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=DeviceStatus.CREATED.value, index=True)
    supplier_id: Mapped[Optional[str]] = mapped_column(ForeignKey('organizations.id'), nullable=True, index=True)
    customer_id: Mapped[Optional[str]] = mapped_column(ForeignKey('organizations.id'), nullable=True, index=True)
    department_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    created_by_id: Mapped[Optional[str]] = mapped_column(ForeignKey('users.id'), nullable=True, index=True)
    updated_at: Mapped[str] = mapped_column(DateTime(timezone=True), server_default=text('CURRENT_TIMESTAMP'), server_onupdate=text('CURRENT_TIMESTAMP'))
