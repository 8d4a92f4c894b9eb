from __future__ import annotations
import uuid
from sqlalchemy.orm import declarative_base, relationship, Mapped, mapped_column
from sqlalchemy import String, Boolean, ForeignKey, JSON, DateTime, text
from typing import Optional, Dict, Any

Base = declarative_base()


def new_id() -> str:
    return str(uuid.uuid4())


class Organization(Base):
    __tablename__ = 'organizations'
    TYPE_INTERNAL = 'INTERNAL'
    TYPE_SUPPLIER = 'SUPPLIER'
    TYPE_CUSTOMER = 'CUSTOMER'
    TYPE_SERVICE_PARTNER = 'SERVICE_PARTNER'
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    # 3-letter company code used in passport codes
    code: Mapped[str] = mapped_column(String(8), unique=True, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default=TYPE_SUPPLIER)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    users = relationship('User', back_populates='organization')
    updated_at: Mapped[str] = mapped_column(DateTime(timezone=True), server_default=text('CURRENT_TIMESTAMP'), server_onupdate=text('CURRENT_TIMESTAMP'))


class User(Base):
    __tablename__ = 'users'
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default='CUSTOMER', index=True)
    organization_id: Mapped[Optional[str]] = mapped_column(ForeignKey('organizations.id'), nullable=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # {"dataScope": "OWN", "productLines": ["PF"], "departments": [...], "canApprove": false}
    scope_config: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    organization = relationship('Organization', back_populates='users')
    updated_at: Mapped[str] = mapped_column(DateTime(timezone=True), server_default=text('CURRENT_TIMESTAMP'), server_onupdate=text('CURRENT_TIMESTAMP'))
