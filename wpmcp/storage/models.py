# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
ORM Models — tenant table.

Tables:
  - mcp_servers: one row per onboarded WordPress site (tenant)
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, Uuid

from wpmcp.storage.database import Base


class McpServerStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ERROR = "error"


def _utcnow():
    return datetime.now(timezone.utc)


class McpServer(Base):
    __tablename__ = "mcp_servers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    wordpress_url = Column(String(767), nullable=False, unique=True)
    site_name = Column(String(255), nullable=True)
    site_description = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default=McpServerStatus.ACTIVE.value, index=True)
    post_count = Column(Integer, nullable=True)
    featured = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
    last_sync_at = Column(DateTime(timezone=True), nullable=True)
    last_error = Column(Text, nullable=True)

    def __repr__(self):
        return f"<McpServer {self.slug} {self.wordpress_url} status={self.status}>"
