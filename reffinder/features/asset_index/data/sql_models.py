import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Uuid, UniqueConstraint
from reffinder.core.database.base import Base

def utc_now():
    return datetime.now(timezone.utc)

class AssetModel(Base):
    __tablename__ = "assets"
    __table_args__ = (
        UniqueConstraint("project_root", "guid", name="uq_assets_project_guid"),
        UniqueConstraint("project_root", "path", name="uq_assets_project_path"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Absolute project root, so one database can cache several projects
    project_root = Column(String, nullable=False, index=True)

    guid = Column(String(32), nullable=False, index=True)
    path = Column(String, nullable=False)
    indexed_at = Column(DateTime(timezone=True), default=utc_now)
