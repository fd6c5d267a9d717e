# servicedesk/asset/models.py
import enum

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from servicedesk.core.database import Base


class AssetStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    ASSIGNED = "ASSIGNED"
    UNDER_MAINTENANCE = "UNDER_MAINTENANCE"
    RETIRED = "RETIRED"


class Asset(Base):
    __tablename__ = "assets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    type = Column(String(100), nullable=False, index=True)
    serial_number = Column(String(100), unique=True, nullable=True)
    status = Column(
        Enum(AssetStatus, native_enum=False, length=20),
        default=AssetStatus.AVAILABLE,
        nullable=False,
        index=True,
    )
    assigned_user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    purchase_date = Column(Date, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)

    assigned_user = relationship("User", back_populates="assets")
