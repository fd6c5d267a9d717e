# servicedesk/license/models.py
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from servicedesk.core.database import Base


class SoftwareLicense(Base):
    __tablename__ = "software_licenses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    vendor = Column(String(100), nullable=False)
    license_key = Column(String(255), nullable=False)
    expiry_date = Column(Date, nullable=True)
    assigned_user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    assigned_user = relationship("User", back_populates="software_licenses")
