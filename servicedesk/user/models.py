# servicedesk/user/models.py
import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, func
from sqlalchemy.orm import relationship

from servicedesk.core.database import Base


class UserRole(str, enum.Enum):
    END_USER = "END_USER"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(Enum(UserRole, native_enum=False, length=20), default=UserRole.END_USER, nullable=False)
    # only users created through the API have one; the demo accounts log in from the credential table
    password_hash = Column(String(128), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)

    tickets = relationship("Ticket", back_populates="user", foreign_keys="Ticket.user_id")
    assigned_tickets = relationship("Ticket", back_populates="assigned_user", foreign_keys="Ticket.assigned_to")
    assets = relationship("Asset", back_populates="assigned_user")
    software_licenses = relationship("SoftwareLicense", back_populates="assigned_user")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
