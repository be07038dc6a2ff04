"""
UserProfile database model
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Enum, DateTime, Boolean, ForeignKey
from casework.core.database import Base
from casework.models.enums import UserRole


class UserProfile(Base):
    """
    Application user with a role.

    Client users must be assigned to a company; every query they run is
    scoped to that company.
    """
    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    email = Column(String, nullable=False, unique=True, index=True)
    full_name = Column(String, nullable=False)
    role = Column(Enum(UserRole), nullable=False)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=True, index=True)
    phone_number = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<UserProfile(id={self.id}, email={self.email}, role={self.role.value})>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
