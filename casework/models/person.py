"""
Person and Passport database models
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Date, DateTime, Boolean, ForeignKey, Text
from sqlalchemy.orm import relationship
from casework.core.database import Base


class Person(Base):
    """
    Foreign worker (or contact person) whose data feeds the info
    requirements of a legal framework.
    """
    __tablename__ = "people"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, nullable=True, index=True)
    cpf = Column(String, nullable=True, index=True)
    birth_date = Column(Date, nullable=True)
    birth_city = Column(String, nullable=True)
    nationality = Column(String, nullable=True)
    marital_status = Column(String, nullable=True)
    profession = Column(String, nullable=True)
    mother_name = Column(String, nullable=True)
    father_name = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    address = Column(String, nullable=True)
    current_city = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    passports = relationship("Passport", back_populates="person", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Person(id={self.id}, full_name={self.full_name})>"


class Passport(Base):
    """Passport held by a person; an individual process points at one of them."""
    __tablename__ = "passports"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    person_id = Column(String(36), ForeignKey("people.id", ondelete="CASCADE"), nullable=False, index=True)
    passport_number = Column(String, nullable=False, index=True)
    issuing_country = Column(String, nullable=True)
    issue_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    person = relationship("Person", back_populates="passports")

    def __repr__(self):
        return f"<Passport(id={self.id}, passport_number={self.passport_number})>"
