from sqlalchemy import Column, String, Text, Boolean, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Client(Base, TimestampMixin):
    __tablename__ = "clients"

    id = Column(String, primary_key=True)
    first_name = Column(String)
    last_name = Column(String)
    zip_code = Column(String)

    cases = relationship("Case", back_populates="client")


class Case(Base, TimestampMixin):
    __tablename__ = "cases"

    id = Column(String, primary_key=True)
    legal_category = Column(String, nullable=False, index=True)
    county = Column(String, index=True)
    zip = Column(String, index=True)
    ai_generated_heading = Column(String)
    ai_generated_summary = Column(Text)
    questionnaire_responses = Column(JSON().with_variant(JSONB(), "postgresql"))
    client_case_summary = Column(Text)
    enable_conflict_checks = Column(Boolean, default=False, nullable=False)
    client_id = Column(String, ForeignKey("clients.id"), index=True)

    # Relationships
    client = relationship("Client", back_populates="cases", lazy="joined")
    interests = relationship("CaseInterest", back_populates="case", cascade="all, delete-orphan")
