from sqlalchemy import Column, String, DateTime, ForeignKey, Enum, Index, UniqueConstraint, func, text
from sqlalchemy.orm import relationship
import enum
from .base import Base


class InterestStatus(str, enum.Enum):
    INTEREST_EXPRESSED = "interest_expressed"  # legacy rows only
    AWAITING_CLIENT_CONFLICT_CHECK = "awaiting_client_conflict_check"
    AWAITING_ATTORNEY_CONFLICT_CHECK = "awaiting_attorney_conflict_check"
    CONFLICT_CHECK_COMPLETED = "conflict_check_completed"
    TERMS_SENT = "terms_sent"
    RETAINED = "retained"
    NO_LONGER_INTERESTED = "no_longer_interested"


class CaseInterest(Base):
    __tablename__ = "case_interests"
    __table_args__ = (
        UniqueConstraint("attorney_id", "case_id", name="uq_case_interests_attorney_case"),
        # At most one retaining attorney per case.
        Index(
            "uq_case_interests_retained_case",
            "case_id",
            unique=True,
            postgresql_where=text("status = 'retained'"),
            sqlite_where=text("status = 'retained'"),
        ),
    )

    id = Column(String, primary_key=True)
    attorney_id = Column(String, nullable=False, index=True)
    case_id = Column(String, ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        Enum(
            InterestStatus,
            name="interest_status",
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        index=True,
    )
    interest_expressed_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    case = relationship("Case", back_populates="interests")
