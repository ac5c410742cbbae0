from .base import Base, TimestampMixin
from .case import Case, Client
from .attorney import Attorney
from .interest import CaseInterest, InterestStatus

__all__ = [
    "Base",
    "TimestampMixin",
    "Case",
    "Client",
    "Attorney",
    "CaseInterest",
    "InterestStatus",
]
