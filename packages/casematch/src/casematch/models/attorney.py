from sqlalchemy import Column, String, JSON
from sqlalchemy.dialects.postgresql import JSONB
from .base import Base, TimestampMixin

_JSON = JSON().with_variant(JSONB(), "postgresql")


class Attorney(Base, TimestampMixin):
    """Attorney subscription profile.

    ``id`` is the identity provider's subject claim. Profiles are written by
    the onboarding/billing services; this package only reads them.
    """

    __tablename__ = "attorneys"

    id = Column(String, primary_key=True)
    # [{"name": "Orange County", "state": "CA"}, ...]
    counties_subscribed = Column(_JSON, default=list, nullable=False)
    # {"Orange": ["92618", "92620"], "Kern": []}; an empty list covers the whole county
    zip_codes_subscribed = Column(_JSON, default=dict, nullable=False)
    areas_of_practice = Column(_JSON, default=list, nullable=False)
