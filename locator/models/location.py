from sqlalchemy import Column, DateTime, Float, Integer, String, Text

from locator.db.database import Base


class Location(Base):
    """One catalog entry: a center, satsang, event, online event or master event."""

    __tablename__ = "web_locations"

    location_id = Column(Integer, primary_key=True, index=True)
    location_type = Column(String(32), nullable=False, index=True)
    location_name = Column(String, nullable=False)
    location_blurb = Column(Text)
    location_tag = Column(String)
    location_url = Column(String, index=True)
    latitude = Column(Float)
    longitude = Column(Float)
    event_start_date = Column(DateTime(timezone=True))
    center_id = Column(Integer, index=True)
    primary_locale = Column(String(16))
    country = Column(String)
    conference_id = Column(String)

    def __init__(
        self,
        location_id,
        location_type,
        location_name,
        latitude=None,
        longitude=None,
        location_blurb=None,
        location_tag=None,
        location_url=None,
        event_start_date=None,
        center_id=None,
        primary_locale=None,
        country=None,
        conference_id=None,
    ):
        self.location_id = location_id
        self.location_type = location_type
        self.location_name = location_name
        self.latitude = latitude
        self.longitude = longitude
        self.location_blurb = location_blurb
        self.location_tag = location_tag
        self.location_url = location_url
        self.event_start_date = event_start_date
        self.center_id = center_id
        self.primary_locale = primary_locale
        self.country = country
        self.conference_id = conference_id
