from sqlalchemy import Column, String, Text, JSON, Boolean, Date
from .base import BaseModel

class Organization(BaseModel):
    """Charity profile shown in the directory"""
    __tablename__ = "organizations"

    nickname = Column(String(100), index=True, nullable=False)  # URL slug
    image = Column(Text, nullable=False, default="")
    title = Column(Text, nullable=False)
    mission = Column(Text, nullable=False, default="")
    tags = Column(JSON, nullable=False, default=list)
    verified = Column(Boolean, nullable=False, default=False)
    premium = Column(Boolean, nullable=False, default=False)
    bg_gradient = Column(String(100))
    bitcoin_address = Column(String(100))
    location = Column(String(100))
    full_context = Column(Text)
    website = Column(Text)
    email = Column(Text)
    origin_date = Column(Date)
    registration_number = Column(String(100))
    president = Column(Text)
    founder = Column(Text)
    banner = Column(Text)
    custom_message = Column(Text)
