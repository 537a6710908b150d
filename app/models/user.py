# app/models/user.py
from sqlalchemy import Column, Text, DateTime
from app.db.base import Base
from app.models.enums import DEFAULT_ROLE
from app.models.mixins import AuditMixin


class User(AuditMixin, Base):
    __tablename__ = "users"
    __hidden__ = ("password", "otp", "otp_expired")
    __managed__ = AuditMixin.__managed__ + ("otp", "otp_expired")
    __required__ = ("display_name", "email")

    role = Column(Text, nullable=False, default=DEFAULT_ROLE)
    display_name = Column(Text, nullable=False)
    email = Column(Text, unique=True, nullable=False, index=True)
    password = Column(Text, nullable=True)
    image_url = Column(Text)
    otp = Column(Text, nullable=True, index=True)
    otp_expired = Column(DateTime(timezone=True), nullable=True)
