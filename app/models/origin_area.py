# app/models/origin_area.py
from sqlalchemy import Column, Text, JSON
from app.db.base import Base
from app.models.mixins import AuditMixin


class OriginArea(AuditMixin, Base):
    __tablename__ = "origin_areas"
    __required__ = ("country", "name", "code")

    country = Column(JSON, nullable=False)
    name = Column(Text, nullable=False)
    code = Column(Text, nullable=False)
