# app/models/currency.py
from sqlalchemy import Column, Text
from app.db.base import Base
from app.models.mixins import AuditMixin


class Currency(AuditMixin, Base):
    __tablename__ = "currencies"
    __required__ = ("name", "initial", "code")

    name = Column(Text, nullable=False)
    initial = Column(Text, nullable=False)
    code = Column(Text, nullable=False)
