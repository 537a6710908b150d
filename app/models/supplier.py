# app/models/supplier.py
from sqlalchemy import Column, Text, JSON
from app.db.base import Base
from app.models.mixins import AuditMixin


class Supplier(AuditMixin, Base):
    __tablename__ = "suppliers"
    __required__ = ("name", "country", "origin_area", "code", "phone_number", "pic", "address")

    name = Column(Text, nullable=False)
    country = Column(JSON, nullable=False)
    origin_area = Column(JSON, nullable=False)
    initial = Column(Text)
    code = Column(Text, unique=True, nullable=False)
    phone_number = Column(Text, nullable=False)
    alias = Column(Text)
    pic = Column(Text, nullable=False)
    tax_number = Column(Text)
    address = Column(Text, nullable=False)
    email = Column(Text)
    image_url = Column(Text)
    # [{name, accountNumber, accountName, swiftCode?}]
    bank_account = Column(JSON, default=list)
