# app/models/customer.py
from sqlalchemy import Column, Text
from app.db.base import Base
from app.models.mixins import AuditMixin


class Customer(AuditMixin, Base):
    __tablename__ = "customers"
    __required__ = ("name", "code", "phone_number", "pic", "address")

    name = Column(Text, nullable=False)
    code = Column(Text, unique=True, nullable=False)
    phone_number = Column(Text, nullable=False)
    pic = Column(Text, nullable=False)
    tax_number = Column(Text)
    address = Column(Text, nullable=False)
    email = Column(Text)
    image_url = Column(Text)
