# app/models/material_category.py
from sqlalchemy import Column, Text
from app.db.base import Base
from app.models.mixins import AuditMixin


class MaterialCategory(AuditMixin, Base):
    __tablename__ = "material_categories"
    __required__ = ("name",)

    name = Column(Text, nullable=False)
    code = Column(Text)
    description = Column(Text)
