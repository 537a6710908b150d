# app/models/item.py
from sqlalchemy import Column, Text, JSON, Float
from app.db.base import Base
from app.models.mixins import AuditMixin


class Item(AuditMixin, Base):
    __tablename__ = "items"
    __required__ = ("name", "type", "dimension")

    # {product, packaging}
    picture = Column(JSON)
    # {english, mandarin, document}
    name = Column(JSON, nullable=False)
    type = Column(Text, nullable=False)
    color = Column(Text)
    remark = Column(Text)
    # {length, width, height}
    dimension = Column(JSON, nullable=False)
    origin_area = Column(Text, default="NORTH")
    supplier = Column(JSON)
    packing_qty = Column(Float, default=0)
    packing_detail = Column(JSON, default=list)
    qty_per_packing = Column(Float, default=0)
    unit_name = Column(Text, default="pcs")
    packing_volume = Column(Float, default=0)
    volume = Column(Float, default=0)
    net_weight = Column(Float, default=0)
    gross_weight = Column(Float, default=0)
    hscode = Column(JSON)
    material_category = Column(Text, default="")
    material = Column(Text, default="")
    # [{currency, base, selling, under?}]
    price = Column(JSON, default=list)
