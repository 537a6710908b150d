# app/models/hscode.py
from sqlalchemy import Column, Text, Numeric
from app.db.base import Base
from app.models.mixins import AuditMixin


class Hscode(AuditMixin, Base):
    __tablename__ = "hscodes"
    __required__ = ("code", "name")

    code = Column(Text, unique=True, nullable=False)
    name = Column(Text, nullable=False)
    description = Column(Text)
    # duty and permit flags, percentages where applicable
    bm = Column(Numeric(10, 2, asdecimal=False), default=0, nullable=False)
    ppn = Column(Numeric(10, 2, asdecimal=False), default=11, nullable=False)
    pph = Column(Numeric(10, 2, asdecimal=False), default=11, nullable=False)
    lartas = Column(Numeric(10, 2, asdecimal=False), default=0, nullable=False)
    spi_permit = Column(Numeric(10, 2, asdecimal=False), default=0, nullable=False)
    sni = Column(Numeric(10, 2, asdecimal=False), default=0, nullable=False)
