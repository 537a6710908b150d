# app/models/mixins.py
import re
import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, Integer, JSON, Uuid, inspect

from app.models.enums import DeletedStatus

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class AuditMixin:
    """Columns shared by every entity: identity, status, soft delete and the
    denormalized snapshots of the user behind each mutation."""

    # columns that clients may not write directly
    __managed__ = (
        "id", "created_at", "updated_at", "status_deleted", "deleted_at",
        "user_created", "user_updated", "user_deleted",
    )
    # columns never serialized
    __hidden__ = ()
    # columns that must be present on create and replace
    __required__ = ()

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    status = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    status_deleted = Column(Integer, default=DeletedStatus.not_deleted.value, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    user_created = Column(JSON, nullable=True)
    user_updated = Column(JSON, nullable=True)
    user_deleted = Column(JSON, nullable=True)

    @classmethod
    def column_names(cls) -> list:
        return [attr.key for attr in inspect(cls).column_attrs]

    @classmethod
    def writable_columns(cls) -> list:
        return [name for name in cls.column_names() if name not in cls.__managed__]

    def to_dict(self, fields=None) -> dict:
        data = {}
        for name in self.column_names():
            if name in self.__hidden__:
                continue
            if fields is not None and name not in fields:
                continue
            value = getattr(self, name)
            if isinstance(value, uuid.UUID):
                value = str(value)
            elif isinstance(value, datetime):
                value = value.isoformat()
            data[to_camel(name)] = value
        return data
