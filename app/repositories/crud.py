# app/repositories/crud.py
"""
Generic CRUD repository. Every write goes through `_persist_*`, which runs
the audit stamp before touching the database, so no entity type can skip
the userCreated / userUpdated / userDeleted trail.
"""
from fastapi import HTTPException
from sqlalchemy import Boolean, DateTime, Float, Integer, Numeric, Text
from sqlalchemy.orm import Session

from app.models.enums import AuditKind, DeletedStatus
from app.models.mixins import to_camel, to_snake
from app.utils.audit import stamp
from app.utils.filters import (
    build_fields,
    build_order,
    build_where,
    coerce_value,
    mentions_field,
    parse_pagination,
)
from app.utils.helpers import parse_uuid


def _type_matches(column, value) -> bool:
    if value is None:
        return True
    column_type = column.type
    if isinstance(column_type, Boolean):
        return isinstance(value, bool)
    if isinstance(column_type, (Integer, Float, Numeric)):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if isinstance(column_type, (Text, DateTime)):
        return isinstance(value, str)
    return True


class AuditedRepository:
    model = None
    # columns kept from the stored row when a replace omits them
    preserve_on_replace = ()

    def __init__(self, db: Session):
        self.db = db

    # --- reads ---

    def query(self, where=None):
        query = self.db.query(self.model)
        if not mentions_field(where, "statusDeleted"):
            query = query.filter(self.model.status_deleted == DeletedStatus.not_deleted.value)
        criteria = build_where(self.model, where)
        if criteria is not None:
            query = query.filter(criteria)
        return query

    def find(self, filter_=None) -> list:
        filter_ = filter_ or {}
        query = self.query(filter_.get("where"))
        for criterion in build_order(self.model, filter_.get("order")):
            query = query.order_by(criterion)
        limit, skip = parse_pagination(filter_)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count(self, where=None) -> int:
        return self.query(where).count()

    def find_by_id(self, record_id):
        record_id = parse_uuid(record_id)
        record = self.query().filter(self.model.id == record_id).first()
        if not record:
            raise HTTPException(
                status_code=404,
                detail=f"Entity not found: {self.model.__name__} with id {record_id}"
            )
        return record

    def serialize(self, records, filter_=None):
        fields = build_fields(self.model, (filter_ or {}).get("fields"))
        if isinstance(records, list):
            return [record.to_dict(fields) for record in records]
        return records.to_dict(fields)

    # --- request bodies ---

    def prepare(self, body: dict, partial: bool = False) -> dict:
        """Map a camelCase request body onto writable columns.

        Unknown properties and wrongly typed values are rejected; server
        managed columns are dropped since the audit stamp owns them.
        """
        columns = self.model.__table__.columns
        writable = set(self.model.writable_columns())
        managed = set(self.model.__managed__)
        values = {}
        for key, value in body.items():
            name = to_snake(key)
            if name in managed:
                continue
            if name not in writable:
                raise HTTPException(status_code=422, detail=f"Unknown property '{key}'")
            if value is None and not columns[name].nullable:
                raise HTTPException(status_code=422, detail=f"Property '{key}' cannot be null")
            if not _type_matches(columns[name], value):
                raise HTTPException(status_code=422, detail=f"Invalid type for property '{key}'")
            values[name] = coerce_value(columns[name], value)

        if not partial:
            missing = [
                to_camel(name) for name in self.model.__required__
                if values.get(name) in (None, "")
            ]
            if missing:
                raise HTTPException(
                    status_code=422,
                    detail=f"Missing required properties: {', '.join(missing)}"
                )
        return values

    # --- mutation pipeline ---

    def _commit(self, record=None):
        self.db.commit()
        if record is not None:
            self.db.refresh(record)
        return record

    def create(self, values: dict, actor=None):
        stamp(values, actor, AuditKind.created)
        record = self.model(**values)
        self.db.add(record)
        return self._commit(record)

    def update(self, record, values: dict, actor=None):
        stamp(values, actor, AuditKind.updated)
        for name, value in values.items():
            setattr(record, name, value)
        return self._commit(record)

    def replace_by_id(self, record_id, values: dict, actor=None):
        record = self.find_by_id(record_id)
        replacement = {}
        for name in self.model.writable_columns():
            if name in values:
                replacement[name] = values[name]
            elif name in self.preserve_on_replace:
                continue
            else:
                default = self.model.__table__.columns[name].default
                replacement[name] = default.arg if default is not None and default.is_scalar else None
        return self.update(record, replacement, actor)

    def update_all(self, values: dict, where=None, actor=None) -> int:
        stamp(values, actor, AuditKind.updated)
        count = self.query(where).update(values, synchronize_session=False)
        self._commit()
        return count

    def soft_delete(self, record, actor=None):
        values = stamp({}, actor, AuditKind.deleted)
        for name, value in values.items():
            setattr(record, name, value)
        return self._commit(record)

    def delete_by_id(self, record_id, actor=None):
        return self.soft_delete(self.find_by_id(record_id), actor)
