# app/api/crud.py
"""
Router factory for the plain CRUD collections.

Each collection gets create / count / pagination / find / patch-all /
find-by-id / patch / put / delete. Writes are handed to the repository,
which stamps the acting user; a collection only supplies its repository
class and, when needed, a `before_write` hook for entity specific checks.
"""
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from app.db.get_db import get_db
from app.utils.auth import get_current_user
from app.utils.helpers import parse_json_param, parse_uuid, read_json_body


def anonymous_actor():
    return None


def crud_router(
    repository_cls,
    authenticated: bool = True,
    before_write: Optional[Callable] = None,
    return_record: bool = False,
) -> APIRouter:
    router = APIRouter()
    current_actor = get_current_user if authenticated else anonymous_actor
    entity = repository_cls.model.__name__

    async def read_values(request: Request, repository, record_id=None, partial=False) -> dict:
        body = await read_json_body(request)
        values = repository.prepare(body, partial=partial)
        if before_write is not None:
            before_write(repository, values, record_id)
        return values

    def updated_response(repository, record):
        if return_record:
            return repository.serialize(record)
        return Response(status_code=204)

    @router.post("", summary=f"Create {entity}")
    async def create(request: Request, actor=Depends(current_actor), db: Session = Depends(get_db)):
        repository = repository_cls(db)
        values = await read_values(request, repository)
        record = repository.create(values, actor)
        return repository.serialize(record)

    @router.get("/count", summary=f"Count {entity}")
    def count(where: Optional[str] = Query(None), actor=Depends(current_actor), db: Session = Depends(get_db)):
        repository = repository_cls(db)
        return {"count": repository.count(parse_json_param(where, "where"))}

    @router.get("/pagination", summary=f"Page of {entity} with total count")
    def find_pagination(filter: Optional[str] = Query(None), actor=Depends(current_actor), db: Session = Depends(get_db)):
        repository = repository_cls(db)
        filter_ = parse_json_param(filter, "filter") or {}
        records = repository.find(filter_)
        # total ignores limit / skip
        total_count = repository.count(filter_.get("where"))
        return {"records": repository.serialize(records, filter_), "totalCount": total_count}

    @router.get("", summary=f"List {entity}")
    def find(filter: Optional[str] = Query(None), actor=Depends(current_actor), db: Session = Depends(get_db)):
        repository = repository_cls(db)
        filter_ = parse_json_param(filter, "filter") or {}
        return repository.serialize(repository.find(filter_), filter_)

    @router.patch("", summary=f"Update every matching {entity}")
    async def update_all(
        request: Request,
        where: Optional[str] = Query(None),
        actor=Depends(current_actor),
        db: Session = Depends(get_db)
    ):
        repository = repository_cls(db)
        values = await read_values(request, repository, partial=True)
        count = repository.update_all(values, parse_json_param(where, "where"), actor)
        return {"count": count}

    @router.get("/{record_id}", summary=f"Get {entity} by id")
    def find_by_id(
        record_id: str,
        filter: Optional[str] = Query(None),
        actor=Depends(current_actor),
        db: Session = Depends(get_db)
    ):
        repository = repository_cls(db)
        filter_ = parse_json_param(filter, "filter") or {}
        # only `fields` applies to a single record
        return repository.serialize(repository.find_by_id(record_id), {"fields": filter_.get("fields")})

    @router.patch("/{record_id}", summary=f"Update {entity} fields")
    async def update_by_id(record_id: str, request: Request, actor=Depends(current_actor), db: Session = Depends(get_db)):
        repository = repository_cls(db)
        record = repository.find_by_id(record_id)
        values = await read_values(request, repository, record.id, partial=True)
        record = repository.update(record, values, actor)
        return updated_response(repository, record)

    @router.put("/{record_id}", summary=f"Replace {entity}")
    async def replace_by_id(record_id: str, request: Request, actor=Depends(current_actor), db: Session = Depends(get_db)):
        repository = repository_cls(db)
        record_uuid = parse_uuid(record_id)
        values = await read_values(request, repository, record_uuid)
        record = repository.replace_by_id(record_uuid, values, actor)
        return updated_response(repository, record)

    @router.delete("/{record_id}", status_code=204, summary=f"Soft delete {entity}")
    def delete_by_id(record_id: str, actor=Depends(current_actor), db: Session = Depends(get_db)):
        repository = repository_cls(db)
        repository.delete_by_id(record_id, actor)
        return Response(status_code=204)

    return router
