# app/utils/audit.py
from datetime import datetime

from app.models.enums import AuditKind, DeletedStatus, RecordStatus

_STAMP_COLUMN = {
    AuditKind.created: "user_created",
    AuditKind.updated: "user_updated",
    AuditKind.deleted: "user_deleted",
}


def user_snapshot(user) -> dict:
    """Value copy of the acting user. Never carries the password hash."""
    return {
        "id": str(user.id),
        "email": user.email,
        "displayName": user.display_name,
        "imageUrl": user.image_url,
    }


def stamp(values: dict, actor, kind: AuditKind) -> dict:
    """Annotate a pending write with who did it and when.

    `values` is the column mapping about to be persisted. With no actor
    (public endpoints) only the timestamps and delete markers are applied.
    """
    now = datetime.utcnow()
    if actor is not None:
        values[_STAMP_COLUMN[kind]] = user_snapshot(actor)
    if kind is AuditKind.updated:
        values["updated_at"] = now
    elif kind is AuditKind.deleted:
        values["deleted_at"] = now
        values["status"] = RecordStatus.inactive.value
        values["status_deleted"] = DeletedStatus.deleted.value
    return values
