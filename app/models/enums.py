# app/models/enums.py
import enum


class RecordStatus(enum.IntEnum):
    inactive = 0
    active = 1
    suspended = 2


class DeletedStatus(enum.IntEnum):
    not_deleted = 0
    deleted = 1


class AuditKind(enum.Enum):
    created = "created"
    updated = "updated"
    deleted = "deleted"


class ThirdPartyType(enum.Enum):
    google = "GOOGLE"


DEFAULT_ROLE = "member"
