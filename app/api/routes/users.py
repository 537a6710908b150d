from app.api.crud import crud_router
from app.repositories.users import UserRepository
from app.utils.auth import hash_password


def prepare_user(repository: UserRepository, values: dict, record_id=None):
    """Reject duplicate emails and never store a plaintext password.
    A blank password leaves the stored hash untouched."""
    if values.get("email"):
        repository.ensure_email_available(values["email"], exclude_id=record_id)

    if values.get("password"):
        values["password"] = hash_password(values["password"])
    else:
        values.pop("password", None)


router = crud_router(UserRepository, before_write=prepare_user, return_record=True)
