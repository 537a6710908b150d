# app/repositories/users.py
from datetime import datetime

from fastapi import HTTPException

from app.models.enums import AuditKind, DeletedStatus, RecordStatus
from app.models.user import User
from app.repositories.crud import AuditedRepository
from app.utils.audit import stamp


class UserRepository(AuditedRepository):
    model = User
    preserve_on_replace = ("password",)

    def find_by_email(self, email: str):
        return self.db.query(User).filter(User.email == email).first()

    def find_active_by_email(self, email: str):
        return self.db.query(User).filter(
            User.email == email,
            User.status == RecordStatus.active.value,
            User.status_deleted == DeletedStatus.not_deleted.value
        ).first()

    def email_taken(self, email: str, exclude_id=None) -> bool:
        query = self.db.query(User.id).filter(User.email == email)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def ensure_email_available(self, email: str, exclude_id=None):
        if email and self.email_taken(email, exclude_id):
            raise HTTPException(status_code=409, detail=f"User with email {email} already exists")

    def store_otp(self, user: User, otp: str, expires_at: datetime):
        # both fields are written together
        return self.update(user, {"otp": otp, "otp_expired": expires_at})

    def redeem_otp(self, otp: str, new_password_hash: str):
        """Consume a still-valid OTP and set the new password in one conditional UPDATE.

        The row is only touched if the OTP still matches and has not expired,
        so two concurrent resets with the same code cannot both succeed.
        """
        now = datetime.utcnow()
        conditions = (
            User.otp == otp,
            User.otp_expired > now,
            User.status_deleted == DeletedStatus.not_deleted.value,
        )
        candidate = self.db.query(User.id).filter(*conditions).first()
        if not candidate:
            raise HTTPException(status_code=404, detail="OTP is not valid or has expired.")

        values = stamp(
            {"otp": None, "otp_expired": None, "password": new_password_hash},
            None,
            AuditKind.updated,
        )
        updated = self.db.query(User).filter(User.id == candidate.id, *conditions).update(
            values, synchronize_session=False
        )
        self.db.commit()
        if updated == 0:
            raise HTTPException(status_code=404, detail="OTP is not valid or has expired.")
        return candidate.id
