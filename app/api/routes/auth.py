from fastapi import APIRouter, Request, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import APP_NAME, OTP_EXPIRE_HOURS
from app.core.logging import get_logger
from app.db.get_db import get_db
from app.models.enums import DEFAULT_ROLE, DeletedStatus, RecordStatus, ThirdPartyType
from app.models.user import User
from app.repositories.users import UserRepository
from app.services.google_auth import (
    GoogleIdentityVerifier,
    IdentityProviderUnavailable,
    IdentityVerificationError,
    get_identity_verifier,
)
from app.services.mailer import Mailer, MailDeliveryError, get_mailer
from app.utils.auth import create_access_token, get_current_user, hash_password, verify_password
from app.utils.helpers import (
    generate_otp,
    get_expiry,
    mask_email,
    message_response,
    read_json_body,
    synthesize_password,
)

router = APIRouter()
log = get_logger("auth")


def session_payload(user: User, token: str) -> dict:
    user_data = user.to_dict()
    user_data["token"] = token
    return {"token": token, "userData": user_data}


@router.post("/login")
async def login(request: Request, db: Session = Depends(get_db)):
    body = await read_json_body(request)
    email = body.get("email")
    password = body.get("password")
    generated_password = bool(body.get("generatedPassword"))

    if not email or not isinstance(password, str):
        raise HTTPException(status_code=400, detail="Missing login credentials")

    user = UserRepository(db).find_active_by_email(email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    if generated_password:
        # system provisioned accounts present the stored value itself
        log.warning("Generated-password login used for user %s", user.id)
        is_password_valid = password == user.password
    else:
        is_password_valid = verify_password(password, user.password)

    if not is_password_valid:
        raise HTTPException(status_code=404, detail="Password not match")

    return session_payload(user, create_access_token(user))


@router.post("/login-with-third")
async def login_with_third(
    request: Request,
    db: Session = Depends(get_db),
    verifier: GoogleIdentityVerifier = Depends(get_identity_verifier)
):
    body = await read_json_body(request)
    id_token = body.get("idToken")
    auth_type = body.get("type")

    if not id_token or not auth_type:
        raise HTTPException(status_code=400, detail="idToken and type are required")

    if auth_type != ThirdPartyType.google.value:
        raise HTTPException(status_code=400, detail="Unsupported authentication type")

    try:
        profile = verifier.verify(id_token)
    except IdentityVerificationError as e:
        log.error("Third-party token verification failed: %s", e)
        raise HTTPException(status_code=417, detail=f"Error verifying token : {e}")
    except IdentityProviderUnavailable as e:
        log.error("Identity provider unavailable: %s", e)
        raise HTTPException(status_code=503, detail="Identity provider unavailable")

    if not profile.subject or not profile.email:
        raise HTTPException(status_code=404, detail="Token does not have any data")

    users = UserRepository(db)
    user = users.find_by_email(profile.email)
    if not user:
        values = {
            "display_name": profile.display_name,
            "email": profile.email,
            "image_url": profile.image_url,
            "status": RecordStatus.active.value,
            "password": synthesize_password(profile.email, id_token),
            "role": DEFAULT_ROLE,
        }
        try:
            user = users.create(values)
            log.info("Created account %s from third-party login", user.id)
        except IntegrityError:
            # a concurrent first login created it
            db.rollback()
            user = users.find_by_email(profile.email)

    if not user or user.status_deleted == DeletedStatus.deleted.value:
        raise HTTPException(status_code=401, detail="User not found")

    payload = session_payload(user, create_access_token(user))
    payload["token_third"] = None
    return payload


@router.get("/verify")
def verify(user: User = Depends(get_current_user)):
    return session_payload(user, create_access_token(user))


@router.post("/signup")
async def signup(request: Request, db: Session = Depends(get_db)):
    body = await read_json_body(request)
    users = UserRepository(db)
    values = users.prepare(body, partial=True)
    if not values.get("email"):
        raise HTTPException(status_code=422, detail="Missing required properties: email")
    if not values.get("display_name"):
        values["display_name"] = values["email"].split("@")[0]

    # any existing row blocks the email, soft deleted or not
    users.ensure_email_available(values["email"])

    values["status"] = RecordStatus.active.value
    if not values.get("role"):
        values["role"] = DEFAULT_ROLE
    if values.get("password"):
        values["password"] = hash_password(values["password"])
    else:
        values["password"] = None

    user = users.create(values)
    return user.to_dict()


@router.post("/edit-profile")
async def edit_profile(
    request: Request,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    body = await read_json_body(request)
    users = UserRepository(db)
    values = users.prepare(body, partial=True)

    new_email = values.get("email")
    if new_email and new_email != user.email:
        users.ensure_email_available(new_email, exclude_id=user.id)

    if values.get("password"):
        values["password"] = hash_password(values["password"])
    else:
        values.pop("password", None)

    if values.get("image_url") == "":
        values.pop("image_url")

    user = users.update(user, values, actor=user)
    return user.to_dict()


@router.post("/forgot")
async def forgot(
    request: Request,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer)
):
    body = await read_json_body(request)
    email = body.get("email")
    if not email:
        raise HTTPException(status_code=400, detail="Missing email")

    users = UserRepository(db)
    user = users.find_active_by_email(email)
    if not user:
        raise HTTPException(status_code=404, detail=f"User with email {email} does not exist.")

    otp = generate_otp()
    users.store_otp(user, otp, get_expiry())
    log.info("Password reset OTP issued for %s", mask_email(user.email))

    try:
        mailer.send_email(
            user.email,
            f"[{APP_NAME}] Forgot Password",
            f"This is your OTP for resetting your password: {otp}. "
            f"It will expire in {OTP_EXPIRE_HOURS} hours.",
        )
    except MailDeliveryError:
        # the stored OTP stays valid; calling forgot again issues a fresh one
        raise HTTPException(status_code=500, detail="Failed to send OTP email.")

    return message_response()


@router.post("/reset")
async def reset(request: Request, db: Session = Depends(get_db)):
    body = await read_json_body(request)
    otp = body.get("otp")
    password = body.get("password")

    if not isinstance(otp, str) or not isinstance(password, str) or not otp or not password:
        raise HTTPException(status_code=400, detail="Missing otp or password")

    UserRepository(db).redeem_otp(otp, hash_password(password))
    return message_response("Password reset successful.")


@router.delete("/delete-account")
def delete_account(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    UserRepository(db).soft_delete(user, actor=user)
    return message_response()
