# app/utils/helpers.py
import base64
import json
import secrets
import uuid
from datetime import datetime, timedelta

from fastapi import HTTPException, Request

from app.core.config import OTP_BYTES, OTP_EXPIRE_HOURS


def error_response(code, message, details=None):
    return {"success": False, "error": {"code": code, "message": message, "details": details}}


def message_response(message="SUCCESS"):
    return {"message": message}


def generate_otp(num_bytes: int = OTP_BYTES) -> str:
    """Random hex code, two characters per byte of entropy."""
    return secrets.token_hex(num_bytes)


def get_expiry(hours: int = OTP_EXPIRE_HOURS) -> datetime:
    return datetime.utcnow() + timedelta(hours=hours)


def synthesize_password(email: str, id_token: str) -> str:
    """Placeholder secret stored for accounts created through a third-party login."""
    raw = f"{email}%{id_token}".encode()
    return base64.b64encode(raw).decode()[:100]


def parse_uuid(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise HTTPException(status_code=404, detail="Entity not found")


def parse_json_param(raw, name: str):
    if raw is None or raw == "":
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail=f"Invalid JSON in '{name}' parameter")
    if not isinstance(value, dict):
        raise HTTPException(status_code=400, detail=f"'{name}' must be a JSON object")
    return value


async def read_json_body(request: Request) -> dict:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Request body must be valid JSON")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    return body


def mask_email(email: str) -> str:
    try:
        local, domain = email.split("@")
        if len(local) <= 2:
            local_masked = local[0] + "***"
        else:
            local_masked = local[0] + "***" + local[-1]
        return f"{local_masked}@{domain}"
    except (ValueError, IndexError):
        return "***"
