# app/core/config.py

import os
from dotenv import load_dotenv

load_dotenv()

APP_NAME = os.getenv("APP_NAME", "Trading API")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME", "base_api")
DATABASE_URL = os.getenv("DATABASE_URL") or (
    f"postgresql+psycopg2://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)
DB_STATEMENT_TIMEOUT_MS = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "5000"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "10"))

SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
# seconds
ACCESS_TOKEN_EXPIRE_SECONDS = int(os.getenv("ACCESS_TOKEN_EXPIRE_SECONDS", "360000"))

OTP_BYTES = 6
OTP_EXPIRE_HOURS = int(os.getenv("OTP_EXPIRE_HOURS", "3"))

GOOGLE_CLIENT_IDS = [
    client_id.strip()
    for client_id in os.getenv(
        "GOOGLE_CLIENT_IDS",
        "547688133294-d6796j2jnlg52re5hu06u7lm2r4a4bpo.apps.googleusercontent.com,"
        "547688133294-5mes9stlriso8hk7ed2i2s1e1h3olc6c.apps.googleusercontent.com",
    ).split(",")
    if client_id.strip()
]
GOOGLE_VERIFY_TIMEOUT = float(os.getenv("GOOGLE_VERIFY_TIMEOUT", "10"))

MAIL_API_URL = os.getenv("MAIL_API_URL", "http://localhost:8025/api/send")
MAIL_FROM = os.getenv("MAIL_FROM", "no-reply@localhost")
MAIL_TIMEOUT = float(os.getenv("MAIL_TIMEOUT", "10"))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join("public", ".sandbox"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8080").split(",")
    if origin.strip()
]
