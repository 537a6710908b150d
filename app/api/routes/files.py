# app/api/routes/files.py
import secrets
import time
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from starlette.datastructures import UploadFile

from app.core import config
from app.core.logging import get_logger

router = APIRouter()
log = get_logger("files")


def stored_name(original_name: str) -> str:
    """`report.pdf` -> `report-<epoch ms>-<random>.pdf`; directory parts are dropped."""
    original = Path(original_name or "upload").name
    suffix = Path(original).suffix
    stem = original[: -len(suffix)] if suffix else original
    return f"{stem}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"


@router.post("/upload")
async def upload_files(request: Request):
    form = await request.form()
    uploads = [value for _, value in form.multi_items() if isinstance(value, UploadFile)]
    if not uploads:
        raise HTTPException(status_code=400, detail="No files uploaded")

    destination = Path(config.UPLOAD_DIR)
    destination.mkdir(parents=True, exist_ok=True)

    files = []
    for upload in uploads:
        name = stored_name(upload.filename)
        with (destination / name).open("wb") as f:
            f.write(await upload.read())
        await upload.close()
        files.append(name)

    log.info("Stored %d uploaded file(s) in %s", len(files), destination)
    return {"message": "success", "files": files}
