from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

# Import routers
from app.api.routes import (
    auth, currencies, customers, files, hscodes, items,
    material_categories, origin_areas, suppliers, users,
)
from app.core.config import APP_NAME, CORS_ORIGINS, HOST, PORT
from app.core.logging import access_log_middleware, get_logger, setup_logging
from app.db.base import Base
from app.db.get_db import engine
from app.utils.error_codes import ERROR_CODES, HTTP_STATUS_TO_ERROR_CODE
from app.utils.helpers import error_response

setup_logging()
log = get_logger("app")

app = FastAPI(
    title=APP_NAME,
    description="Trading and logistics master data API",
    version="1.0.0"
)

# --- Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(access_log_middleware)

# Root route
@app.get("/")
def root():
    return {"success": True, "message": f"Welcome to the {APP_NAME}!", "data": None}

# Include routers
app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(currencies.router, prefix="/currencies", tags=["Currencies"])
app.include_router(customers.router, prefix="/customers", tags=["Customers"])
app.include_router(hscodes.router, prefix="/hscodes", tags=["HS Codes"])
app.include_router(origin_areas.router, prefix="/origin-areas", tags=["Origin Areas"])
app.include_router(suppliers.router, prefix="/suppliers", tags=["Suppliers"])
app.include_router(items.router, prefix="/items", tags=["Items"])
app.include_router(material_categories.router, prefix="/material-categories", tags=["Material Categories"])
app.include_router(files.router, prefix="/files", tags=["Files"])


@app.on_event("startup")
def on_startup():
    log.info("Creating database tables if missing...")
    Base.metadata.create_all(bind=engine)
    log.info("%s ready", APP_NAME)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    error_code = HTTP_STATUS_TO_ERROR_CODE.get(exc.status_code, ERROR_CODES["SERVER_ERROR"])
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(error_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content=error_response(
            ERROR_CODES["VALIDATION_ERROR"],
            "Invalid request: Please send the correct content type and required fields.",
            jsonable_encoder(exc.errors())
        ),
    )

@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    # the request session is closed by get_db, which rolls the transaction back
    log.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=409,
        content=error_response(ERROR_CODES["CONFLICT"], "Record conflicts with an existing one"),
    )

@app.exception_handler(OperationalError)
@app.exception_handler(PoolTimeoutError)
async def storage_unavailable_handler(request: Request, exc: Exception):
    log.error("Storage unavailable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content=error_response(ERROR_CODES["SERVICE_UNAVAILABLE"], "Storage unavailable, please retry later"),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=HOST, port=PORT)
