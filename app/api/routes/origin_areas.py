from app.api.crud import crud_router
from app.repositories.catalog import OriginAreaRepository

router = crud_router(OriginAreaRepository)
