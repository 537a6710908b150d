from app.api.crud import crud_router
from app.repositories.catalog import HscodeRepository

router = crud_router(HscodeRepository)
