from app.api.crud import crud_router
from app.repositories.catalog import SupplierRepository

router = crud_router(SupplierRepository)
