from app.api.crud import crud_router
from app.repositories.catalog import CurrencyRepository

router = crud_router(CurrencyRepository)
