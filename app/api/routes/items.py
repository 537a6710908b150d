from app.api.crud import crud_router
from app.repositories.catalog import ItemRepository

router = crud_router(ItemRepository)
