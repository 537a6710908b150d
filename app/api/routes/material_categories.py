from app.api.crud import crud_router
from app.repositories.catalog import MaterialCategoryRepository

# public collection, writes carry timestamps but no user snapshot
router = crud_router(MaterialCategoryRepository, authenticated=False)
