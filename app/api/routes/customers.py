from app.api.crud import crud_router
from app.repositories.catalog import CustomerRepository

router = crud_router(CustomerRepository)
