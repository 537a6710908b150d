# app/repositories/catalog.py
from app.models.currency import Currency
from app.models.customer import Customer
from app.models.hscode import Hscode
from app.models.item import Item
from app.models.material_category import MaterialCategory
from app.models.origin_area import OriginArea
from app.models.supplier import Supplier
from app.repositories.crud import AuditedRepository


class CurrencyRepository(AuditedRepository):
    model = Currency


class CustomerRepository(AuditedRepository):
    model = Customer


class HscodeRepository(AuditedRepository):
    model = Hscode


class OriginAreaRepository(AuditedRepository):
    model = OriginArea


class SupplierRepository(AuditedRepository):
    model = Supplier


class MaterialCategoryRepository(AuditedRepository):
    model = MaterialCategory


class ItemRepository(AuditedRepository):
    model = Item
