"""Tests for the product creation workflow.

These tests verify:
- Manufacturer resolution by reference and by inline creation
- Caller contract checks (both / neither manufacturer fields)
- Fail-fast validation before any store access
- Conflicts on duplicate sku and manufacturer name
- Rollback of an inline manufacturer and contact when the product insert fails
"""

import asyncio

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, OperationFailure

from src.errors import ConflictError, ContractViolationError, MalformedInputError, NotFoundError
from src.models import Product
from src.schemas import validate_product_create
from src.services import (
    ExistingManufacturer,
    NewManufacturer,
    ProductCreationService,
    manufacturer_reference_from_input,
)
from src.services.store_errors import conflict_from_write_error
from tests.fakes import make_product


def product_payload(**overrides):
    payload = {
        "name": "Hammer",
        "sku": "HAM-001",
        "description": "Steel claw hammer",
        "price": 19.5,
        "category": "Tools",
        "amountInStock": 12,
    }
    payload.update(overrides)
    return payload


def inline_manufacturer(**overrides):
    manufacturer = {
        "name": "Initech",
        "country": "Finland",
        "website": "https://initech.test",
        "address": "Esplanadi 5",
        "contact": {"name": "Bill", "email": "bill@initech.test", "phone": "+358 40 000 0000"},
    }
    manufacturer.update(overrides)
    return manufacturer


@pytest.fixture
def service(store):
    return ProductCreationService(store)


class TestManufacturerReference:
    """Test the manufacturer reference tagged union."""

    def test_reference_by_id(self):
        product = validate_product_create(product_payload(manufacturerId="65f1c0a2b3d4e5f60718293a"))

        reference = manufacturer_reference_from_input(product)

        assert reference == ExistingManufacturer(ObjectId("65f1c0a2b3d4e5f60718293a"))

    def test_inline_manufacturer(self):
        product = validate_product_create(product_payload(manufacturer=inline_manufacturer()))

        reference = manufacturer_reference_from_input(product)

        assert isinstance(reference, NewManufacturer)
        assert reference.data.name == "Initech"

    def test_both_fields_violate_contract(self):
        product = validate_product_create(
            product_payload(manufacturerId="65f1c0a2b3d4e5f60718293a", manufacturer=inline_manufacturer())
        )

        with pytest.raises(ContractViolationError):
            manufacturer_reference_from_input(product)

    def test_neither_field_violates_contract(self):
        product = validate_product_create(product_payload())

        with pytest.raises(ContractViolationError):
            manufacturer_reference_from_input(product)

    def test_malformed_manufacturer_id(self):
        product = validate_product_create(product_payload(manufacturerId="invalid-id"))

        with pytest.raises(MalformedInputError) as exc_info:
            manufacturer_reference_from_input(product)

        assert "manufacturerId" in exc_info.value.errors


class TestCreateWithExistingManufacturer:
    """Test creation against a stored manufacturer."""

    @pytest.mark.asyncio
    async def test_creates_product_with_resolved_manufacturer(self, service, store, acme):
        manufacturer_id, contact_id = acme

        product = await service.create_product(product_payload(manufacturerId=str(manufacturer_id)))

        assert isinstance(product, Product)
        assert product.sku == "HAM-001"
        assert product.manufacturer.id == str(manufacturer_id)
        assert product.manufacturer.name == "Acme"
        assert product.manufacturer.contact.id == str(contact_id)
        assert product.manufacturer.contact.email == "ada@acme.test"

        stored = store.collections["products"][0]
        assert stored["manufacturer"] == manufacturer_id
        assert stored["amountInStock"] == 12
        assert store.committed == 1

    @pytest.mark.asyncio
    async def test_manufacturer_without_contact(self, service, globex):
        product = await service.create_product(product_payload(manufacturerId=str(globex)))

        assert product.manufacturer.name == "Globex"
        assert product.manufacturer.contact is None

    @pytest.mark.asyncio
    async def test_dangling_manufacturer_id_is_not_found(self, service, store, acme):
        with pytest.raises(NotFoundError):
            await service.create_product(product_payload(manufacturerId=str(ObjectId())))

        assert store.count("products") == 0
        assert store.aborted == 1

    @pytest.mark.asyncio
    async def test_malformed_manufacturer_id_fails_before_store(self, service, store):
        with pytest.raises(MalformedInputError):
            await service.create_product(product_payload(manufacturerId="invalid-id"))

        assert store.committed == 0
        assert store.aborted == 0

    @pytest.mark.asyncio
    async def test_invalid_payload_fails_before_store(self, service, store, acme):
        manufacturer_id, _ = acme

        with pytest.raises(MalformedInputError) as exc_info:
            await service.create_product(product_payload(manufacturerId=str(manufacturer_id), price=-1))

        assert "price" in exc_info.value.errors
        assert store.committed == 0
        assert store.aborted == 0


class TestCreateWithInlineManufacturer:
    """Test creation of a new manufacturer and contact alongside the product."""

    @pytest.mark.asyncio
    async def test_creates_contact_manufacturer_and_product(self, service, store):
        product = await service.create_product(product_payload(manufacturer=inline_manufacturer()))

        assert store.count("contacts") == 1
        assert store.count("manufacturers") == 1
        assert store.count("products") == 1

        contact = store.collections["contacts"][0]
        manufacturer = store.collections["manufacturers"][0]
        assert manufacturer["contact"] == contact["_id"]
        assert manufacturer["address"] == "Esplanadi 5"
        assert "description" not in manufacturer
        assert store.collections["products"][0]["manufacturer"] == manufacturer["_id"]

        assert product.manufacturer.name == "Initech"
        assert product.manufacturer.contact.name == "Bill"

    @pytest.mark.asyncio
    async def test_duplicate_manufacturer_name_conflicts(self, service, store, acme):
        with pytest.raises(ConflictError) as exc_info:
            await service.create_product(product_payload(manufacturer=inline_manufacturer(name="Acme")))

        assert "name" in exc_info.value.details
        assert store.count("manufacturers") == 1
        assert store.count("contacts") == 1
        assert store.count("products") == 0

    @pytest.mark.asyncio
    async def test_duplicate_sku_rolls_back_inline_manufacturer(self, service, store, acme):
        manufacturer_id, _ = acme
        store.add("products", make_product(manufacturer_id, sku="HAM-001"))

        with pytest.raises(ConflictError):
            await service.create_product(product_payload(manufacturer=inline_manufacturer()))

        assert store.count("products") == 1
        assert store.count("manufacturers") == 1
        assert store.count("contacts") == 1
        assert [m["name"] for m in store.collections["manufacturers"]] == ["Acme"]
        assert store.aborted == 1

    @pytest.mark.asyncio
    async def test_failed_product_insert_rolls_back_inline_manufacturer(self, service, store):
        store.fail_next_insert("products", OperationFailure("insert failed", code=2))

        with pytest.raises(OperationFailure):
            await service.create_product(product_payload(manufacturer=inline_manufacturer()))

        assert store.count("contacts") == 0
        assert store.count("manufacturers") == 0
        assert store.count("products") == 0

    @pytest.mark.asyncio
    async def test_both_manufacturer_fields_leave_store_unchanged(self, service, store, acme):
        manufacturer_id, _ = acme

        with pytest.raises(ContractViolationError):
            await service.create_product(
                product_payload(manufacturerId=str(manufacturer_id), manufacturer=inline_manufacturer())
            )

        assert store.count("manufacturers") == 1
        assert store.count("contacts") == 1
        assert store.count("products") == 0
        assert store.committed == 0


class TestSkuConflicts:
    """Test sku uniqueness."""

    @pytest.mark.asyncio
    async def test_duplicate_sku_conflicts(self, service, store, acme):
        manufacturer_id, _ = acme
        await service.create_product(product_payload(manufacturerId=str(manufacturer_id)))

        with pytest.raises(ConflictError) as exc_info:
            await service.create_product(
                product_payload(manufacturerId=str(manufacturer_id), name="Other hammer")
            )

        assert exc_info.value.details == {"sku": ["duplicate sku"]}
        assert store.count("products") == 1

    @pytest.mark.asyncio
    async def test_unique_index_violation_maps_to_conflict(self, service, store, acme):
        manufacturer_id, _ = acme
        store.fail_next_insert(
            "products",
            DuplicateKeyError("E11000 duplicate key", 11000, {"keyValue": {"sku": "HAM-001"}}),
        )

        with pytest.raises(ConflictError) as exc_info:
            await service.create_product(product_payload(manufacturerId=str(manufacturer_id)))

        assert "sku" in exc_info.value.details

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_sku_yields_one_success(self, service, store, acme):
        manufacturer_id, _ = acme
        payload = product_payload(manufacturerId=str(manufacturer_id))

        results = await asyncio.gather(
            service.create_product(dict(payload)),
            service.create_product(dict(payload)),
            return_exceptions=True,
        )

        successes = [r for r in results if isinstance(r, Product)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(successes) == 1
        assert len(conflicts) == 1
        assert store.count("products") == 1


class TestConflictFromWriteError:
    """Test translation of driver errors."""

    def test_duplicate_key_names_the_field(self):
        error = DuplicateKeyError("E11000", 11000, {"keyValue": {"name": "Acme"}})

        conflict = conflict_from_write_error(error)

        assert isinstance(conflict, ConflictError)
        assert "Acme" in conflict.message
        assert conflict.details == {"name": ["duplicate name"]}

    def test_write_conflict_is_a_conflict(self):
        conflict = conflict_from_write_error(OperationFailure("WriteConflict", code=112))

        assert isinstance(conflict, ConflictError)

    def test_other_failures_are_not_conflicts(self):
        assert conflict_from_write_error(OperationFailure("boom", code=2)) is None
