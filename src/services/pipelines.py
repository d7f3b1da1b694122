"""Aggregation stages shared by the product, manufacturer and reporting queries."""

from typing import Any, Dict, List, Optional

from bson import ObjectId

from ..clients import CONTACTS, MANUFACTURERS, PRODUCTS, MongoDBClient

# price × amountInStock for a single product document
STOCK_VALUE_EXPRESSION = {"$multiply": ["$price", "$amountInStock"]}


def lookup_manufacturer_stages(
    local_field: str = "manufacturer",
    as_field: str = "manufacturer",
) -> List[Dict[str, Any]]:
    """Replace a manufacturer reference with the manufacturer document.

    Products whose manufacturer reference is broken are dropped by the unwind.
    """
    return [
        {
            "$lookup": {
                "from": MANUFACTURERS,
                "localField": local_field,
                "foreignField": "_id",
                "as": as_field,
            }
        },
        {"$unwind": f"${as_field}"},
    ]


def lookup_contact_stages(local_field: str, as_field: str) -> List[Dict[str, Any]]:
    """Replace a contact reference with the contact document, if there is one."""
    return [
        {
            "$lookup": {
                "from": CONTACTS,
                "localField": local_field,
                "foreignField": "_id",
                "as": as_field,
            }
        },
        {"$unwind": {"path": f"${as_field}", "preserveNullAndEmptyArrays": True}},
    ]


def resolved_product_stages() -> List[Dict[str, Any]]:
    """Inline a product's manufacturer and that manufacturer's contact."""
    return lookup_manufacturer_stages() + lookup_contact_stages(
        "manufacturer.contact", "manufacturer.contact"
    )


async def fetch_resolved_product(
    store: MongoDBClient,
    product_id: ObjectId,
    session: Optional[Any] = None,
) -> Optional[Dict[str, Any]]:
    """Read one product with manufacturer and contact inlined, or None."""
    pipeline = [{"$match": {"_id": product_id}}, *resolved_product_stages()]
    documents = await store.aggregate(PRODUCTS, pipeline, session=session)
    return documents[0] if documents else None
