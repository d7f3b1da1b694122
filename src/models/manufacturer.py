"""Manufacturer model with its contact resolved."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .contact import Contact


@dataclass(frozen=True)
class Manufacturer:
    """Manufacturer record as returned by the API.

    The contact reference is always resolved; ``contact`` is None only when
    the stored manufacturer has no contact.
    """

    id: str
    name: str
    country: str
    website: str
    description: Optional[str] = None
    address: Optional[str] = None
    contact: Optional[Contact] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Manufacturer":
        """Build from a manufacturer document whose contact was joined in."""
        contact = document.get("contact")
        return cls(
            id=str(document["_id"]),
            name=document["name"],
            country=document["country"],
            website=document["website"],
            description=document.get("description"),
            address=document.get("address"),
            contact=Contact.from_document(contact) if isinstance(contact, dict) else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "name": self.name,
            "country": self.country,
            "website": self.website,
            "description": self.description,
            "address": self.address,
            "contact": self.contact.to_dict() if self.contact else None,
        }
