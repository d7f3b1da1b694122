"""Contact model for manufacturer contacts."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Contact:
    """The person to reach at a manufacturer."""

    id: str
    name: str
    email: str
    phone: str

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Contact":
        return cls(
            id=str(document["_id"]),
            name=document["name"],
            email=document["email"],
            phone=document["phone"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"_id": self.id, "name": self.name, "email": self.email, "phone": self.phone}
