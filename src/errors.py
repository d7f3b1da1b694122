"""Error taxonomy shared by the REST and GraphQL surfaces.

Services raise these; the API layer translates them into HTTP status codes
or GraphQL error extensions. Anything that is not an InventoryError is an
infrastructure failure and surfaces as an internal error.
"""

from typing import Any, Dict, List, Optional


class InventoryError(Exception):
    """Base class for caller-facing inventory errors."""

    kind = "inventory_error"
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.kind, "message": self.message, "details": self.details}

    @property
    def extensions(self) -> Dict[str, Any]:
        # Picked up by graphql-core when the error is raised inside a resolver
        return {"code": self.kind, "details": self.details}


class MalformedInputError(InventoryError):
    """Input failed schema validation or an id is not a valid ObjectId."""

    kind = "malformed_input"
    status_code = 400

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message, details=errors)
        self.errors = errors or {}


class NotFoundError(InventoryError):
    """A well-formed id does not match any stored document."""

    kind = "not_found"
    status_code = 404


class ConflictError(InventoryError):
    """A uniqueness constraint (sku, manufacturer name) would be violated."""

    kind = "conflict"
    status_code = 409


class ContractViolationError(InventoryError):
    """Mutually exclusive or jointly required fields were misused."""

    kind = "contract_violation"
    status_code = 400
