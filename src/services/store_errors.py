"""Translation of driver write failures into conflicts."""

from typing import Optional

from pymongo.errors import DuplicateKeyError, OperationFailure

from ..errors import ConflictError

# Server error code for a write conflict between two transactions
WRITE_CONFLICT_CODE = 112

_UNIQUE_FIELD_MESSAGES = {
    "sku": "A product with sku {value!r} already exists",
    "name": "A manufacturer named {value!r} already exists",
}


def conflict_from_write_error(error: OperationFailure) -> Optional[ConflictError]:
    """Map a unique index violation or a transactional write conflict.

    Returns None for failures that are not conflicts; the caller re-raises
    those as infrastructure errors.
    """
    if isinstance(error, DuplicateKeyError):
        key_value = (error.details or {}).get("keyValue") or {}
        if not key_value:
            return ConflictError("Duplicate key", details={"_global": [str(error)]})

        field_name, value = next(iter(key_value.items()))
        template = _UNIQUE_FIELD_MESSAGES.get(field_name, "Duplicate value {value!r}")
        return ConflictError(
            template.format(value=value),
            details={field_name: [f"duplicate {field_name}"]},
        )

    if error.code == WRITE_CONFLICT_CODE:
        return ConflictError(
            "The document was modified by a concurrent request",
            details={"_global": ["write conflict"]},
        )

    return None
