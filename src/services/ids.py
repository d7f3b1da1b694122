"""ObjectId parsing for ids arriving from the API surfaces."""

from typing import Any

from bson import ObjectId

from ..errors import MalformedInputError


def parse_object_id(value: Any, field_name: str = "id") -> ObjectId:
    """Convert a caller-supplied id into an ObjectId.

    Raises:
        MalformedInputError: If the value is not a 24 character hex string.
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise MalformedInputError(
            f"Id is not valid: {value!r}",
            errors={field_name: ["must be a valid 24 character hex ObjectId"]},
        )
    return ObjectId(value)
