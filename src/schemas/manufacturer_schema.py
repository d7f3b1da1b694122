"""Input schemas for manufacturers and their contacts."""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RequiredText = Annotated[str, Field(min_length=1)]


class InputModel(BaseModel):
    """Base for request payloads: camelCase keys, surrounding whitespace stripped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ContactInput(InputModel):
    name: RequiredText
    email: RequiredText
    phone: RequiredText


class ManufacturerInput(InputModel):
    """Inline manufacturer data, created together with its contact."""

    name: Annotated[str, Field(min_length=2)]
    country: Annotated[str, Field(min_length=2)]
    website: RequiredText
    description: Optional[str] = None
    address: Optional[str] = None
    contact: ContactInput
