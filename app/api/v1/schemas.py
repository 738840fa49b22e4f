from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ThemeName(str, Enum):
    modern = "modern"
    classic = "classic"
    minimal = "minimal"
    vibrant = "vibrant"
    dark = "dark"
    elegant = "elegant"


class SessionRequestSchema(CamelModel):
    session_id: str = Field(min_length=1)


class AddressSchema(CamelModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""


class RestaurantInfoRequestSchema(SessionRequestSchema):
    restaurant_name: str = ""
    owner_name: str = ""
    email: str = ""
    phone: str = ""
    address: AddressSchema = Field(default_factory=AddressSchema)
    cuisine_type: list[str] = Field(default_factory=list)
    description: str = ""


class MenuCategorySchema(CamelModel):
    name: str = Field(min_length=1)
    description: str = ""
    order: int | None = None


class MenuSetupRequestSchema(SessionRequestSchema):
    categories: list[MenuCategorySchema] = Field(default_factory=list)
    sample_items: bool = False


class ThemeRequestSchema(SessionRequestSchema):
    theme: ThemeName = ThemeName.modern
    # Server record defaults; the wizard always sends its own colors.
    primary_color: str = "#4F46E5"
    secondary_color: str = "#10B981"
    font_family: str = "Inter"
    logo: str | None = None


def sub_document(req: SessionRequestSchema) -> dict[str, Any]:
    """Request body minus the session id, in wire (camelCase) form."""
    return req.model_dump(mode="json", by_alias=True, exclude={"session_id"})
