from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for records parsed from FTCScout JSON payloads.

    Fields are declared in snake_case and read from the API's camelCase keys.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,  # Make instances immutable
        extra="ignore",
    )


class OpenApiModel(ApiModel):
    """An ApiModel that keeps keys it does not declare (stats payloads)."""

    model_config = ConfigDict(extra="allow")
