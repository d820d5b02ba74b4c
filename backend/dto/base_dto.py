from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseDto(BaseModel):
    """
    Base class for response payloads.

    Fields are declared in snake_case and serialized in camelCase by
    `api_response`. `from_attributes` lets mappers validate ORM rows
    (reading progress, post reports) directly.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
