from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseRequestDto(BaseModel):
    """
    Base DTO class for API request bodies.

    Bodies arrive in camelCase; unknown keys are rejected and strings are
    stripped before validation.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    def to_db_dict(self, include: set[str] | None = None) -> dict:
        """
        Dump the fields the client actually sent, keyed by column name.

        Args:
            include: Optional whitelist of field names to keep.

        Returns:
            dict: Field name to value, without unset fields.
        """
        return self.model_dump(
            by_alias=False,
            exclude_unset=True,
            include=include,
        )
