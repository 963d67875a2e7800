"""Shared pydantic base model."""

from typing import Any, Dict

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every schema in the API.

    Fields are exposed to clients under camelCase aliases
    (``farmer_id`` -> ``farmerId``) and accepted under either name.
    Enum members are stored as their plain string values.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "use_enum_values": True,
        "from_attributes": True,
    }

    def changes(self) -> Dict[str, Any]:
        """Return only the fields the caller explicitly supplied."""
        return self.model_dump(exclude_unset=True)


def reject_null(value: Any) -> Any:
    """Field validator for update payloads whose column is NOT NULL."""
    if value is None:
        raise ValueError("may not be null")
    return value
