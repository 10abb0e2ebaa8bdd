"""Base model for request schemas: camelCase on the wire, snake_case in Python."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def changes(self) -> dict:
        """Fields the client actually sent, keyed by attribute name, as JSON-ready values."""
        return self.model_dump(mode="json", exclude_unset=True)
