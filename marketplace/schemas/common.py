# marketplace/schemas/common.py
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for payloads exchanged in camelCase (``isVendor``, ``pricePerHour``...).

    Fields are declared in snake_case; responses are rendered by alias and
    requests accept either spelling.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
