"""Shared Pydantic base: camelCase on the wire, snake_case in Python."""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class MessageOut(BaseModel):
    message: str
