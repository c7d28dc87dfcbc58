from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelSchema(BaseModel):
    """Accepts camelCase (frontend) or snake_case keys, emits camelCase"""
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True