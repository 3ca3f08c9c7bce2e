"""
Base commune des schémas Pydantic : clés JSON en camelCase (contrat du client web),
noms de champs Python en snake_case.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
