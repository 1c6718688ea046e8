"""
Schemas base compartidos.

Los DTOs de entrada usan camelCase (contrato con el frontend) y se mapean
a las columnas snake_case de la base mediante alias. Las respuestas se
devuelven en snake_case, tal como están almacenadas.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """DTO de entrada: acepta camelCase o snake_case; strings vacíos → None."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    """Forma única de los errores de la API."""
    success: bool = False
    error: str
