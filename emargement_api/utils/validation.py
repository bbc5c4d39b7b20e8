# utils/validation.py
import json
from typing import Any, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from emargement_api.utils.errors import ValidationError, format_validation_errors

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def validate(schema: Type[SchemaT], payload: Any) -> SchemaT:
    """Check ``payload`` against ``schema`` without touching the store.

    Raises ValidationError carrying one detail per violated constraint.
    """
    if not isinstance(payload, dict):
        raise ValidationError(details=[{
            "field": "",
            "message": "Request body must be a JSON object",
            "type": "object_type",
        }])
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(details=format_validation_errors(exc.errors())) from exc


# Dependency factory: parse and validate the JSON body before any other check runs
def validated_body(schema: Type[SchemaT]):
    async def _validator(request: Request) -> SchemaT:
        raw = await request.body()
        try:
            payload = json.loads(raw) if raw else None
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValidationError(details=[{
                "field": "",
                "message": f"Malformed JSON body: {exc}",
                "type": "json_invalid",
            }]) from exc
        return validate(schema, payload)

    _validator.__name__ = f"validate_{schema.__name__}"
    return _validator
