from typing import Any, Mapping, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from exceptions import PayloadValidationError, format_errors

M = TypeVar("M", bound=BaseModel)


def parse_payload(schema: Type[M], payload: Union[M, Mapping[str, Any]], detail: str) -> M:
    """Return `payload` as a validated `schema` instance.

    Already-validated models pass through; mappings are validated and any
    failure is raised as PayloadValidationError with one entry per field.
    """
    if isinstance(payload, schema):
        return payload
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise PayloadValidationError(detail, format_errors(exc.errors())) from exc
