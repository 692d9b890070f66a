from typing import Any, Dict, List


class NotFoundError(Exception):
    """An entity is absent by id or composite key."""

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.detail = f"{entity} not found"


class ConflictError(Exception):
    """A write collides with an existing unique record."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class PayloadValidationError(Exception):
    """A payload failed schema, range or enum checks.

    `errors` holds one entry per offending field:
    {"field": "stops.1.order", "message": "...", "type": "..."}
    """

    def __init__(self, detail: str, errors: List[Dict[str, Any]]):
        super().__init__(detail)
        self.detail = detail
        self.errors = errors

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors]


class StoreFailure(Exception):
    """Unexpected backing-store error."""


def format_errors(raw_errors, skip_prefix=("body", "query", "path")) -> List[Dict[str, Any]]:
    """Flatten pydantic error dicts into {"field", "message", "type"} entries."""
    errors = []
    for err in raw_errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in skip_prefix:
            loc = loc[1:]
        errors.append({
            "field": ".".join(loc),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        })
    return errors
