from pydantic import BaseModel

from ...schemas.operation import OperationResponse
from ...schemas.projection import SortSpec
from ...services.admin import OperationResult


def to_response(result: OperationResult, schema: type[BaseModel]) -> OperationResponse:
    record = None
    if result.record is not None:
        record = schema.model_validate(result.record, from_attributes=True)
    return OperationResponse[schema](
        ok=result.ok,
        record=record,
        notification=result.notification,
    )


def sort_spec(sort_field: str | None, sort_direction: str) -> SortSpec | None:
    if not sort_field:
        return None
    return SortSpec(field=sort_field, direction=sort_direction)
