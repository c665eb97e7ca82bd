"""
Chambre API: Payload Validation
=================================

What:  Turns a raw JSON body into a typed request model, or a list of field
       errors, before anything reaches the store.
How:   validate_room_payload() / validate_entity_payload() run the Pydantic
       request models and return a ValidationResult: either Valid(data) or
       Invalid(errors). They never raise for bad input.
Who:   Called by RoomService and EntityService, which turn Invalid into a
       ValidationError (HTTP 400).

Rules checked here (store-independent):
    - body is a JSON object
    - required fields present on create
    - type in {single, double, suite}
    - price >= 0, capacity >= 1, numeric/boolean/list types
    - on update, a present key for a required field may not be null
Uniqueness of roomNumber needs the store and is checked by RoomService.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, List, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from chambre.schemas.entity import EntityCreate
from chambre.schemas.room import RoomCreate, RoomUpdate

ModelT = TypeVar("ModelT", bound=BaseModel)

# Fields that exist on every stored room; PUT may change them but not clear them
NON_NULLABLE_ROOM_FIELDS = (
    "room_number",
    "type",
    "price",
    "is_available",
    "amenities",
    "capacity",
    "floor",
)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class Valid(Generic[ModelT]):
    data: ModelT

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return False


ValidationResult = Union[Valid[ModelT], Invalid]


def _wire_name(model: Type[BaseModel], name: Any) -> str:
    """Maps a Pydantic error location back to the camelCase field name clients send."""
    name = str(name)
    info = model.model_fields.get(name)
    if info is not None and info.alias:
        return info.alias
    return name


def _parse(model: Type[ModelT], payload: Any) -> ValidationResult:
    if not isinstance(payload, dict):
        return Invalid([FieldError("body", "Request body must be a JSON object")])

    try:
        return Valid(model.model_validate(payload))
    except PydanticValidationError as e:
        errors = []
        for err in e.errors():
            loc = err.get("loc") or ("body",)
            errors.append(FieldError(_wire_name(model, loc[0]), err.get("msg", "Invalid value")))
        return Invalid(errors)


def validate_room_payload(payload: Any, partial: bool = False) -> ValidationResult:
    """
    Validate a room body for create (partial=False) or update (partial=True).

    Returns:
        Valid(RoomCreate) / Valid(RoomUpdate) on success, Invalid(errors) otherwise.

    Example:
        >>> validate_room_payload({"type": "penthouse"}).ok
        False
    """
    if not partial:
        return _parse(RoomCreate, payload)

    result = _parse(RoomUpdate, payload)
    if isinstance(result, Invalid):
        return result

    update: RoomUpdate = result.data
    cleared = [
        FieldError(_wire_name(RoomUpdate, name), "Field cannot be null")
        for name in NON_NULLABLE_ROOM_FIELDS
        if name in update.model_fields_set and getattr(update, name) is None
    ]
    if cleared:
        return Invalid(cleared)
    return result


def validate_entity_payload(payload: Any) -> ValidationResult:
    return _parse(EntityCreate, payload)
