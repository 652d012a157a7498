"""Request models for the memory API.

`validate(body, Model)` returns ``model_dump(exclude_unset=True)``: only the
keys the client actually sent, so "omitted" and "sent as null" stay
distinguishable all the way down to the operations.
"""

from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator

from app.errors import InputInvalidError


def _integral(value: Any) -> Any:
    # JSON has one number type; 3.0 is an integer, 3.5 is not
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


Integer = Annotated[int, BeforeValidator(_integral)]
NonNegativeInt = Annotated[int, BeforeValidator(_integral), Field(ge=0)]
PositiveInt = Annotated[int, BeforeValidator(_integral), Field(gt=0)]
NonNegativeNumber = Annotated[float, Field(ge=0, allow_inf_nan=False)]

SessionStatus = Literal['in_progress', 'completed', 'abandoned']


def _not_null(value: Any) -> Any:
    if value is None:
        raise ValueError('may not be null')
    return value


class RequestModel(BaseModel):
    # strict: no "5" -> 5 or true -> 1 coercion
    model_config = ConfigDict(strict=True, allow_inf_nan=False)


class CreateGameRequest(RequestModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    game_type: str = Field(min_length=1)
    difficulty_levels: Any = None
    is_active: Optional[bool] = None

    @field_validator('is_active')
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


class UpdateGameRequest(RequestModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    game_type: Optional[str] = None
    difficulty_levels: Any = None
    is_active: Optional[bool] = None

    @field_validator('name', 'game_type', 'is_active')
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


class StartSessionRequest(RequestModel):
    game_id: Integer
    difficulty: Optional[str] = None
    meta: Any = None

    @field_validator('difficulty')
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


class CompleteSessionRequest(RequestModel):
    total_score: Optional[NonNegativeInt] = None
    difficulty: Optional[str] = None
    status: Optional[SessionStatus] = None
    meta: Any = None

    @field_validator('total_score', 'difficulty', 'status')
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


class RecordRoundRequest(RequestModel):
    round_number: Optional[PositiveInt] = None
    prompt: Any
    response: Any = None
    is_correct: Optional[bool] = None
    score: Optional[NonNegativeInt] = None

    @field_validator('round_number', 'prompt', 'is_correct', 'score')
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


class UpsertPerformanceRequest(RequestModel):
    total_sessions: Optional[NonNegativeInt] = None
    average_score: Optional[NonNegativeNumber] = None
    best_score: Optional[NonNegativeNumber] = None
    difficulty_preference: Optional[str] = None

    @field_validator('total_sessions', 'average_score', 'best_score', 'difficulty_preference')
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


def validate(body: Any, model: type[RequestModel]) -> dict:
    if body is None:
        body = {}
    try:
        parsed = model.model_validate(body)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = '.'.join(str(part) for part in error['loc']) or None
        message = f"{field} {error['msg']}" if field else error['msg']
        raise InputInvalidError(message, field=field) from exc
    return parsed.model_dump(exclude_unset=True)


def parse_flag(raw: Optional[str]) -> bool:
    """Query-string boolean: true/1/yes/on, case-insensitive."""
    if raw is None:
        return False
    return raw.strip().lower() in ('true', '1', 'yes', 'on')
