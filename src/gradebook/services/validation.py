from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from gradebook.config.settings import settings
from gradebook.core.components import ComponentMark, ComponentType
from gradebook.core.errors import InvalidInput
from gradebook.core.grades import MarkInput


class _Payload(BaseModel):
    # accept both snake_case and the camelCase keys sent by the web client
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MarkPayload(_Payload):
    theory_marks_obtained: float = Field(default=0, ge=0)
    theory_full_marks: Optional[float] = Field(default=None, ge=0)
    practical_marks_obtained: Optional[float] = Field(default=None, ge=0)
    practical_full_marks: Optional[float] = Field(default=None, ge=0)
    has_practical: bool = False
    is_absent: bool = False
    credit_hours: Optional[float] = Field(default=None, ge=0)


class SubjectEntryPayload(MarkPayload):
    subject_id: Union[int, str]
    subject_name: str = ""
    subject_code: str = ""
    theory_subject_code: Optional[str] = None
    practical_subject_code: Optional[str] = None
    theory_credit_hours: float = Field(default=0, ge=0)
    practical_credit_hours: float = Field(default=0, ge=0)


class ComponentMarkPayload(_Payload):
    component_id: Union[int, str]
    type: ComponentType
    marks_obtained: float = Field(default=0, ge=0)
    full_marks: float = Field(ge=0)
    pass_marks: float = Field(default=0, ge=0)
    credit_hours: float = Field(default=0, ge=0)


def _validate(model: type, data: Any):
    if data is None:
        raise InvalidInput(f"{model.__name__} data is required, got None")
    if isinstance(data, model):
        return data
    if not isinstance(data, Mapping):
        raise InvalidInput(f"{model.__name__} expects a mapping, got {type(data).__name__}")
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise InvalidInput(f"Invalid {model.__name__}: {exc}") from exc


def mark_input_from_payload(
    payload: MarkPayload,
    default_credit_hours: Optional[float] = None,
) -> MarkInput:
    credit_hours = payload.credit_hours or default_credit_hours or settings.default_credit_hours
    theory_full = payload.theory_full_marks or settings.default_theory_full_marks

    if not payload.has_practical:
        return MarkInput(
            theory_marks_obtained=payload.theory_marks_obtained,
            theory_full_marks=theory_full,
            has_practical=False,
            is_absent=payload.is_absent,
            credit_hours=credit_hours,
        )

    return MarkInput(
        theory_marks_obtained=payload.theory_marks_obtained,
        theory_full_marks=theory_full,
        practical_marks_obtained=payload.practical_marks_obtained or 0.0,
        practical_full_marks=payload.practical_full_marks or 0.0,
        has_practical=True,
        is_absent=payload.is_absent,
        credit_hours=credit_hours,
    )


def parse_mark_input(data: Union[Mapping[str, Any], MarkPayload]) -> MarkInput:
    return mark_input_from_payload(_validate(MarkPayload, data))


def parse_subject_entry(data: Union[Mapping[str, Any], SubjectEntryPayload]) -> SubjectEntryPayload:
    return _validate(SubjectEntryPayload, data)


def parse_component_marks(items: Iterable[Any]) -> List[ComponentMark]:
    if items is None:
        raise InvalidInput("component marks are required, got None")

    marks: List[ComponentMark] = []
    for item in items:
        payload = _validate(ComponentMarkPayload, item)
        marks.append(
            ComponentMark(
                component_id=str(payload.component_id),
                type=payload.type,
                marks_obtained=payload.marks_obtained,
                full_marks=payload.full_marks,
                pass_marks=payload.pass_marks,
                credit_hours=payload.credit_hours,
            )
        )
    return marks
