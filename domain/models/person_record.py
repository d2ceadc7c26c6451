from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from domain.models.record_shape import SHAPE_FIELDS, RecordShape

NonEmpty = Annotated[str, Field(min_length=1)]


class _PersonRecordBase(BaseModel):
    """Shared config: camelCase on the wire, immutable once built."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        frozen=True,
        extra="forbid",
    )

    def to_dict(self) -> dict:
        """Serialize with camelCase keys; fields outside the shape never appear."""
        return self.model_dump(by_alias=True, mode="json")


class CompleteEmployeeRecord(_PersonRecordBase):
    source_format: Literal["complete_employee"] = "complete_employee"
    first_name: NonEmpty
    last_name: NonEmpty
    employee_id: NonEmpty
    person_id: NonEmpty


class BasicNameRecord(_PersonRecordBase):
    source_format: Literal["basic_name"] = "basic_name"
    first_name: NonEmpty
    last_name: NonEmpty


class EmployeeIdOnlyRecord(_PersonRecordBase):
    source_format: Literal["employee_id_only"] = "employee_id_only"
    employee_id: NonEmpty


class PersonIdOnlyRecord(_PersonRecordBase):
    source_format: Literal["person_id_only"] = "person_id_only"
    person_id: NonEmpty


PersonRecord = Annotated[
    Union[
        CompleteEmployeeRecord,
        BasicNameRecord,
        EmployeeIdOnlyRecord,
        PersonIdOnlyRecord,
    ],
    Field(discriminator="source_format"),
]

RECORD_TYPES: dict[RecordShape, type[_PersonRecordBase]] = {
    RecordShape.COMPLETE_EMPLOYEE: CompleteEmployeeRecord,
    RecordShape.BASIC_NAME: BasicNameRecord,
    RecordShape.EMPLOYEE_ID_ONLY: EmployeeIdOnlyRecord,
    RecordShape.PERSON_ID_ONLY: PersonIdOnlyRecord,
}

_PERSON_RECORD_ADAPTER: TypeAdapter = TypeAdapter(PersonRecord)


def build_record(shape: RecordShape, values: dict[str, str]) -> _PersonRecordBase:
    """Build the record for ``shape`` from canonical-field values.

    ``values`` is keyed by canonical header field (``firstName``,
    ``employeeNumber`` ...); the shape's field map decides which attribute
    each one lands in.
    """
    shape = RecordShape(shape)
    payload = {
        attr: values[field]
        for field, attr in SHAPE_FIELDS[shape].items()
    }
    return RECORD_TYPES[shape](**payload)


def parse_record(data: dict) -> _PersonRecordBase:
    """Hydrate a record from its serialized (camelCase) form."""
    return _PERSON_RECORD_ADAPTER.validate_python(data)
