from __future__ import annotations

from enum import StrEnum


class RecordShape(StrEnum):
    """Canonical layouts an uploaded person list can be classified as.

    Declaration order matters: it is the last tie-break when two shapes with
    the same number of required fields qualify for the same language.
    """

    COMPLETE_EMPLOYEE = "complete_employee"
    BASIC_NAME = "basic_name"
    EMPLOYEE_ID_ONLY = "employee_id_only"
    PERSON_ID_ONLY = "person_id_only"


# Canonical header field -> record attribute, per shape. Key order is the
# order fields are validated and reported in.
SHAPE_FIELDS: dict[RecordShape, dict[str, str]] = {
    RecordShape.COMPLETE_EMPLOYEE: {
        "id": "person_id",
        "firstName": "first_name",
        "lastName": "last_name",
        "employeeNumber": "employee_id",
    },
    RecordShape.BASIC_NAME: {
        "firstName": "first_name",
        "lastName": "last_name",
    },
    RecordShape.EMPLOYEE_ID_ONLY: {
        "workerId": "employee_id",
    },
    RecordShape.PERSON_ID_ONLY: {
        "personIdNumber": "person_id",
    },
}

CANONICAL_FIELDS: tuple[str, ...] = (
    "id",
    "firstName",
    "lastName",
    "employeeNumber",
    "workerId",
    "personIdNumber",
)


def required_fields(shape: RecordShape) -> tuple[str, ...]:
    """Return the canonical fields ``shape`` needs, in validation order."""
    return tuple(SHAPE_FIELDS[RecordShape(shape)])


def richer_shapes(shape: RecordShape) -> list[RecordShape]:
    """Shapes whose required set strictly contains ``shape``'s, smallest first."""
    base = set(required_fields(shape))
    richer = [
        other
        for other in RecordShape
        if other != shape and base < set(required_fields(other))
    ]
    return sorted(richer, key=lambda s: len(SHAPE_FIELDS[s]))
