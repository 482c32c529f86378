"""
Wizard Payload Helpers

Turn the flat draft into the two request bodies the backend accepts. The
create endpoint takes every field at top level (parent-prefixed); the update
endpoint takes nested per-person objects. They are not interchangeable.
"""

from collections.abc import Mapping
from typing import Any

from admission_wizard.modules.wizard.schemas import (
    ApplicationCreateRequest,
    ApplicationUpdateRequest,
    ContactPersonInfo,
    ParentInfo,
    StudentInfo,
)
from admission_wizard.modules.wizard.validators import next_application_year


def _text(draft: Mapping[str, Any], name: str) -> str:
    value = draft.get(name)
    return "" if value is None else str(value).strip()


def _optional(draft: Mapping[str, Any], name: str) -> str | None:
    return _text(draft, name) or None


def compose_student_address(draft: Mapping[str, Any]) -> str:
    """
    Join the decomposed address into one line.

    Example: ``AV. LOS LEONES 1234, Depto 5B, PROVIDENCIA``
    """
    street_line = " ".join(
        part
        for part in (_text(draft, "student_address_street"), _text(draft, "student_address_number"))
        if part
    )
    apartment = _text(draft, "student_address_apartment")
    parts = [street_line, f"Depto {apartment}" if apartment else "", _text(draft, "student_address_commune")]
    return ", ".join(part for part in parts if part)


def student_last_name(draft: Mapping[str, Any]) -> str:
    return " ".join(
        part
        for part in (_text(draft, "paternal_last_name"), _text(draft, "maternal_last_name"))
        if part
    )


def _application_year(draft: Mapping[str, Any]) -> int:
    try:
        return int(draft.get("application_year"))
    except (TypeError, ValueError):
        return next_application_year()


def build_create_payload(draft: Mapping[str, Any]) -> ApplicationCreateRequest:
    """Flat payload for creating an application."""
    fields: dict[str, Any] = {
        "first_name": _text(draft, "first_name"),
        "paternal_last_name": _text(draft, "paternal_last_name"),
        "maternal_last_name": _text(draft, "maternal_last_name"),
        "last_name": student_last_name(draft),
        "rut": _text(draft, "rut"),
        "birth_date": _text(draft, "birth_date"),
        "student_email": _optional(draft, "student_email"),
        "student_address": compose_student_address(draft),
        "grade": _text(draft, "grade"),
        "school_applied": _text(draft, "school_applied"),
        "admission_preference": _optional(draft, "admission_preference"),
        "current_school": _optional(draft, "current_school"),
        "additional_notes": _optional(draft, "additional_notes"),
        "application_year": _application_year(draft),
    }
    for prefix in ("parent1", "parent2"):
        for name in ("name", "rut", "email", "phone", "address", "profession"):
            fields[f"{prefix}_{name}"] = _text(draft, f"{prefix}_{name}")
    for prefix in ("supporter", "guardian"):
        for name in ("name", "rut", "email", "phone", "relation"):
            fields[f"{prefix}_{name}"] = _text(draft, f"{prefix}_{name}")

    return ApplicationCreateRequest(**fields)


def _parent(draft: Mapping[str, Any], prefix: str) -> ParentInfo:
    return ParentInfo(
        full_name=_text(draft, f"{prefix}_name"),
        rut=_text(draft, f"{prefix}_rut"),
        email=_text(draft, f"{prefix}_email"),
        phone=_text(draft, f"{prefix}_phone"),
        address=_text(draft, f"{prefix}_address"),
        profession=_text(draft, f"{prefix}_profession"),
    )


def _contact_person(draft: Mapping[str, Any], prefix: str) -> ContactPersonInfo:
    return ContactPersonInfo(
        full_name=_text(draft, f"{prefix}_name"),
        rut=_text(draft, f"{prefix}_rut"),
        email=_text(draft, f"{prefix}_email"),
        phone=_text(draft, f"{prefix}_phone"),
        relationship=_text(draft, f"{prefix}_relation"),
    )


def build_update_payload(draft: Mapping[str, Any]) -> ApplicationUpdateRequest:
    """Nested payload for updating an existing application."""
    student = StudentInfo(
        first_name=_text(draft, "first_name"),
        paternal_last_name=_text(draft, "paternal_last_name"),
        maternal_last_name=_text(draft, "maternal_last_name"),
        last_name=student_last_name(draft),
        rut=_text(draft, "rut"),
        birth_date=_text(draft, "birth_date"),
        email=_optional(draft, "student_email"),
        address=compose_student_address(draft),
        address_street=_text(draft, "student_address_street"),
        address_number=_text(draft, "student_address_number"),
        address_commune=_text(draft, "student_address_commune"),
        address_apartment=_optional(draft, "student_address_apartment"),
        grade_applied=_text(draft, "grade"),
        current_school=_optional(draft, "current_school"),
        additional_notes=_optional(draft, "additional_notes"),
        admission_preference=_optional(draft, "admission_preference"),
        application_year=_application_year(draft),
    )
    return ApplicationUpdateRequest(
        student=student,
        father=_parent(draft, "parent1"),
        mother=_parent(draft, "parent2"),
        supporter=_contact_person(draft, "supporter"),
        guardian=_contact_person(draft, "guardian"),
        school_applied=_text(draft, "school_applied"),
    )


def serialize(payload: ApplicationCreateRequest | ApplicationUpdateRequest) -> dict[str, Any]:
    """JSON-ready body with the backend's camelCase keys."""
    return payload.model_dump(mode="json", by_alias=True)
