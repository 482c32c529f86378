"""
Step Validation

Pure functions deciding whether a wizard step may be left. Nothing here
raises on bad input: problems are returned as messages for the UI.
"""

import enum
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from admission_wizard.core.rut import RUT_ERROR_MESSAGES, is_valid_rut
from admission_wizard.modules.wizard.models import (
    FIELD_LABELS,
    GRADE_AGE_RANGES,
    GRADE_LABELS,
    SCHOOL_REQUIRED_GRADES,
    STEP_OPTIONAL_FIELDS,
    STEP_REQUIRED_FIELDS,
    AdmissionPreference,
    Relation,
    SchoolApplied,
    WizardStep,
)
from admission_wizard.modules.wizard.schemas import BirthDateValidation, StepValidationResult

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[+]?[\d\s-]{8,}$")

REQUIRED_MESSAGE = "Este campo es obligatorio"
EMAIL_MESSAGE = "Ingrese un email válido"
PHONE_MESSAGE = "Ingrese un teléfono válido (mínimo 8 dígitos)"
RELATION_MESSAGE = "Seleccione un parentesco válido"

_ALL_REQUIRED = frozenset(f for fields in STEP_REQUIRED_FIELDS.values() for f in fields)


def is_empty(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def is_valid_email(value: str | None) -> bool:
    return bool(value) and EMAIL_PATTERN.match(str(value).strip()) is not None


def is_valid_phone(value: str | None) -> bool:
    return bool(value) and PHONE_PATTERN.match(str(value).strip()) is not None


def next_application_year(today: date | None = None) -> int:
    """Applications are always for the next school year."""
    return (today or date.today()).year + 1


def requires_current_school(grade: str | None) -> bool:
    """Students entering 2° Básico or above must state their current school."""
    return grade in SCHOOL_REQUIRED_GRADES


def parse_birth_date(value: Any) -> date | None:
    """Accept a ``date``/``datetime`` or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def calculate_age(birth_date: date, today: date | None = None) -> int:
    today = today or date.today()
    before_birthday = (today.month, today.day) < (birth_date.month, birth_date.day)
    return today.year - birth_date.year - int(before_birthday)


def validate_birth_date_for_grade(
    birth_date: Any,
    grade: str | None,
    today: date | None = None,
) -> BirthDateValidation:
    """
    Check the student's age against the inclusive range for the grade.

    Grades without a range are not constrained.
    """
    parsed = parse_birth_date(birth_date)
    if parsed is None:
        return BirthDateValidation(valid=False, message="La fecha de nacimiento no es válida")

    today = today or date.today()
    if parsed > today:
        return BirthDateValidation(valid=False, message="La fecha de nacimiento no puede ser futura")

    age = calculate_age(parsed, today)
    age_range = GRADE_AGE_RANGES.get(grade or "")
    if age_range is None:
        return BirthDateValidation(valid=True, age=age)

    min_age, max_age = age_range
    if min_age <= age <= max_age:
        return BirthDateValidation(valid=True, age=age)

    label = GRADE_LABELS.get(grade, grade)
    return BirthDateValidation(
        valid=False,
        age=age,
        message=(
            f"La edad del postulante ({age} años) no corresponde al curso {label}. "
            f"La edad esperada es entre {min_age} y {max_age} años."
        ),
    )


def _is_rut_field(name: str) -> bool:
    return name == "rut" or name.endswith("_rut")


def is_required_field(name: str, draft: Mapping[str, Any] | None = None) -> bool:
    if name == "current_school":
        return requires_current_school((draft or {}).get("grade"))
    return name in _ALL_REQUIRED


def validate_field(
    name: str,
    value: Any,
    draft: Mapping[str, Any] | None = None,
    today: date | None = None,
) -> str:
    """
    Validate a single field.

    Returns:
        The inline error message, or an empty string when the value is fine
    """
    if name == "application_year":
        expected = next_application_year(today)
        try:
            matches = int(value) == expected
        except (TypeError, ValueError):
            matches = False
        return "" if matches else f"El año de postulación debe ser {expected}"

    if isinstance(value, enum.Enum):
        value = value.value

    if is_empty(value):
        return REQUIRED_MESSAGE if is_required_field(name, draft) else ""

    if _is_rut_field(name) and not is_valid_rut(str(value)):
        return RUT_ERROR_MESSAGES["INVALID"]
    if name.endswith("email") and not is_valid_email(value):
        return EMAIL_MESSAGE
    if name.endswith("_phone") and not is_valid_phone(value):
        return PHONE_MESSAGE
    if name.endswith("_relation") and value not in {r.value for r in Relation}:
        return RELATION_MESSAGE
    if name == "birth_date" and parse_birth_date(value) is None:
        return "La fecha de nacimiento no es válida"
    if name == "grade" and value not in GRADE_LABELS:
        return "Seleccione un curso válido"
    if name == "school_applied" and value not in {s.value for s in SchoolApplied}:
        return "Seleccione un colegio válido"
    if name == "admission_preference" and value not in {p.value for p in AdmissionPreference}:
        return "Seleccione una preferencia de admisión válida"

    return ""


def validate_step(
    draft: Mapping[str, Any],
    step: WizardStep | int,
    today: date | None = None,
) -> StepValidationResult:
    """Validate the fields of one step against the current draft."""
    step = WizardStep(step)

    if step == WizardStep.CONFIRMATION:
        return StepValidationResult(step=step, can_advance=False)

    missing: list[str] = []
    errors: dict[str, str] = {}
    warnings: list[str] = []

    fields = STEP_REQUIRED_FIELDS[step] + STEP_OPTIONAL_FIELDS.get(step, ())
    for name in fields:
        value = draft.get(name)
        error = validate_field(name, value, draft, today)
        if not error:
            continue
        errors[name] = error
        if is_empty(value) and is_required_field(name, draft):
            missing.append(FIELD_LABELS.get(name, name))

    if step == WizardStep.STUDENT:
        birth_date, grade = draft.get("birth_date"), draft.get("grade")
        if "birth_date" not in errors and not is_empty(birth_date) and not is_empty(grade):
            age_check = validate_birth_date_for_grade(birth_date, grade, today)
            if not age_check.valid:
                errors["birth_date"] = age_check.message
                warnings.append(age_check.message)

    return StepValidationResult(
        step=step,
        can_advance=not errors,
        missing_fields=missing,
        errors=errors,
        warnings=warnings,
    )


def can_proceed_to_next_step(
    draft: Mapping[str, Any],
    step: WizardStep | int,
    today: date | None = None,
) -> bool:
    return validate_step(draft, step, today).can_advance
