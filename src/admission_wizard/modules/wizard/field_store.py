"""
Field Store

Mutable form data for one wizard instance plus per-field touched, error and
read-only state.
"""

import enum
import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from admission_wizard.modules.wizard.models import (
    CONTACT_FIELDS,
    PARENT_FOR_RELATION,
    UPPERCASE_FIELDS,
    Role,
)
from admission_wizard.modules.wizard.validators import next_application_year, validate_field

logger = logging.getLogger(__name__)


class FieldStore:
    """
    The ApplicationDraft and its UI state.

    Keys are snake_case field names (``first_name``, ``parent1_rut``, ...).
    ``application_year`` is pinned to next year no matter what is written.
    """

    def __init__(self, data: Mapping[str, Any] | None = None, today: date | None = None):
        self.today = today
        self.data: dict[str, Any] = {}
        self.touched: set[str] = set()
        self.errors: dict[str, str] = {}
        self.read_only: set[str] = set()
        self.reset(data)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)

    def snapshot(self) -> dict[str, Any]:
        return dict(self.data)

    def is_read_only(self, name: str) -> bool:
        return name in self.read_only

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def _normalize(self, name: str, value: Any) -> Any:
        if name == "application_year":
            return next_application_year(self.today)
        if isinstance(value, enum.Enum):
            value = value.value
        if name in UPPERCASE_FIELDS and isinstance(value, str):
            value = value.upper()
        return value

    def _revalidate(self, name: str) -> None:
        if name in self.touched:
            self.errors[name] = validate_field(name, self.data.get(name), self.data, self.today)

    def update_field(self, name: str, value: Any) -> bool:
        """
        Write a field from user input.

        Returns:
            False when the field is read-only and the write was ignored
        """
        if name in self.read_only:
            logger.warning(f"Ignoring write to read-only field {name}")
            return False

        self.data[name] = self._normalize(name, value)
        self._revalidate(name)
        return True

    def set_derived(self, name: str, value: Any) -> None:
        """Write a field computed by the engine, bypassing the read-only guard."""
        self.data[name] = self._normalize(name, value)
        self._revalidate(name)

    def touch_field(self, name: str) -> str:
        """Mark a field as touched and return its inline error (empty when valid)."""
        self.touched.add(name)
        self.errors[name] = validate_field(name, self.data.get(name), self.data, self.today)
        return self.errors[name]

    def mark_read_only(self, names: Iterable[str]) -> None:
        self.read_only.update(names)

    def clear_read_only(self, names: Iterable[str]) -> None:
        self.read_only.difference_update(names)

    def reset(self, data: Mapping[str, Any] | None = None) -> None:
        """Discard all state, optionally starting over from ``data``."""
        self.data = {}
        self.touched = set()
        self.errors = {}
        self.read_only = set()
        for name, value in (data or {}).items():
            self.data[name] = self._normalize(name, value)
        self.data["application_year"] = next_application_year(self.today)

    # ------------------------------------------------------------------
    # Pre-population
    # ------------------------------------------------------------------

    @classmethod
    def from_application(
        cls, application: Mapping[str, Any], today: date | None = None
    ) -> "FieldStore":
        """
        Build a store from an application as returned by the backend
        (nested ``student``/``father``/``mother``/``supporter``/``guardian``).
        """
        student = application.get("student") or {}
        data: dict[str, Any] = {
            "first_name": student.get("firstName"),
            "paternal_last_name": student.get("paternalLastName") or student.get("lastName"),
            "maternal_last_name": student.get("maternalLastName"),
            "rut": student.get("rut"),
            "birth_date": student.get("birthDate"),
            "grade": student.get("gradeApplied") or student.get("grade"),
            "school_applied": (
                application.get("schoolApplied")
                or student.get("targetSchool")
                or student.get("schoolApplied")
            ),
            "admission_preference": student.get("admissionPreference"),
            "student_email": student.get("email"),
            "current_school": student.get("currentSchool"),
            "additional_notes": student.get("additionalNotes"),
            "student_address_street": student.get("addressStreet") or student.get("address"),
            "student_address_number": student.get("addressNumber"),
            "student_address_commune": student.get("addressCommune"),
            "student_address_apartment": student.get("addressApartment"),
        }

        for prefix, key in (("parent1", "father"), ("parent2", "mother")):
            parent = application.get(key) or {}
            data[f"{prefix}_name"] = parent.get("fullName")
            data[f"{prefix}_rut"] = parent.get("rut")
            data[f"{prefix}_email"] = parent.get("email")
            data[f"{prefix}_phone"] = parent.get("phone")
            data[f"{prefix}_address"] = parent.get("address")
            data[f"{prefix}_profession"] = parent.get("profession")

        for role in Role:
            person = application.get(role.value) or {}
            data[f"{role.value}_name"] = person.get("fullName")
            data[f"{role.value}_rut"] = person.get("rut")
            data[f"{role.value}_email"] = person.get("email")
            data[f"{role.value}_phone"] = person.get("phone")
            data[f"{role.value}_relation"] = person.get("relationship")

        store = cls({k: v for k, v in data.items() if v is not None}, today=today)

        # Contact data that was copied from a parent stays locked
        for role in Role:
            relation = store.get(f"{role.value}_relation")
            if relation in {r.value for r in PARENT_FOR_RELATION}:
                store.mark_read_only(f"{role.value}_{f}" for f in CONTACT_FIELDS)

        return store

    def prefill_from_profile(self, profile: Mapping[str, Any]) -> list[str]:
        """
        Fill empty guardian contact fields from the signed-in user's profile.

        Returns:
            Names of the fields that were filled
        """
        full_name = " ".join(
            part for part in (profile.get("firstName"), profile.get("lastName")) if part
        )
        candidates = {
            "guardian_name": full_name,
            "guardian_email": profile.get("email"),
            "guardian_phone": profile.get("phone"),
            "guardian_rut": profile.get("rut"),
        }

        filled = []
        for name, value in candidates.items():
            if value and not self.data.get(name) and name not in self.read_only:
                self.update_field(name, value)
                filled.append(name)

        if filled:
            logger.info(f"Prefilled {len(filled)} guardian field(s) from profile")
        return filled

