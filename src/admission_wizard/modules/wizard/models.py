"""
Wizard Models

Enums and static tables describing the application wizard: steps, family
relations, grades and the per-field metadata used by validation.
"""

import enum


class WizardStep(enum.IntEnum):
    """Ordered stages of the application wizard."""

    STUDENT = 0
    PARENTS = 1
    SUPPORTER = 2
    GUARDIAN = 3
    DOCUMENTS = 4
    CONFIRMATION = 5


STEP_TITLES: dict[WizardStep, str] = {
    WizardStep.STUDENT: "Datos del Postulante",
    WizardStep.PARENTS: "Datos de los Padres",
    WizardStep.SUPPORTER: "Datos del Sostenedor",
    WizardStep.GUARDIAN: "Datos del Apoderado",
    WizardStep.DOCUMENTS: "Documentación",
    WizardStep.CONFIRMATION: "Confirmación",
}


class Role(str, enum.Enum):
    """People whose contact data may be copied from a parent."""

    SUPPORTER = "supporter"
    GUARDIAN = "guardian"


class Relation(str, enum.Enum):
    """Relationship of the supporter/guardian to the student."""

    PADRE = "padre"
    MADRE = "madre"
    ABUELO = "abuelo"
    TIO = "tio"
    HERMANO = "hermano"
    TUTOR = "tutor"
    OTRO = "otro"


# Relation -> parent prefix whose contact data is copied
PARENT_FOR_RELATION: dict[Relation, str] = {
    Relation.PADRE: "parent1",
    Relation.MADRE: "parent2",
}


class SchoolApplied(str, enum.Enum):
    MONTE_TABOR = "MONTE_TABOR"
    NAZARET = "NAZARET"


class AdmissionPreference(str, enum.Enum):
    """Special admission categories the family may declare."""

    NINGUNA = "NINGUNA"
    HERMANOS_EN_COLEGIO = "HERMANOS_EN_COLEGIO"
    HIJO_FUNCIONARIO = "HIJO_FUNCIONARIO"
    HIJO_EXALUMNO = "HIJO_EXALUMNO"
    ESTUDIANTE_INCLUSION = "ESTUDIANTE_INCLUSION"


GRADE_LABELS: dict[str, str] = {
    "playgroup": "Playgroup",
    "prekinder": "Pre-Kínder",
    "kinder": "Kínder",
    "1basico": "1° Básico",
    "2basico": "2° Básico",
    "3basico": "3° Básico",
    "4basico": "4° Básico",
    "5basico": "5° Básico",
    "6basico": "6° Básico",
    "7basico": "7° Básico",
    "8basico": "8° Básico",
    "1medio": "I Medio",
    "2medio": "II Medio",
    "3medio": "III Medio",
    "4medio": "IV Medio",
}

# Inclusive (min_age, max_age) in years per grade
GRADE_AGE_RANGES: dict[str, tuple[int, int]] = {
    "playgroup": (2, 3),
    "prekinder": (3, 5),
    "kinder": (4, 6),
    "1basico": (5, 7),
    "2basico": (6, 8),
    "3basico": (7, 9),
    "4basico": (8, 10),
    "5basico": (9, 11),
    "6basico": (10, 12),
    "7basico": (11, 13),
    "8basico": (12, 14),
    "1medio": (13, 15),
    "2medio": (14, 16),
    "3medio": (15, 17),
    "4medio": (16, 18),
}

# Grades where the student must already be enrolled somewhere
SCHOOL_REQUIRED_GRADES = frozenset(
    {
        "2basico",
        "3basico",
        "4basico",
        "5basico",
        "6basico",
        "7basico",
        "8basico",
        "1medio",
        "2medio",
        "3medio",
        "4medio",
    }
)

# Fields stored uppercase
UPPERCASE_FIELDS = frozenset(
    {
        "first_name",
        "paternal_last_name",
        "maternal_last_name",
        "student_address_street",
        "student_address_commune",
        "current_school",
        "parent1_name",
        "parent1_address",
        "parent1_profession",
        "parent2_name",
        "parent2_address",
        "parent2_profession",
        "supporter_name",
        "guardian_name",
    }
)

# Contact fields copied from a parent when the relation is padre/madre
CONTACT_FIELDS = ("name", "email", "phone", "rut")

FIELD_LABELS: dict[str, str] = {
    # Student
    "first_name": "Nombres",
    "paternal_last_name": "Apellido Paterno",
    "maternal_last_name": "Apellido Materno",
    "rut": "RUT del Postulante",
    "birth_date": "Fecha de Nacimiento",
    "grade": "Curso al que postula",
    "school_applied": "Colegio al que postula",
    "admission_preference": "Preferencia de Admisión",
    "student_address_street": "Calle",
    "student_address_number": "Número",
    "student_address_commune": "Comuna",
    "student_address_apartment": "Departamento",
    "student_email": "Email del Postulante",
    "current_school": "Colegio Actual",
    "application_year": "Año de Postulación",
    "additional_notes": "Observaciones",
    # Parents
    "parent1_name": "Nombre del Padre",
    "parent1_rut": "RUT del Padre",
    "parent1_email": "Email del Padre",
    "parent1_phone": "Teléfono del Padre",
    "parent1_address": "Dirección del Padre",
    "parent1_profession": "Profesión del Padre",
    "parent2_name": "Nombre de la Madre",
    "parent2_rut": "RUT de la Madre",
    "parent2_email": "Email de la Madre",
    "parent2_phone": "Teléfono de la Madre",
    "parent2_address": "Dirección de la Madre",
    "parent2_profession": "Profesión de la Madre",
    # Supporter
    "supporter_relation": "Parentesco del Sostenedor",
    "supporter_name": "Nombre del Sostenedor",
    "supporter_rut": "RUT del Sostenedor",
    "supporter_email": "Email del Sostenedor",
    "supporter_phone": "Teléfono del Sostenedor",
    # Guardian
    "guardian_relation": "Parentesco del Apoderado",
    "guardian_name": "Nombre del Apoderado",
    "guardian_rut": "RUT del Apoderado",
    "guardian_email": "Email del Apoderado",
    "guardian_phone": "Teléfono del Apoderado",
}

# Required fields per step, in display order
STEP_REQUIRED_FIELDS: dict[WizardStep, tuple[str, ...]] = {
    WizardStep.STUDENT: (
        "first_name",
        "paternal_last_name",
        "maternal_last_name",
        "rut",
        "birth_date",
        "grade",
        "school_applied",
        "admission_preference",
        "student_address_street",
        "student_address_number",
        "student_address_commune",
    ),
    WizardStep.PARENTS: tuple(
        f"{prefix}_{name}"
        for prefix in ("parent1", "parent2")
        for name in ("name", "rut", "email", "phone", "address", "profession")
    ),
    WizardStep.SUPPORTER: (
        "supporter_relation",
        "supporter_name",
        "supporter_rut",
        "supporter_email",
        "supporter_phone",
    ),
    WizardStep.GUARDIAN: (
        "guardian_relation",
        "guardian_name",
        "guardian_rut",
        "guardian_email",
        "guardian_phone",
    ),
    WizardStep.DOCUMENTS: (),
    WizardStep.CONFIRMATION: (),
}

# Optional fields still checked for format when filled in
STEP_OPTIONAL_FIELDS: dict[WizardStep, tuple[str, ...]] = {
    WizardStep.STUDENT: ("student_email", "current_school", "application_year"),
}
