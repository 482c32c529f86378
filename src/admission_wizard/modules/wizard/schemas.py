"""
Wizard Schemas

Pydantic models for validation results, backend payloads and submission
outcomes.

Payload models serialize with camelCase aliases because that is what the
backend expects; build them with snake_case names.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from admission_wizard.modules.documents.models import DocumentType
from admission_wizard.modules.wizard.models import WizardStep

# ============================================
# Validation
# ============================================


class BirthDateValidation(BaseModel):
    """Result of checking a birth date against the grade age range."""

    valid: bool
    message: str | None = None
    age: int | None = None


class StepValidationResult(BaseModel):
    """
    Outcome of validating one wizard step.

    ``missing_fields`` lists labels of empty required fields in display order
    (for the warning banner); ``errors`` maps field names to inline messages,
    including format problems on filled-in fields.
    """

    step: WizardStep
    can_advance: bool
    missing_fields: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)


class StagingResult(BaseModel):
    """Outcome of staging one file."""

    accepted: bool
    document_type: DocumentType
    replaced: bool = False
    error: str | None = None


# ============================================
# Backend payloads
# ============================================


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApplicationCreateRequest(CamelModel):
    """Flat body for ``POST /applications``."""

    # Student
    first_name: str
    paternal_last_name: str
    maternal_last_name: str
    last_name: str
    rut: str
    birth_date: str
    student_email: str | None = None
    student_address: str
    grade: str
    school_applied: str
    admission_preference: str | None = None
    current_school: str | None = None
    additional_notes: str | None = None
    application_year: int

    # Father
    parent1_name: str
    parent1_rut: str
    parent1_email: str
    parent1_phone: str
    parent1_address: str
    parent1_profession: str

    # Mother
    parent2_name: str
    parent2_rut: str
    parent2_email: str
    parent2_phone: str
    parent2_address: str
    parent2_profession: str

    # Supporter
    supporter_name: str
    supporter_rut: str
    supporter_email: str
    supporter_phone: str
    supporter_relation: str

    # Guardian
    guardian_name: str
    guardian_rut: str
    guardian_email: str
    guardian_phone: str
    guardian_relation: str


class StudentInfo(CamelModel):
    first_name: str
    paternal_last_name: str
    maternal_last_name: str
    last_name: str
    rut: str
    birth_date: str
    email: str | None = None
    address: str
    address_street: str
    address_number: str
    address_commune: str
    address_apartment: str | None = None
    grade_applied: str
    current_school: str | None = None
    additional_notes: str | None = None
    admission_preference: str | None = None
    application_year: int


class ParentInfo(CamelModel):
    full_name: str
    rut: str
    email: str
    phone: str
    address: str
    profession: str


class ContactPersonInfo(CamelModel):
    full_name: str
    rut: str
    email: str
    phone: str
    relationship: str


class ApplicationUpdateRequest(CamelModel):
    """Nested body for ``PUT /applications/{id}``."""

    student: StudentInfo
    father: ParentInfo
    mother: ParentInfo
    supporter: ContactPersonInfo
    guardian: ContactPersonInfo
    school_applied: str


class ApplicationCreatedResponse(CamelModel):
    """Body returned by ``POST /applications``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: int
    student_name: str | None = None
    grade: str | None = None
    status: str | None = None
    submission_date: str | None = None


# ============================================
# Submission outcome
# ============================================


class ErrorReport(BaseModel):
    """What the error modal shows: a title, a summary and remediation steps."""

    title: str
    message: str
    details: list[str] = Field(default_factory=list)


class FailedUpload(BaseModel):
    document_type: DocumentType
    file_name: str
    message: str


class SubmissionResult(BaseModel):
    """Outcome of the two-phase submission."""

    success: bool
    application_id: int | None = None
    is_update: bool = False
    uploaded_documents: list[DocumentType] = Field(default_factory=list)
    failed_documents: list[FailedUpload] = Field(default_factory=list)
    error: ErrorReport | None = None

    @property
    def total_documents(self) -> int:
        return len(self.uploaded_documents) + len(self.failed_documents)

    @property
    def is_partial(self) -> bool:
        return self.success and bool(self.failed_documents)
