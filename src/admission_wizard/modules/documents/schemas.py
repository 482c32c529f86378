"""
Document Schemas

Pydantic models for document responses from the backend and for the
client-side status summary.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from admission_wizard.modules.documents.models import DocumentType


class DocumentResponse(BaseModel):
    """A document already persisted by the backend."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: int
    file_name: str | None = None
    original_name: str | None = None
    file_size: int | None = None
    content_type: str | None = None
    document_type: str
    is_required: bool = False
    created_at: str | None = None
    application_id: int | None = None


class FileValidationResult(BaseModel):
    """Outcome of checking a file against upload constraints."""

    is_valid: bool
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)


class DocumentStatusSummary(BaseModel):
    """How far an application is from having every required document."""

    total_required: int
    uploaded_required: int
    total_optional: int
    uploaded_optional: int
    missing_required: list[DocumentType]
    is_complete: bool
