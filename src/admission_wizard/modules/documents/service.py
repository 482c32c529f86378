"""
Documents Service Layer

File constraint checks and document completeness summaries.

Two upload paths exist: the wizard's staging area (5 MB by default) and the
standalone uploader used from the family dashboard (10 MB by default). Both
share ``check_file_constraints``; the limit is passed in by the caller.
"""

import logging
from collections.abc import Iterable

from admission_wizard.core.config import settings
from admission_wizard.core.http import ApiClient
from admission_wizard.modules.documents import repository
from admission_wizard.modules.documents.models import (
    GRADE_DOCUMENTS,
    OPTIONAL_DOCUMENTS,
    PDF,
    REQUIRED_DOCUMENTS,
    DocumentFile,
    DocumentType,
    allowed_content_types,
    format_file_size,
    is_required,
)
from admission_wizard.modules.documents.schemas import (
    DocumentResponse,
    DocumentStatusSummary,
    FileValidationResult,
)

logger = logging.getLogger(__name__)

PHOTO_RECOMMENDED_MAX_BYTES = 2 * 1024 * 1024


def check_file_constraints(
    file: DocumentFile,
    document_type: DocumentType,
    max_size: int,
) -> str | None:
    """
    Check size and MIME type of a file for a document type.

    Returns:
        A user-facing error message, or None when the file is acceptable
    """
    if file.size > max_size:
        return (
            f"El archivo {file.name} supera el tamaño máximo permitido "
            f"({format_file_size(max_size)})"
        )

    if file.content_type not in allowed_content_types(document_type):
        if document_type == DocumentType.STUDENT_PHOTO:
            return "La foto del estudiante debe ser una imagen (JPG, PNG)"
        return "Solo se permiten archivos PDF, JPG y PNG"

    return None


def validate_file_for_upload(
    file: DocumentFile,
    document_type: DocumentType,
    max_size: int | None = None,
) -> FileValidationResult:
    """Validate a file for the standalone uploader, adding non-blocking warnings."""
    error = check_file_constraints(
        file, document_type, max_size or settings.uploader_max_file_size_bytes
    )
    if error:
        return FileValidationResult(is_valid=False, error=error)

    warnings = []
    if document_type == DocumentType.STUDENT_PHOTO and file.size > PHOTO_RECOMMENDED_MAX_BYTES:
        warnings.append(
            "La foto es bastante grande. Se recomienda una imagen más pequeña "
            "para mejor rendimiento."
        )
    if document_type in GRADE_DOCUMENTS and file.content_type != PDF:
        warnings.append("Se recomienda que las notas estén en formato PDF para mejor legibilidad.")

    return FileValidationResult(is_valid=True, warnings=warnings)


def summarize_documents(document_types: Iterable[str | DocumentType]) -> DocumentStatusSummary:
    """Summarize which required and optional document types are present."""
    present = set()
    for value in document_types:
        try:
            present.add(DocumentType(value))
        except ValueError:
            logger.warning(f"Ignoring unknown document type: {value}")

    missing = [t for t in REQUIRED_DOCUMENTS if t not in present]
    return DocumentStatusSummary(
        total_required=len(REQUIRED_DOCUMENTS),
        uploaded_required=len(REQUIRED_DOCUMENTS) - len(missing),
        total_optional=len(OPTIONAL_DOCUMENTS),
        uploaded_optional=len([t for t in OPTIONAL_DOCUMENTS if t in present]),
        missing_required=missing,
        is_complete=not missing,
    )


async def get_document_status(client: ApiClient, application_id: int) -> DocumentStatusSummary:
    """Fetch the persisted documents of an application and summarize them."""
    documents = await repository.list_application_documents(client, application_id)
    return summarize_documents(doc.document_type for doc in documents)


async def upload_document(
    client: ApiClient,
    application_id: int,
    document_type: DocumentType,
    file: DocumentFile,
) -> DocumentResponse | None:
    """
    Upload a single document through the standalone uploader path.

    Raises:
        ValueError: If the file breaks the uploader constraints
        ApiError: If the backend rejects the upload
    """
    validation = validate_file_for_upload(file, document_type)
    if not validation.is_valid:
        raise ValueError(validation.error)

    logger.info(
        f"Uploading {document_type.value} for application {application_id} "
        f"({format_file_size(file.size)})"
    )
    body = await repository.upload_document(
        client, application_id, document_type, file, is_required(document_type)
    )

    document = body.get("document") if isinstance(body, dict) else None
    return DocumentResponse.model_validate(document) if document else None
