"""
Documents Repository

REST calls for application documents. Only transport and response-shape
handling lives here; validation is in the service layer.
"""

from typing import Any

from admission_wizard.core.http import ApiClient
from admission_wizard.modules.documents.models import DocumentFile, DocumentType
from admission_wizard.modules.documents.schemas import DocumentResponse


async def upload_document(
    client: ApiClient,
    application_id: int,
    document_type: DocumentType,
    file: DocumentFile,
    is_required: bool,
) -> Any:
    """Upload one document as ``multipart/form-data``."""
    return await client.post(
        f"/documents/upload/{application_id}",
        files={"file": (file.name, file.content, file.content_type)},
        data={
            "documentType": document_type.value,
            "isRequired": str(is_required).lower(),
        },
    )


def _unwrap_documents(body: Any) -> list[dict[str, Any]]:
    # The backend answers either {"documents": [...]} or a bare list
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        documents = body.get("documents")
        if documents is None and isinstance(body.get("data"), dict):
            documents = body["data"].get("documents")
        if isinstance(documents, list):
            return documents
    return []


async def list_application_documents(
    client: ApiClient, application_id: int
) -> list[DocumentResponse]:
    """Get the documents already persisted for an application."""
    body = await client.get(f"/applications/{application_id}/documents")
    return [DocumentResponse.model_validate(item) for item in _unwrap_documents(body)]


async def delete_document(client: ApiClient, document_id: int) -> None:
    """Delete a persisted document."""
    await client.delete(f"/documents/{document_id}")
