"""
Wizard Service Layer

Submission of a completed application draft.

This module implements:
1. Two-Phase Submission:
   - Phase 1 writes the application (POST flat payload when new, PUT nested
     payload when editing)
   - Phase 2 uploads every staged document concurrently
   - A Phase 1 failure aborts before any upload
   - A Phase 2 failure does not roll back the application; the family is
     told how many documents made it and to finish from the dashboard

2. Error Classification:
   - Backend messages are inspected for RUT, duplicate and year problems
     to produce targeted remediation steps for the error modal
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from admission_wizard.core.config import settings
from admission_wizard.core.http import ApiClient, ApiError
from admission_wizard.core.notifications import LoggingNotifier, NotificationLevel, Notifier
from admission_wizard.modules.documents import repository as documents_repository
from admission_wizard.modules.documents.models import (
    DOCUMENT_TYPE_LABELS,
    DocumentFile,
    DocumentType,
    is_required,
)
from admission_wizard.modules.wizard import repository
from admission_wizard.modules.wizard.helpers import build_create_payload, build_update_payload
from admission_wizard.modules.wizard.schemas import ErrorReport, FailedUpload, SubmissionResult
from admission_wizard.modules.wizard.validators import next_application_year

logger = logging.getLogger(__name__)


class WizardError(Exception):
    """Base exception for wizard errors."""

    def __init__(self, message: str, error_code: str):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class InvalidStepError(WizardError):
    """Raised when an action is attempted from the wrong wizard step."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="INVALID_STEP")


class SubmissionInProgressError(WizardError):
    """Raised when submit is called while a submission is still running."""

    def __init__(self):
        super().__init__(
            message="Ya hay un envío de postulación en curso.",
            error_code="SUBMISSION_IN_PROGRESS",
        )


# ============================================
# Error classification
# ============================================


def classify_submission_error(exc: BaseException) -> ErrorReport:
    """
    Turn a failed application write into a title, summary and remediation
    steps for the error modal.
    """
    message = getattr(exc, "message", None) or str(exc) or "Error desconocido"
    status_code = getattr(exc, "status_code", None)
    lowered = message.lower()
    is_duplicate = "duplicad" in lowered or "ya existe" in lowered

    if "RUT" in message and is_duplicate:
        return ErrorReport(
            title="RUT ya registrado",
            message="Ya existe una postulación registrada con el RUT del estudiante.",
            details=[
                "Verifique que el RUT del estudiante esté bien escrito",
                "Si ya postuló anteriormente, revise su postulación desde el panel de familia",
                "Si cree que se trata de un error, contacte al colegio",
            ],
        )

    if is_duplicate or status_code == 409:
        return ErrorReport(
            title="Postulación duplicada",
            message="Ya existe una postulación con estos datos.",
            details=[
                "Revise sus postulaciones existentes en el panel de familia",
                "Solo puede existir una postulación por estudiante y año",
            ],
        )

    if "RUT" in message:
        return ErrorReport(
            title="RUT inválido",
            message=message,
            details=[
                "Revise el RUT del estudiante, de los padres, del sostenedor y del apoderado",
                "El RUT debe incluir el dígito verificador (ej: 12.345.678-5)",
            ],
        )

    if "año" in lowered:
        return ErrorReport(
            title="Año de postulación inválido",
            message=message,
            details=[f"Las postulaciones se reciben para el año {next_application_year()}"],
        )

    if isinstance(exc, ApiError) and status_code is None:
        return ErrorReport(
            title="Error de conexión",
            message="No fue posible comunicarse con el servidor.",
            details=[
                "Verifique su conexión a internet",
                "Intente enviar la postulación nuevamente en unos minutos",
            ],
        )

    if status_code is not None and status_code >= 500:
        return ErrorReport(
            title="Error del servidor",
            message="El servidor no pudo procesar la postulación.",
            details=["Intente nuevamente más tarde", "Si el problema persiste, contacte al colegio"],
        )

    return ErrorReport(
        title="Error al enviar la postulación",
        message=message,
        details=["Revise los datos ingresados e intente nuevamente"],
    )


# ============================================
# Submission
# ============================================


class SubmissionCoordinator:
    """Writes the application, then uploads the staged documents."""

    def __init__(self, client: ApiClient, notifier: Notifier | None = None):
        self.client = client
        self.notifier = notifier or LoggingNotifier()

    async def _write_application(
        self, draft: Mapping[str, Any], application_id: int | None
    ) -> int:
        if application_id is not None:
            await repository.update_application(
                self.client, application_id, build_update_payload(draft)
            )
            logger.info(f"Updated application {application_id}")
            return application_id

        created = await repository.create_application(self.client, build_create_payload(draft))
        logger.info(f"Created application {created.id}")
        return created.id

    async def _upload(
        self, application_id: int, document_type: DocumentType, file: DocumentFile
    ) -> Any:
        return await documents_repository.upload_document(
            self.client, application_id, document_type, file, is_required(document_type)
        )

    async def submit(
        self,
        draft: Mapping[str, Any],
        staged: Mapping[DocumentType, DocumentFile],
        application_id: int | None = None,
    ) -> SubmissionResult:
        """
        Submit an application and its staged documents.

        Never raises: a failed application write is reported through
        ``SubmissionResult.error`` and an error notification.
        """
        is_update = application_id is not None

        # Phase 1: the application record
        try:
            saved_id = await self._write_application(draft, application_id)
        except Exception as e:
            logger.error(f"Application submission failed: {e}", exc_info=True)
            report = classify_submission_error(e)
            self.notifier.notify(NotificationLevel.ERROR, report.title, report.message)
            return SubmissionResult(success=False, is_update=is_update, error=report)

        # Phase 2: documents
        items = list(staged.items())
        outcomes = await asyncio.gather(
            *(self._upload(saved_id, document_type, file) for document_type, file in items),
            return_exceptions=True,
        )

        uploaded: list[DocumentType] = []
        failed: list[FailedUpload] = []
        for (document_type, file), outcome in zip(items, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                logger.warning(
                    f"Upload of {document_type.value} for application {saved_id} failed: {outcome}"
                )
                failed.append(
                    FailedUpload(
                        document_type=document_type,
                        file_name=file.name,
                        message=getattr(outcome, "message", None) or str(outcome),
                    )
                )
            else:
                uploaded.append(document_type)

        result = SubmissionResult(
            success=True,
            application_id=saved_id,
            is_update=is_update,
            uploaded_documents=uploaded,
            failed_documents=failed,
        )

        if failed:
            failed_labels = ", ".join(DOCUMENT_TYPE_LABELS[f.document_type] for f in failed)
            self.notifier.notify(
                NotificationLevel.WARNING,
                "Postulación guardada con documentos pendientes",
                f"Se subieron {len(uploaded)} de {result.total_documents} documentos. "
                f"No se pudieron subir: {failed_labels}. "
                f"Puede completarlos más tarde desde su panel: {settings.dashboard_url}",
            )
        else:
            title = "Postulación actualizada" if is_update else "Postulación enviada"
            message = f"Su postulación N° {saved_id} fue guardada exitosamente"
            if uploaded:
                message += f" junto a {len(uploaded)} documento(s)"
            self.notifier.notify(NotificationLevel.SUCCESS, title, message + ".")

        logger.info(
            f"Submission of application {saved_id} finished: "
            f"{len(uploaded)} uploaded, {len(failed)} failed"
        )
        return result
