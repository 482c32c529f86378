"""
Document Staging Area

Files the user selected in the Documents step, held in memory until the
application is submitted. One entry per document type.
"""

import logging
from collections.abc import Iterator

from admission_wizard.core.config import settings
from admission_wizard.core.notifications import LoggingNotifier, NotificationLevel, Notifier
from admission_wizard.modules.documents.models import (
    DOCUMENT_TYPE_LABELS,
    DocumentFile,
    DocumentType,
    format_file_size,
)
from admission_wizard.modules.documents.service import check_file_constraints
from admission_wizard.modules.wizard.schemas import StagingResult

logger = logging.getLogger(__name__)


class DocumentStagingArea:
    """Pre-submission buffer of files keyed by document type."""

    def __init__(self, notifier: Notifier | None = None, max_size: int | None = None):
        self.notifier = notifier or LoggingNotifier()
        self.max_size = max_size or settings.wizard_max_file_size_bytes
        self._entries: dict[DocumentType, DocumentFile] = {}

    def stage(self, document_type: DocumentType | str, file: DocumentFile) -> StagingResult:
        """
        Stage a file for a document type, replacing any previous one.

        A file that is too large or of the wrong type is rejected with an
        error toast; nothing is raised.
        """
        document_type = DocumentType(document_type)
        error = check_file_constraints(file, document_type, self.max_size)
        if error:
            logger.warning(
                f"Rejected {document_type.value} file ({file.content_type}, "
                f"{format_file_size(file.size)})"
            )
            self.notifier.notify(
                NotificationLevel.ERROR,
                f"Archivo no válido: {DOCUMENT_TYPE_LABELS[document_type]}",
                error,
            )
            return StagingResult(accepted=False, document_type=document_type, error=error)

        replaced = document_type in self._entries
        self._entries[document_type] = file
        logger.info(f"Staged {document_type.value} ({format_file_size(file.size)})")
        return StagingResult(accepted=True, document_type=document_type, replaced=replaced)

    def clear(self, document_type: DocumentType | str) -> bool:
        """Remove a staged entry; returns False when nothing was staged for it."""
        return self._entries.pop(DocumentType(document_type), None) is not None

    def clear_all(self) -> None:
        self._entries.clear()

    def get(self, document_type: DocumentType | str) -> DocumentFile | None:
        return self._entries.get(DocumentType(document_type))

    def entries(self) -> dict[DocumentType, DocumentFile]:
        return dict(self._entries)

    def __contains__(self, document_type: object) -> bool:
        return document_type in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DocumentType]:
        return iter(self._entries)
