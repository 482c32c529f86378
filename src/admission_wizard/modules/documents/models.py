"""
Document Models

Document taxonomy shared with the backend and the in-memory file type used
for staging and uploads.
"""

import enum
import mimetypes
from dataclasses import dataclass
from pathlib import Path


class DocumentType(str, enum.Enum):
    """Document types accepted by the backend."""

    # Required
    BIRTH_CERTIFICATE = "BIRTH_CERTIFICATE"
    GRADES_2023 = "GRADES_2023"
    GRADES_2024 = "GRADES_2024"
    GRADES_2025_SEMESTER_1 = "GRADES_2025_SEMESTER_1"
    PERSONALITY_REPORT_2024 = "PERSONALITY_REPORT_2024"
    PERSONALITY_REPORT_2025_SEMESTER_1 = "PERSONALITY_REPORT_2025_SEMESTER_1"

    # Optional
    STUDENT_PHOTO = "STUDENT_PHOTO"
    BAPTISM_CERTIFICATE = "BAPTISM_CERTIFICATE"
    PREVIOUS_SCHOOL_REPORT = "PREVIOUS_SCHOOL_REPORT"
    MEDICAL_CERTIFICATE = "MEDICAL_CERTIFICATE"
    PSYCHOLOGICAL_REPORT = "PSYCHOLOGICAL_REPORT"


DOCUMENT_TYPE_LABELS: dict[DocumentType, str] = {
    DocumentType.BIRTH_CERTIFICATE: "Certificado de Nacimiento",
    DocumentType.GRADES_2023: "Notas 2023",
    DocumentType.GRADES_2024: "Notas 2024",
    DocumentType.GRADES_2025_SEMESTER_1: "Notas 2025 - Primer Semestre",
    DocumentType.PERSONALITY_REPORT_2024: "Informe de Personalidad 2024",
    DocumentType.PERSONALITY_REPORT_2025_SEMESTER_1: "Informe de Personalidad 2025 - Primer Semestre",
    DocumentType.STUDENT_PHOTO: "Foto del Estudiante",
    DocumentType.BAPTISM_CERTIFICATE: "Certificado de Bautismo",
    DocumentType.PREVIOUS_SCHOOL_REPORT: "Informe Colegio Anterior",
    DocumentType.MEDICAL_CERTIFICATE: "Certificado Médico",
    DocumentType.PSYCHOLOGICAL_REPORT: "Informe Psicológico",
}

REQUIRED_DOCUMENTS: tuple[DocumentType, ...] = (
    DocumentType.BIRTH_CERTIFICATE,
    DocumentType.GRADES_2023,
    DocumentType.GRADES_2024,
    DocumentType.GRADES_2025_SEMESTER_1,
    DocumentType.PERSONALITY_REPORT_2024,
    DocumentType.PERSONALITY_REPORT_2025_SEMESTER_1,
)

OPTIONAL_DOCUMENTS: tuple[DocumentType, ...] = (
    DocumentType.STUDENT_PHOTO,
    DocumentType.BAPTISM_CERTIFICATE,
    DocumentType.PREVIOUS_SCHOOL_REPORT,
    DocumentType.MEDICAL_CERTIFICATE,
    DocumentType.PSYCHOLOGICAL_REPORT,
)

GRADE_DOCUMENTS: tuple[DocumentType, ...] = (
    DocumentType.GRADES_2023,
    DocumentType.GRADES_2024,
    DocumentType.GRADES_2025_SEMESTER_1,
)

PDF = "application/pdf"
JPEG = "image/jpeg"
PNG = "image/png"

# "image/jpg" is not a registered type but browsers still send it
ALLOWED_CONTENT_TYPES = frozenset({PDF, JPEG, "image/jpg", PNG})
PHOTO_CONTENT_TYPES = frozenset({JPEG, "image/jpg", PNG})


def is_required(document_type: DocumentType) -> bool:
    return document_type in REQUIRED_DOCUMENTS


def allowed_content_types(document_type: DocumentType) -> frozenset[str]:
    """Photos must be images; everything else may also be a PDF."""
    if document_type == DocumentType.STUDENT_PHOTO:
        return PHOTO_CONTENT_TYPES
    return ALLOWED_CONTENT_TYPES


def format_file_size(size: int) -> str:
    """Human readable size, e.g. ``5 MB`` or ``245.5 KB``."""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


@dataclass(frozen=True)
class DocumentFile:
    """A file selected by the user, held in memory until upload."""

    name: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "DocumentFile":
        """Read a file from disk, guessing its MIME type from the name."""
        path = Path(path)
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            content=path.read_bytes(),
            content_type=content_type or guessed or "application/octet-stream",
        )
