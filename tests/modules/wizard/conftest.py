"""
Fixtures for application wizard tests.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from admission_wizard.core.notifications import CollectingNotifier
from admission_wizard.modules.documents.models import DocumentFile

TODAY = date(2026, 10, 18)
MB = 1024 * 1024


@pytest.fixture
def today():
    """Fixed reference date (applications are for 2027)."""
    return TODAY


@pytest.fixture
def mock_client():
    """Create a mock backend client."""
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.put = AsyncMock()
    client.delete = AsyncMock()
    return client


@pytest.fixture
def notifier():
    return CollectingNotifier()


@pytest.fixture
def student_data():
    """Student step, complete and valid for kinder."""
    return {
        "first_name": "SOFÍA ISABEL",
        "paternal_last_name": "GONZÁLEZ",
        "maternal_last_name": "PÉREZ",
        "rut": "12.345.678-5",
        "birth_date": "2021-05-10",
        "grade": "kinder",
        "school_applied": "MONTE_TABOR",
        "admission_preference": "NINGUNA",
        "student_address_street": "AV. LOS LEONES",
        "student_address_number": "1234",
        "student_address_commune": "PROVIDENCIA",
        "application_year": 2027,
    }


@pytest.fixture
def parents_data():
    return {
        "parent1_name": "JUAN GONZÁLEZ",
        "parent1_rut": "11.111.111-1",
        "parent1_email": "juan@example.com",
        "parent1_phone": "+56 9 1234 5678",
        "parent1_address": "AV. LOS LEONES 1234",
        "parent1_profession": "INGENIERO",
        "parent2_name": "MARÍA PÉREZ",
        "parent2_rut": "22.222.222-2",
        "parent2_email": "maria@example.com",
        "parent2_phone": "+56 9 8765 4321",
        "parent2_address": "AV. LOS LEONES 1234",
        "parent2_profession": "MÉDICO",
    }


@pytest.fixture
def complete_draft(student_data, parents_data):
    """A draft that passes every data step."""
    return {
        **student_data,
        **parents_data,
        "supporter_relation": "padre",
        "supporter_name": "JUAN GONZÁLEZ",
        "supporter_rut": "11.111.111-1",
        "supporter_email": "juan@example.com",
        "supporter_phone": "+56 9 1234 5678",
        "guardian_relation": "abuelo",
        "guardian_name": "PEDRO GONZÁLEZ",
        "guardian_rut": "33.333.333-3",
        "guardian_email": "pedro@example.com",
        "guardian_phone": "+56 9 5555 5555",
    }


@pytest.fixture
def pdf_file():
    """A 4 MB PDF."""
    return DocumentFile(name="certificado.pdf", content=b"%" * (4 * MB), content_type="application/pdf")


@pytest.fixture
def large_pdf_file():
    """A 6 MB PDF, over the wizard limit."""
    return DocumentFile(name="grande.pdf", content=b"%" * (6 * MB), content_type="application/pdf")


@pytest.fixture
def photo_file():
    return DocumentFile(name="foto.jpg", content=b"\xff\xd8" * 1024, content_type="image/jpeg")
