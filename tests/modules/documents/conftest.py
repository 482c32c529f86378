"""
Fixtures for documents tests.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from admission_wizard.modules.documents.models import DocumentFile

MB = 1024 * 1024


@pytest.fixture
def mock_client():
    """Create a mock backend client."""
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.delete = AsyncMock()
    return client


def make_file(name="doc.pdf", size=1024, content_type="application/pdf"):
    return DocumentFile(name=name, content=b"0" * size, content_type=content_type)


@pytest.fixture
def pdf_file():
    return make_file("notas.pdf", 2 * MB)


@pytest.fixture
def png_photo():
    return make_file("foto.png", 3 * MB, "image/png")
