"""
Documents Module

Document taxonomy (6 required, 5 optional types), REST calls for uploading,
listing and deleting documents, and completeness summaries.
"""

from .models import DocumentFile, DocumentType
from .schemas import DocumentResponse, DocumentStatusSummary

__all__ = ["DocumentFile", "DocumentType", "DocumentResponse", "DocumentStatusSummary"]
