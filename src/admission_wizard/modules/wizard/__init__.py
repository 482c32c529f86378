"""
Application Wizard Module

Multi-step admission application form engine.

Flow:
1. The family fills Student, Parents, Supporter and Guardian data
   (each step validated before it can be left)
2. Choosing "padre"/"madre" for supporter or guardian copies that parent's
   contact data and locks it
3. Documents are staged in memory at selection time
4. Submission writes the application, then uploads the staged documents
5. The wizard lands on Confirmation
"""

from .field_store import FieldStore
from .models import Relation, Role, WizardStep
from .relations import RelationPropagator
from .service import (
    InvalidStepError,
    SubmissionCoordinator,
    SubmissionInProgressError,
    WizardError,
    classify_submission_error,
)
from .staging import DocumentStagingArea
from .wizard import ApplicationWizard

__all__ = [
    "ApplicationWizard",
    "FieldStore",
    "RelationPropagator",
    "DocumentStagingArea",
    "SubmissionCoordinator",
    "classify_submission_error",
    "WizardStep",
    "Role",
    "Relation",
    "WizardError",
    "InvalidStepError",
    "SubmissionInProgressError",
]
