"""
Application Wizard

Step state machine tying the field store, step validation, relation
propagation, document staging and submission together.

Steps are traversed strictly in order:
STUDENT -> PARENTS -> SUPPORTER -> GUARDIAN -> DOCUMENTS -> CONFIRMATION.
Leaving a data step requires it to validate; the Documents step is left only
through ``submit()``; Confirmation is terminal.
"""

import logging
from datetime import date
from typing import Any

from admission_wizard.core.http import ApiClient, ApiError
from admission_wizard.core.notifications import LoggingNotifier, Notifier
from admission_wizard.modules.documents import repository as documents_repository
from admission_wizard.modules.documents.models import (
    DOCUMENT_TYPE_LABELS,
    DocumentFile,
    DocumentType,
)
from admission_wizard.modules.documents.schemas import DocumentResponse, DocumentStatusSummary
from admission_wizard.modules.documents.service import summarize_documents
from admission_wizard.modules.wizard import repository
from admission_wizard.modules.wizard.field_store import FieldStore
from admission_wizard.modules.wizard.models import (
    STEP_OPTIONAL_FIELDS,
    STEP_REQUIRED_FIELDS,
    STEP_TITLES,
    Relation,
    Role,
    WizardStep,
)
from admission_wizard.modules.wizard.relations import RelationPropagator
from admission_wizard.modules.wizard.schemas import (
    ErrorReport,
    StagingResult,
    StepValidationResult,
    SubmissionResult,
)
from admission_wizard.modules.wizard.service import (
    InvalidStepError,
    SubmissionCoordinator,
    SubmissionInProgressError,
)
from admission_wizard.modules.wizard.staging import DocumentStagingArea
from admission_wizard.modules.wizard.validators import validate_step

logger = logging.getLogger(__name__)

_RELATION_FIELDS = {f"{role.value}_relation": role for role in Role}


class ApplicationWizard:
    """One family's pass through the admission application form."""

    def __init__(
        self,
        client: ApiClient,
        notifier: Notifier | None = None,
        store: FieldStore | None = None,
        application_id: int | None = None,
        today: date | None = None,
        max_file_size: int | None = None,
    ):
        self.client = client
        self.notifier = notifier or LoggingNotifier()
        self.today = today
        self.store = store or FieldStore(today=today)
        self.propagator = RelationPropagator(self.store)
        self.staging = DocumentStagingArea(self.notifier, max_size=max_file_size)
        self.coordinator = SubmissionCoordinator(client, self.notifier)

        self.current_step = WizardStep.STUDENT
        self.application_id = application_id
        self.existing_documents: list[DocumentResponse] = []
        self.error_report: ErrorReport | None = None
        self.last_result: SubmissionResult | None = None
        self.is_submitting = False

    @classmethod
    async def for_existing_application(
        cls,
        client: ApiClient,
        application_id: int,
        notifier: Notifier | None = None,
        today: date | None = None,
        max_file_size: int | None = None,
    ) -> "ApplicationWizard":
        """
        Open the wizard in edit mode, pre-populated from the backend.

        Raises:
            ApiError: If the application cannot be fetched
        """
        application = await repository.get_application(client, application_id)
        wizard = cls(
            client,
            notifier=notifier,
            store=FieldStore.from_application(application, today=today),
            application_id=application_id,
            today=today,
            max_file_size=max_file_size,
        )
        await wizard.load_existing_documents()
        logger.info(f"Opened application {application_id} for editing")
        return wizard

    @property
    def is_edit_mode(self) -> bool:
        return self.application_id is not None

    @property
    def progress(self) -> float:
        """Fraction of the wizard completed, from 0.0 to 1.0."""
        return self.current_step / WizardStep.CONFIRMATION

    @property
    def step_title(self) -> str:
        return STEP_TITLES[self.current_step]

    async def prefill_from_profile(self) -> list[str]:
        """Fill empty guardian fields from the signed-in user's profile."""
        try:
            profile = await repository.get_current_user_profile(self.client)
        except ApiError as e:
            logger.warning(f"Could not load user profile for prefill: {e.message}")
            return []
        return self.store.prefill_from_profile(profile)

    async def load_existing_documents(self) -> list[DocumentResponse]:
        """Fetch documents already persisted for the application being edited."""
        if not self.is_edit_mode:
            return []
        try:
            self.existing_documents = await documents_repository.list_application_documents(
                self.client, self.application_id
            )
        except ApiError as e:
            logger.warning(
                f"Could not load documents of application {self.application_id}: {e.message}"
            )
            self.existing_documents = []
        return self.existing_documents

    # ------------------------------------------------------------------
    # Field editing
    # ------------------------------------------------------------------

    def update_field(self, name: str, value: Any) -> bool:
        """Write a field; relation fields go through the propagator."""
        role = _RELATION_FIELDS.get(name)
        if role is not None:
            try:
                relation = Relation(value)
            except ValueError:
                self.propagator.reset_relation(role, value)
                return True
            self.propagator.select_relation(role, relation)
            return True
        return self.store.update_field(name, value)

    def touch_field(self, name: str) -> str:
        return self.store.touch_field(name)

    def select_relation(self, role: Role | str, relation: Relation | str) -> None:
        self.propagator.select_relation(role, relation)

    def stage_document(self, document_type: DocumentType | str, file: DocumentFile) -> StagingResult:
        return self.staging.stage(document_type, file)

    def clear_document(self, document_type: DocumentType | str) -> bool:
        return self.staging.clear(document_type)

    # ------------------------------------------------------------------
    # Validation and navigation
    # ------------------------------------------------------------------

    def document_status(self) -> DocumentStatusSummary:
        """Required/optional coverage counting both persisted and staged files."""
        present = [doc.document_type for doc in self.existing_documents]
        present.extend(self.staging)
        return summarize_documents(present)

    def validation(self, step: WizardStep | int | None = None) -> StepValidationResult:
        step = WizardStep(self.current_step if step is None else step)
        result = validate_step(self.store.data, step, self.today)

        if step == WizardStep.DOCUMENTS:
            status = self.document_status()
            if status.missing_required:
                labels = ", ".join(DOCUMENT_TYPE_LABELS[t] for t in status.missing_required)
                result.warnings.append(
                    f"Faltan documentos obligatorios: {labels}. "
                    "Puede enviarlos más tarde desde su panel."
                )
        return result

    def can_proceed_to_next_step(self) -> bool:
        return self.validation().can_advance

    def next_step(self) -> bool:
        """
        Advance one step when the current one validates.

        Every field of the step is touched so inline errors show up.
        Returns False and stays put when blocked.
        """
        step = self.current_step
        if step >= WizardStep.DOCUMENTS:
            return False

        for name in STEP_REQUIRED_FIELDS[step] + STEP_OPTIONAL_FIELDS.get(step, ()):
            self.store.touch_field(name)

        if not self.can_proceed_to_next_step():
            logger.debug(f"Step {step.name} blocked: {sorted(self.validation().errors)}")
            return False

        self.current_step = WizardStep(step + 1)
        return True

    def previous_step(self) -> bool:
        if self.current_step in (WizardStep.STUDENT, WizardStep.CONFIRMATION):
            return False
        self.current_step = WizardStep(self.current_step - 1)
        return True

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(self) -> SubmissionResult:
        """
        Submit the application and staged documents.

        Raises:
            InvalidStepError: If the wizard is not on the Documents step
            SubmissionInProgressError: If a submission is already running
        """
        if self.current_step != WizardStep.DOCUMENTS:
            raise InvalidStepError(
                f"La postulación solo puede enviarse desde el paso "
                f"{STEP_TITLES[WizardStep.DOCUMENTS]}"
            )
        if self.is_submitting:
            raise SubmissionInProgressError()

        self.is_submitting = True
        self.error_report = None
        try:
            result = await self.coordinator.submit(
                self.store.snapshot(), self.staging.entries(), self.application_id
            )
        finally:
            self.is_submitting = False

        self.last_result = result
        if not result.success:
            self.error_report = result.error
            return result

        self.application_id = result.application_id
        self.store.reset()
        self.staging.clear_all()
        self.current_step = WizardStep.CONFIRMATION
        return result
