"""
Relation Propagation

Choosing "padre" or "madre" as the supporter's or guardian's relation copies
that parent's contact data into the role and locks it. The copy is one-shot:
later edits to the parent are not propagated, and changing the relation
overwrites whatever the role held before.
"""

import logging
from typing import Any

from admission_wizard.modules.wizard.field_store import FieldStore
from admission_wizard.modules.wizard.models import (
    CONTACT_FIELDS,
    PARENT_FOR_RELATION,
    Relation,
    Role,
)

logger = logging.getLogger(__name__)


class RelationPropagator:
    """Copies parent contact data into supporter/guardian fields on relation change."""

    def __init__(self, store: FieldStore):
        self.store = store

    def select_relation(self, role: Role | str, relation: Relation | str) -> None:
        """
        Set the relation of a role and derive its contact fields.

        Raises:
            ValueError: If ``role`` or ``relation`` is not a known value
        """
        role = Role(role)
        relation = Relation(relation)
        targets = [f"{role.value}_{name}" for name in CONTACT_FIELDS]

        self.store.set_derived(f"{role.value}_relation", relation.value)

        parent = PARENT_FOR_RELATION.get(relation)
        if parent is None:
            self._release(targets)
            logger.info(f"{role.value} relation set to {relation.value}; contact fields cleared")
            return

        for name, target in zip(CONTACT_FIELDS, targets, strict=True):
            self.store.set_derived(target, self.store.get(f"{parent}_{name}") or "")
        self.store.mark_read_only(targets)
        logger.info(f"{role.value} relation set to {relation.value}; copied from {parent}")

    def reset_relation(self, role: Role | str, value: Any = "") -> None:
        """
        Store a relation that is not selectable (empty or unknown) and release
        the role's contact fields. Validation flags the raw value.
        """
        role = Role(role)
        self.store.set_derived(f"{role.value}_relation", value)
        self._release([f"{role.value}_{name}" for name in CONTACT_FIELDS])
        logger.info(f"{role.value} relation reset; contact fields cleared")

    def _release(self, targets: list[str]) -> None:
        for target in targets:
            self.store.set_derived(target, "")
        self.store.clear_read_only(targets)
