"""Stack-based assembly of one script document.

The assembler is driven line by line. Plain actions land either in the
top-level action list or in the active slot of the innermost open structure;
closing a structure splices it into its parent. Callers keep the bracketing
discipline: every violation is logged and ignored, never raised.
"""

from __future__ import annotations

import logging
from typing import Any

from trigscript.document.fields import strip_reserved_fields
from trigscript.document.model import DocumentIdentity, default_conditions
from trigscript.document.structures import StructureBuilder, new_structure
from trigscript.fragments import COMMENT_FIELD, Fragment

logger = logging.getLogger(__name__)


class DocumentAssembler:
    def __init__(self, identity: DocumentIdentity):
        self.identity = identity
        self.triggers: list[dict[str, Any]] = []
        self.conditions: list[Any] = default_conditions()
        self.actions: list[Fragment] = []
        self._stack: list[StructureBuilder] = []
        # "" means no comment is pending.
        self._pending_comment = ""

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def pending_comment(self) -> str:
        return self._pending_comment

    @property
    def active_slot(self) -> str | None:
        if not self._stack:
            return None
        return self._stack[-1].active_slot

    def insert_trigger(self, trigger: dict[str, Any]) -> None:
        self.triggers.append(trigger)

    def insert_comment(self, comment: str) -> None:
        """Queue a comment line; consecutive lines are joined with a newline."""
        if not comment:
            return
        if self._pending_comment:
            self._pending_comment = f"{self._pending_comment}\n{comment}"
        else:
            self._pending_comment = comment

    def open_structure(self, kind: str) -> None:
        self._stack.append(new_structure(kind))
        logger.debug("opened `%s` structure at depth %d", kind, self.depth)

    def advance_slot(self) -> None:
        if not self._stack:
            logger.warning("advance_slot called with no open structure; ignored")
            return
        top = self._stack[-1]
        if not top.has_next_slot:
            logger.warning("`%s` structure has no slot after `%s`; ignored", top.kind, top.active_slot)
            return
        top.advance()

    def insert_action(self, fragment: Fragment) -> None:
        """Append at the top level or insert into the innermost structure's active slot.

        The pending comment is only attached to mappings appended at the top level.
        """
        if self._stack:
            top = self._stack[-1]
            if not top.insert(fragment):
                logger.warning("`%s` slot of `%s` structure is already filled; action ignored", top.active_slot, top.kind)
            return

        if isinstance(fragment, dict) and self._pending_comment:
            fragment = {**fragment, COMMENT_FIELD: self._pending_comment}
            self._pending_comment = ""
        self.actions.append(fragment)

    def close_structure(self) -> None:
        if not self._stack:
            logger.warning("close_structure called with no open structure; ignored")
            return
        structure = self._stack.pop()
        built = structure.build()
        if not self._stack:
            self.actions.append(built)
        elif not self._stack[-1].insert(built):
            parent = self._stack[-1]
            logger.warning(
                "`%s` slot of enclosing `%s` structure cannot take a nested structure; dropped",
                parent.active_slot,
                parent.kind,
            )
        logger.debug("closed `%s` structure, depth now %d", structure.kind, self.depth)

    def generate_document(self) -> dict[str, Any]:
        """Independent snapshot of the document; reserved fields are removed."""
        identity = self.identity
        return {
            "isProtected": identity.is_protected,
            "triggers": strip_reserved_fields(self.triggers),
            "conditions": strip_reserved_fields(self.conditions),
            "actions": strip_reserved_fields(self.actions),
            "name": identity.name,
            "parent": identity.parent,
            "key": identity.key,
            "order": identity.order,
        }
