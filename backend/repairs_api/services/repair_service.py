"""
Repairs API — Repair Service (Request Handlers)
================================================

What:  The five repair operations: list (with assignee filter), get, create,
       partial update and delete.
How:   Each method takes the store plus the raw request pieces (id text, body
       bytes, query value), validates them through repairs_api.validation, and
       only then touches the store. A failed ValidationResult becomes the
       matching application exception, which the global handlers in main.py
       render as `{"error": ...}`.
Who:   Called by the thin route adapters in repairs_api.routes.repairs.

Assignee filter:
    "  Daisy Phillips " → tokens ["daisy", "phillips"]
    A repair matches when its lowercased assignee contains either token.

        "Daisy Nobody"  → matches "Daisy Phillips" (first token hits)
        "phillips"      → matches "Daisy Phillips"
        "   "           → no tokens, matches nothing

    Empty tokens are never used for matching, since every string contains "".
"""

import logging
from typing import Any, Dict, List, Optional

from repairs_api.exceptions import InvalidIdError, MalformedBodyError
from repairs_api.models.repair import Repair
from repairs_api.store import RepairStore
from repairs_api.validation import (
    parse_json_object,
    parse_repair_id,
    validate_create,
    validate_update,
)

logger = logging.getLogger(__name__)

# First name and last name
MAX_NAME_TOKENS = 2


def assignee_tokens(query: str) -> List[str]:
    """Lowercase, trim and split an assignee query into at most two tokens."""
    return query.lower().split()[:MAX_NAME_TOKENS]


def matches_assignee(repair: Repair, tokens: List[str]) -> bool:
    if not repair.assigned_to:
        return False
    assignee = repair.assigned_to.lower()
    return any(token and token in assignee for token in tokens)


class RepairService:
    """
    Business logic layer for repair operations.

    Stateless: the store is passed in on every call, so one service instance
    can serve any number of independent stores (one per app, one per test).
    """

    def list_repairs(self, store: RepairStore, assigned_to: Optional[str] = None) -> List[Repair]:
        """
        Return every repair, or those whose assignee matches `assigned_to`.

        Args:
            store:        The live repair store
            assigned_to:  Optional free-text name; None means no filter

        Returns:
            Matching repairs in insertion order; an empty list when nothing matches
        """
        repairs = store.list()
        if assigned_to is None:
            return repairs

        tokens = assignee_tokens(assigned_to)
        if not tokens:
            logger.debug("assignedTo=%r has no usable tokens; returning no repairs", assigned_to)
            return []

        filtered = [repair for repair in repairs if matches_assignee(repair, tokens)]
        logger.debug("assignedTo=%r matched %d of %d repairs", assigned_to, len(filtered), len(repairs))
        return filtered

    def get_repair(self, store: RepairStore, raw_id: Any) -> Repair:
        """
        Raises:
            InvalidIdError: raw_id is not an integer
            NotFoundError:  no repair with that id
        """
        repair_id = self._require_id(raw_id)
        return store.get(repair_id)

    def create_repair(self, store: RepairStore, body: bytes) -> Repair:
        """
        Validate a creation body and store the new repair.

        Raises:
            MalformedBodyError: body is not a JSON object with all five fields
        """
        data = self._require_object(body)
        result = validate_create(data)
        if not result.ok:
            logger.warning("Rejected repair creation: %s", result.error)
            raise MalformedBodyError(detail=result.error)

        repair = store.create(result.value.model_dump())
        logger.info("New repair created: id=%d title=%r", repair.id, repair.title)
        return repair

    def update_repair(self, store: RepairStore, raw_id: Any, body: bytes) -> Repair:
        """
        Apply a partial update; fields left out of the body keep their values.

        The id and the body are both validated before the store is consulted,
        so a bad request never changes anything.

        Raises:
            InvalidIdError:     raw_id is not an integer
            MalformedBodyError: body is not a JSON object of optional repair fields
            NotFoundError:      no repair with that id
        """
        repair_id = self._require_id(raw_id)
        data = self._require_object(body)
        return self._apply_update(store, repair_id, data)

    def update_repair_from_body(self, store: RepairStore, body: bytes) -> Repair:
        """Legacy form of update_repair where the id travels in the body."""
        data = self._require_object(body)
        repair_id = self._require_id(data.pop("id", None))
        return self._apply_update(store, repair_id, data)

    def delete_repair(self, store: RepairStore, raw_id: Any) -> Repair:
        """
        Raises:
            InvalidIdError: raw_id is not an integer
            NotFoundError:  no repair with that id (including already deleted)
        """
        repair_id = self._require_id(raw_id)
        repair = store.delete(repair_id)
        logger.info("Repair deleted: id=%d", repair.id)
        return repair

    def delete_repair_from_body(self, store: RepairStore, body: bytes) -> Repair:
        """Legacy form of delete_repair where the id travels in the body."""
        data = self._require_object(body)
        return self.delete_repair(store, data.get("id"))

    # ── Helpers ───────────────────────────────────────────────────────────

    def _apply_update(self, store: RepairStore, repair_id: int, data: Dict[str, Any]) -> Repair:
        result = validate_update(data)
        if not result.ok:
            logger.warning("Rejected update of repair %d: %s", repair_id, result.error)
            raise MalformedBodyError(detail=result.error, context={"repair_id": repair_id})

        changes = result.value.changes()
        repair = store.update(repair_id, changes)
        logger.info("Repair updated: id=%d fields=%s", repair.id, sorted(changes))
        return repair

    @staticmethod
    def _require_id(raw_id: Any) -> int:
        result = parse_repair_id(raw_id)
        if not result.ok:
            raise InvalidIdError(raw_id=raw_id, context={"reason": result.error})
        return result.value

    @staticmethod
    def _require_object(body: bytes) -> Dict[str, Any]:
        result = parse_json_object(body)
        if not result.ok:
            raise MalformedBodyError(context={"reason": result.error})
        return result.value


# Module-level singleton, used by route handlers
repair_service = RepairService()
