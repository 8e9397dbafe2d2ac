"""
Validated mutations of the client ledger.

All changes to the ledger go through the MutationGateway.

Validation Order for new clients:
1. Name - must be non-empty after trimming
2. Weekly hours - must parse as an integer >= 0
3. Rate - must parse as an integer >= 0

Only the first failing field is reported. Edits never fail: invalid
input leaves the previous value in place.
"""

from enum import Enum
from typing import Callable, List, Union

import structlog

from revenue_tracker.storage.ledger import LedgerStore
from .parsing import parse_non_negative_int

logger = structlog.get_logger(__name__)

Listener = Callable[[int], None]


class EditableField(Enum):
    """Client fields that can be edited after creation."""
    NAME = "name"
    WEEKLY_HOURS = "weeklyHours"
    RATE = "rate"


class ValidationError(Exception):
    """Raised when a new client is rejected."""
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


_FIELD_MESSAGES = {
    EditableField.NAME: "Please enter a client name.",
    EditableField.WEEKLY_HOURS: "Please enter a valid number of weekly hours (0 or more).",
    EditableField.RATE: "Please enter a valid hourly rate (0 or more).",
}

_STORE_FIELDS = {
    EditableField.NAME: "name",
    EditableField.WEEKLY_HOURS: "weekly_hours",
    EditableField.RATE: "rate",
}


class MutationGateway:
    """Single entry point for add, edit, remove and clear intents.

    Each call is one atomic transition of the ledger. After every
    successful call the revision counter moves forward and subscribed
    listeners are told the new revision, so views can pull fresh values.
    """

    def __init__(self, store: LedgerStore):
        self.store = store
        self._revision = 0
        self._listeners: List[Listener] = []

    @property
    def revision(self) -> int:
        """Number of successful mutations applied so far."""
        return self._revision

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _changed(self, operation: str, **details) -> None:
        self._revision += 1
        logger.debug("ledger_changed", operation=operation, revision=self._revision, **details)
        for listener in list(self._listeners):
            listener(self._revision)

    def add_client(
        self,
        name: str,
        weekly_hours_raw: Union[str, int],
        rate_raw: Union[str, int]
    ) -> int:
        """Validate and append a new client.

        Args:
            name: Client name, trimmed before use
            weekly_hours_raw: Raw weekly hours input
            rate_raw: Raw hourly rate input

        Returns:
            Id of the new client

        Raises:
            ValidationError: For the first field that fails validation
        """
        clean_name = name.strip() if isinstance(name, str) else ""
        if not clean_name:
            self._reject(EditableField.NAME)

        hours = parse_non_negative_int(weekly_hours_raw)
        if not hours.ok:
            self._reject(EditableField.WEEKLY_HOURS)

        rate = parse_non_negative_int(rate_raw)
        if not rate.ok:
            self._reject(EditableField.RATE)

        client_id = self.store.insert(clean_name, hours.value, rate.value)
        self._changed("add", client_id=client_id)
        return client_id

    def _reject(self, field: EditableField) -> None:
        logger.info("client_rejected", field=field.value)
        raise ValidationError(field.value, _FIELD_MESSAGES[field])

    def edit_field(
        self,
        client_id: int,
        field: Union[EditableField, str],
        raw_value: Union[str, int]
    ) -> None:
        """Change one field of an existing client.

        Unknown ids, blank names and invalid numbers are ignored and the
        previous value is kept.

        Raises:
            ValueError: If field is not an editable field name
        """
        field = EditableField(field)
        if self.store.find(client_id) is None:
            logger.debug("edit_ignored", client_id=client_id, reason="unknown id")
            return

        if field is EditableField.NAME:
            value = raw_value.strip() if isinstance(raw_value, str) else ""
            if value:
                self.store.set_fields(client_id, name=value)
        else:
            parsed = parse_non_negative_int(raw_value)
            if parsed.ok:
                self.store.set_fields(client_id, **{_STORE_FIELDS[field]: parsed.value})

        self._changed("edit", client_id=client_id, field=field.value)

    def remove_client(self, client_id: int) -> None:
        """Remove a client. Unknown ids are a no-op."""
        self.store.remove(client_id)
        self._changed("remove", client_id=client_id)

    def clear_all(self) -> None:
        """Remove every client. The id sequence continues afterwards."""
        self.store.clear()
        self._changed("clear")
