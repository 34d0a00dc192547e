"""
Form/Modal Controller

Three states, explicit transitions only:

    closed --open_create--> creating --submit/cancel--> closed
    closed --open_edit----> editing  --submit/cancel--> closed

Fields are held as text, the way the form shows them. Conversion between
the editable and stored representations happens on open and on submit.
"""

import logging
from typing import Any, Dict, Optional

from core.exceptions import FarmApiError, ModalStateError, RecordValidationError

from .dates import parse_input_date, to_display_date, to_input_date

logger = logging.getLogger(__name__)

CLOSED = 'closed'
CREATING = 'creating'
EDITING = 'editing'

STATES = (CLOSED, CREATING, EDITING)


def as_text(value) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ModalController:
    """
    Create/edit modal for one collection page.

    Subclasses declare:
        default_fields: initial values for a new record
        auto_numbered_fields: fields pre-computed on create and shown read-only
        display_date_fields: fields edited as YYYY-MM-DD, stored as DD/MM/YYYY
    and may override ``auto_fields`` to compute the auto-numbered values.
    """

    default_fields: Dict[str, Any] = {}
    auto_numbered_fields = ()
    display_date_fields = ()
    create_title = 'Add New Record'
    edit_title = 'Edit Record'

    def __init__(self, state: str = CLOSED, record_id=None, fields: Optional[Dict[str, str]] = None,
                 error: Optional[str] = None):
        self.state = state if state in STATES else CLOSED
        self.record_id = record_id
        self.fields = dict(fields or {})
        self.error = error

    @property
    def is_open(self) -> bool:
        return self.state != CLOSED

    @property
    def read_only_fields(self):
        return tuple(self.auto_numbered_fields) if self.state == CREATING else ()

    def _require_closed(self):
        if self.is_open:
            raise ModalStateError(f"A form is already open ({self.state})")

    def initial_fields(self) -> Dict[str, str]:
        fields = {}
        for name, value in self.default_fields.items():
            fields[name] = as_text(value() if callable(value) else value)
        return fields

    def auto_fields(self, records) -> Dict[str, Any]:
        return {}

    def open_create(self, records) -> Dict[str, str]:
        self._require_closed()
        fields = self.initial_fields()
        fields.update({name: as_text(value) for name, value in self.auto_fields(records).items()})
        self.state = CREATING
        self.record_id = None
        self.fields = fields
        self.error = None
        return self.fields

    def open_edit(self, record: Dict[str, Any]) -> Dict[str, str]:
        self._require_closed()
        self.state = EDITING
        self.record_id = record.get('id')
        self.fields = self.to_input(record)
        self.error = None
        return self.fields

    def cancel(self) -> None:
        self.state = CLOSED
        self.record_id = None
        self.fields = {}
        self.error = None

    def to_input(self, record: Dict[str, Any]) -> Dict[str, str]:
        """Stored record -> editable text fields."""
        fields = self.initial_fields()
        fields.update({name: as_text(value) for name, value in record.items() if name != 'id'})
        for name in self.display_date_fields:
            fields[name] = to_input_date(record.get(name))
        return fields

    def to_storage(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Editable text fields -> storage representation. Blank fields are omitted."""
        draft = {name: value for name, value in fields.items() if value != ''}
        for name in self.display_date_fields:
            value = draft.get(name)
            if not value:
                raise RecordValidationError(f"{name}: This field is required.",
                                            errors={name: ['This field is required.']})
            if parse_input_date(value) is None:
                raise RecordValidationError(f"{name}: Enter a valid date (YYYY-MM-DD).",
                                            errors={name: ['Enter a valid date (YYYY-MM-DD).']})
            draft[name] = to_display_date(value)
        for name in self.read_only_fields:
            draft[name] = self.fields.get(name)
        return draft

    def submit(self, fields: Dict[str, Any], store) -> Dict[str, Any]:
        """
        Dispatch create or update depending on mode.

        On success the modal closes and the record is returned. On failure
        the modal stays open with the submitted values and the error
        message, and the error is re-raised for the view to report.
        """
        if not self.is_open:
            raise ModalStateError('No form is open')

        submitted = {**self.fields, **(fields or {})}
        try:
            draft = self.to_storage(submitted)
            if self.state == CREATING:
                record = store.create(draft)
            else:
                record = store.update(self.record_id, draft)
        except FarmApiError as e:
            for name in self.read_only_fields:
                submitted[name] = self.fields.get(name, '')
            self.fields = {name: as_text(value) for name, value in submitted.items()}
            self.error = e.message
            logger.warning(f"Form submit failed ({self.state}): {e.message}")
            raise

        self.cancel()
        return record

    def to_dict(self) -> Dict[str, Any]:
        title = ''
        if self.state == CREATING:
            title = self.create_title
        elif self.state == EDITING:
            title = self.edit_title
        return {
            'state': self.state,
            'title': title,
            'recordId': self.record_id,
            'fields': self.fields,
            'readOnly': list(self.read_only_fields),
            'error': self.error,
        }

    def to_session(self) -> Dict[str, Any]:
        return {
            'state': self.state,
            'record_id': self.record_id,
            'fields': self.fields,
            'error': self.error,
        }

    @classmethod
    def from_session(cls, data: Optional[Dict[str, Any]]) -> 'ModalController':
        data = data or {}
        return cls(
            state=data.get('state', CLOSED),
            record_id=data.get('record_id'),
            fields=data.get('fields'),
            error=data.get('error'),
        )
