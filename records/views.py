"""
Record Page Views

Generic endpoints mounted once per ``RecordPage``:

GET  /                      - Rows (filtered, sorted, projected), summary and page state
POST /sort/                 - Toggle sort on a column {key}
POST /filter/               - Set the filter {field, value}
POST /modal/create/         - Open the create form
POST /modal/<id>/edit/      - Open the edit form for a record
POST /modal/cancel/         - Close the form
POST /modal/submit/         - Submit the form {fields}
POST /records/<id>/delete/  - Delete a record {confirm}
"""

import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import (
    FarmApiError,
    HttpError,
    ModalStateError,
    RecordNotFound,
    RecordValidationError,
)

from .modal import CREATING
from .pages import PageSession
from .pipeline import ALL, RecordFilter, apply_view

logger = logging.getLogger(__name__)


def error_status(error: FarmApiError) -> int:
    if isinstance(error, RecordValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, RecordNotFound):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, HttpError) and 400 <= error.status_code < 500:
        return error.status_code
    if isinstance(error, ModalStateError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_502_BAD_GATEWAY


class RecordPageMixin:
    """Shared plumbing: store construction, session state and payload rendering."""

    page = None
    permission_classes = [AllowAny]

    def get_state(self, request) -> PageSession:
        return PageSession(request.session, self.page)

    def get_store(self, request):
        return self.page.build_store(request)

    def load_records(self, store):
        """Read failures degrade to an empty page rather than an error."""
        try:
            return store.load()
        except FarmApiError as e:
            logger.error(f"Loading {self.page.collection} failed: {e.message}")
            return []

    def page_payload(self, request, store, records):
        state = self.get_state(request)
        sort_state = state.sort
        record_filter = state.filter
        visible = apply_view(records, record_filter, sort_state, self.page.sort_keys)
        return {
            'collection': self.page.collection,
            'title': self.page.title,
            'local': self.page.is_local,
            'rows': [self.page.project(record) for record in visible],
            'count': len(visible),
            'total': len(records),
            'summary': self.page.summarize(records, store),
            'sort': sort_state.to_dict(),
            'sortKeys': list(self.page.sort_keys),
            'filter': record_filter.to_dict(),
            'filterFields': list(self.page.filter_fields),
            'choices': self.page.choices,
            'modal': state.modal.to_dict(),
        }

    def render_page(self, request, store=None, records=None, status_code=status.HTTP_200_OK, **extra):
        store = store or self.get_store(request)
        if records is None:
            records = self.load_records(store)
        payload = self.page_payload(request, store, records)
        payload.update(extra)
        return Response(payload, status=status_code)

    def alert(self, error: FarmApiError, **extra):
        body = {
            'success': False,
            'alert': error.message,
            'code': error.code,
        }
        if isinstance(error, RecordValidationError):
            body['fields'] = error.errors
        body.update(extra)
        return Response(body, status=error_status(error))


class RecordPageView(RecordPageMixin, APIView):
    def get(self, request):
        return self.render_page(request)


class RecordSortView(RecordPageMixin, APIView):
    def post(self, request):
        key = request.data.get('key')
        if key not in self.page.sort_keys:
            return self.alert(RecordValidationError(
                f"Unknown sort column: {key}", errors={'key': ['Unknown sort column.']}))

        state = self.get_state(request)
        sort_state = state.sort
        sort_state.toggle(key)
        state.sort = sort_state
        return self.render_page(request, success=True)


class RecordFilterView(RecordPageMixin, APIView):
    def post(self, request):
        field = request.data.get('field')
        value = request.data.get('value', ALL)
        if field not in self.page.filter_fields:
            return self.alert(RecordValidationError(
                f"Unknown filter field: {field}", errors={'field': ['Unknown filter field.']}))

        self.get_state(request).filter = RecordFilter(field=field, value=str(value) if value is not None else ALL)
        return self.render_page(request, success=True)


class ModalCreateView(RecordPageMixin, APIView):
    def post(self, request):
        state = self.get_state(request)
        modal = state.modal
        store = self.get_store(request)
        if modal.auto_numbered_fields:
            # The next number is derived from the full collection
            try:
                records = store.load()
            except FarmApiError as e:
                logger.error(f"Loading {self.page.collection} for numbering failed: {e.message}")
                return self.alert(e, modal=modal.to_dict())
        else:
            records = self.load_records(store)
        try:
            modal.open_create(records)
        except ModalStateError as e:
            return self.alert(e, modal=modal.to_dict())
        state.modal = modal
        return self.render_page(request, store=store, records=records, success=True)


class ModalEditView(RecordPageMixin, APIView):
    def post(self, request, record_id):
        state = self.get_state(request)
        modal = state.modal
        store = self.get_store(request)
        records = self.load_records(store)
        try:
            modal.open_edit(store.get(record_id))
        except FarmApiError as e:
            return self.alert(e, modal=modal.to_dict())
        state.modal = modal
        return self.render_page(request, store=store, records=records, success=True)


class ModalCancelView(RecordPageMixin, APIView):
    def post(self, request):
        state = self.get_state(request)
        modal = state.modal
        modal.cancel()
        state.modal = modal
        return self.render_page(request, success=True)


class ModalSubmitView(RecordPageMixin, APIView):
    def post(self, request):
        state = self.get_state(request)
        modal = state.modal
        store = self.get_store(request)
        self.load_records(store)
        fields = request.data.get('fields') or {}
        if not isinstance(fields, dict):
            return self.alert(RecordValidationError('fields must be an object'))

        creating = modal.state == CREATING
        try:
            record = modal.submit(fields, store)
        except FarmApiError as e:
            state.modal = modal
            return self.alert(e, modal=modal.to_dict())

        state.modal = modal
        logger.info(f"Saved {self.page.record_label} {record.get('id')} in {self.page.collection}")
        return self.render_page(
            request, store=store, records=store.records,
            status_code=status.HTTP_201_CREATED if creating else status.HTTP_200_OK,
            success=True, message=f"{self.page.record_label.capitalize()} saved successfully",
        )


class RecordDeleteView(RecordPageMixin, APIView):
    def post(self, request, record_id):
        store = self.get_store(request)
        self.load_records(store)
        confirmed = request.data.get('confirm') is True
        try:
            removed = store.remove(record_id, confirm=lambda: confirmed)
        except FarmApiError as e:
            return self.alert(e)

        if not removed:
            return self.render_page(request, store=store, records=store.records,
                                    success=False, message='Delete cancelled')
        return self.render_page(
            request, store=store, records=store.records,
            success=True, message=f"{self.page.record_label.capitalize()} deleted successfully",
        )
