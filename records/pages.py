"""
Record Page Definitions

A ``RecordPage`` describes one management screen: which collection backs
it, its schema, sortable and filterable columns, derived fields, summary
and modal form. The generic page views in ``records.views`` are mounted
once per page definition.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from django.conf import settings

from core.api_client import CollectionResource, FarmApiClient

from .modal import ModalController
from .pipeline import RecordFilter, SortKey, SortState
from .stores import RecordStore, RemoteRecordStore, SessionRecordStore


def _identity(record: Dict[str, Any]) -> Dict[str, Any]:
    return dict(record)


def _no_summary(records, store=None) -> Dict[str, Any]:
    return {}


@dataclass(eq=False)
class RecordPage:
    collection: str
    title: str
    serializer_class: Type
    modal_class: Type[ModalController]
    sort_keys: Dict[str, SortKey]
    filter_fields: Tuple[str, ...] = ()
    project: Callable[[Dict[str, Any]], Dict[str, Any]] = _identity
    summarize: Callable[..., Dict[str, Any]] = _no_summary
    seed: Tuple[Dict[str, Any], ...] = ()
    choices: Dict[str, List[str]] = field(default_factory=dict)
    record_label: str = 'record'

    @property
    def is_local(self) -> bool:
        return self.collection in settings.FARM_LOCAL_COLLECTIONS

    def build_store(self, request, client: Optional[FarmApiClient] = None) -> RecordStore:
        if self.is_local:
            return SessionRecordStore(
                request.session,
                key=f"records:{self.collection}",
                seed=self.seed,
                serializer_class=self.serializer_class,
                label=self.record_label,
            )
        resource = CollectionResource(client or FarmApiClient(), self.collection, self.serializer_class)
        return RemoteRecordStore(resource)


class PageSession:
    """Sort, filter and modal state for one page, held in the visitor's session."""

    def __init__(self, session, page: RecordPage):
        self.session = session
        self.page = page

    def _key(self, name: str) -> str:
        return f"page:{self.page.collection}:{name}"

    @property
    def sort(self) -> SortState:
        return SortState.from_dict(self.session.get(self._key('sort')))

    @sort.setter
    def sort(self, state: SortState):
        self.session[self._key('sort')] = state.to_dict()

    @property
    def filter(self) -> RecordFilter:
        return RecordFilter.from_dict(self.session.get(self._key('filter')))

    @filter.setter
    def filter(self, record_filter: RecordFilter):
        self.session[self._key('filter')] = record_filter.to_dict()

    @property
    def modal(self) -> ModalController:
        return self.page.modal_class.from_session(self.session.get(self._key('modal')))

    @modal.setter
    def modal(self, controller: ModalController):
        self.session[self._key('modal')] = controller.to_session()
