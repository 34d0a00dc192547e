"""
Record Stores

One owned collection object per page, injected into the page views:

- RemoteRecordStore: backend-wired collections. The local list is a
  read-through cache; every mutation is applied locally and then
  re-fetched from the server, whose order wins.
- LocalRecordStore: collections with no backend wiring. Identity is one
  past the highest id ever issued, so ids are never reused after a delete.
- SessionRecordStore: a LocalRecordStore persisted in the visitor's session.

Errors from the Resource Client propagate unchanged; the calling view is
responsible for reporting them.
"""

import copy
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from core.api_client import CollectionResource, validate_payload
from core.exceptions import FarmApiError, RecordNotFound

from .numbering import next_local_id

logger = logging.getLogger(__name__)


def same_id(left, right) -> bool:
    """Ids arrive as ints (local), strings (backend) or URL path segments."""
    return left is not None and right is not None and str(left) == str(right)


class RecordStore:
    """Common contract: load / get / create / update / remove."""

    label = 'record'

    def __init__(self):
        self.records: List[Dict[str, Any]] = []

    def load(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def create(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def update(self, record_id, patch: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def _delete(self, record_id, index: Optional[int]) -> None:
        raise NotImplementedError

    def get(self, record_id) -> Dict[str, Any]:
        return self.records[self._index(record_id)]

    def _index(self, record_id) -> int:
        for i, record in enumerate(self.records):
            if same_id(record.get('id'), record_id):
                return i
        raise RecordNotFound(f"No {self.label} with id {record_id}", details={'id': str(record_id)})

    def remove(self, record_id, confirm: Callable[[], bool]) -> bool:
        """
        Delete a record after explicit confirmation.

        Returns:
            False when the confirmation was declined (nothing changes),
            True once the record is gone.
        """
        if not confirm():
            logger.info(f"Delete of {self.label} {record_id} cancelled")
            return False
        self._delete(record_id, self._locate(record_id))
        return True

    def _locate(self, record_id) -> Optional[int]:
        return self._index(record_id)


class RemoteRecordStore(RecordStore):
    """Read-through cache over a backend collection."""

    def __init__(self, resource: CollectionResource):
        super().__init__()
        self.resource = resource
        self.label = resource.collection
        self.loaded = False

    def load(self) -> List[Dict[str, Any]]:
        self.records = self.resource.list()
        self.loaded = True
        return self.records

    def refresh(self) -> None:
        """Authoritative re-fetch after a mutation; a failure keeps the optimistic list."""
        try:
            self.load()
        except FarmApiError as e:
            logger.error(f"Re-fetch of {self.label} after mutation failed: {e.message}")

    def _locate(self, record_id) -> Optional[int]:
        return self._index(record_id) if self.loaded else None

    def get(self, record_id) -> Dict[str, Any]:
        if not self.loaded:
            return self.resource.get(record_id)
        return super().get(record_id)

    def create(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        created = self.resource.create(draft)
        self.records.append(created)
        self.refresh()
        return created

    def update(self, record_id, patch: Dict[str, Any]) -> Dict[str, Any]:
        index = self._locate(record_id)
        updated = self.resource.update(record_id, patch)
        if index is not None:
            self.records[index] = updated
        self.refresh()
        return updated

    def _delete(self, record_id, index: Optional[int]) -> None:
        self.resource.delete(record_id)
        if index is not None:
            self.records.pop(index)
        self.refresh()


class LocalRecordStore(RecordStore):
    """Client-only collection; nothing leaves the process."""

    def __init__(self, records: Optional[Iterable[Dict[str, Any]]] = None, serializer_class=None,
                 label: str = 'record', last_id: int = 0):
        super().__init__()
        self.records = [dict(r) for r in records or ()]
        self.last_id = next_local_id(self.records, last_id) - 1
        self.serializer_class = serializer_class
        self.label = label

    def load(self) -> List[Dict[str, Any]]:
        return self.records

    def _validate(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self.serializer_class is None:
            return dict(payload)
        return validate_payload(self.serializer_class, payload)

    def create(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        record = self._validate(draft)
        record['id'] = next_local_id(self.records, self.last_id)
        self.last_id = record['id']
        self.records.append(record)
        self.save()
        return record

    def update(self, record_id, patch: Dict[str, Any]) -> Dict[str, Any]:
        index = self._index(record_id)
        record = self._validate(patch)
        record['id'] = self.records[index]['id']
        self.records[index] = record
        self.save()
        return record

    def _delete(self, record_id, index: Optional[int]) -> None:
        self.records.pop(index)
        self.save()

    def save(self) -> None:
        pass


class SessionRecordStore(LocalRecordStore):
    """
    Local collection kept in the Django session, seeded on first use.

    The id high-water mark is stored beside the records under
    ``<key>:last_id``.
    """

    def __init__(self, session, key: str, seed: Iterable[Dict[str, Any]] = (), serializer_class=None,
                 label: str = 'record'):
        self.session = session
        self.key = key
        if key not in session:
            session[key] = copy.deepcopy(list(seed))
        super().__init__(
            records=copy.deepcopy(session[key]),
            serializer_class=serializer_class,
            label=label,
            last_id=session.get(self.last_id_key, 0),
        )

    @property
    def last_id_key(self) -> str:
        return f"{self.key}:last_id"

    def save(self) -> None:
        self.session[self.key] = copy.deepcopy(self.records)
        self.session[self.last_id_key] = self.last_id
        self.session.modified = True
