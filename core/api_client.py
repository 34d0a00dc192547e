"""
Farm REST API Client

Thin wrapper over the farm backend's JSON API:
- Generic request handling with uniform error surfacing
- Collection resources bound to the /{collection} path templates
- Record schema validation at the client boundary
- Contact relay and health endpoints

Every collection follows the same shape:
    GET    /{collection}            -> {success, data: [record]}
    GET    /{collection}/{id}       -> {success, data: record}
    POST   /{collection}            -> {success, data: record, message?}
    PUT    /{collection}/{id}       -> {success, data: record, message?}
    DELETE /{collection}/{id}       -> {success, message?}
    GET    /{collection}/summary    -> {success, data: {...}}
"""

import logging
import requests
from typing import Optional, Dict, Any, List
from django.conf import settings

from .exceptions import HttpError, RecordValidationError, TransportError

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = 'Request failed'

# Fixed bound on every farm backend call, in seconds
REQUEST_TIMEOUT = 30


def normalize_record(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Expose the backend's ``_id`` as ``id``."""
    if not isinstance(doc, dict):
        return doc
    record = dict(doc)
    if '_id' in record:
        record['id'] = str(record.pop('_id'))
    return record


def validate_payload(serializer_class, payload: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Validate a record payload against its collection schema.

    Returns:
        Plain dict of validated values, JSON-safe.

    Raises:
        RecordValidationError: When the payload does not match the schema
    """
    serializer = serializer_class(data=payload, partial=partial)
    if not serializer.is_valid():
        errors = {field: [str(e) for e in errs] for field, errs in serializer.errors.items()}
        first_field = next(iter(errors), None)
        message = 'Invalid record'
        if first_field:
            message = f"{first_field}: {errors[first_field][0]}" if errors[first_field] else message
        raise RecordValidationError(message, errors=errors)
    return dict(serializer.validated_data)


class FarmApiClient:
    """
    Generic HTTP+JSON client for the farm backend.

    Usage:
        client = FarmApiClient()
        result = client.request('GET', '/egg-production')
        records = result['data']

    No retries and no auth headers. Any non-2xx response raises HttpError
    carrying the server's ``message`` (or a generic one); transport failures
    and timeouts raise TransportError.
    """

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or settings.FARM_API_BASE_URL).rstrip('/')

    def request(self, method: str, path: str, data: dict = None) -> Dict[str, Any]:
        """
        Make HTTP request to the farm API

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path (e.g., /egg-production/42)
            data: JSON request payload

        Returns:
            Parsed JSON response

        Raises:
            TransportError: Network failure, timeout or unreadable response body
            HttpError: Non-2xx status
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"Farm API request: {method} {url}")

        try:
            response = requests.request(method=method, url=url, json=data, timeout=REQUEST_TIMEOUT)
        except requests.exceptions.Timeout:
            logger.error(f"Farm API timeout: {method} {path}")
            raise TransportError(
                message="The farm server took too long to respond. Please try again.",
                code='TIMEOUT',
                details={'url': url, 'timeout': REQUEST_TIMEOUT}
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Farm API connection error: {method} {path}: {e}")
            raise TransportError(
                message="Unable to connect to the farm server. Please try again.",
                details={'url': url, 'error': str(e)}
            )

        try:
            result = response.json()
        except ValueError:
            result = None

        if not response.ok:
            error_message = GENERIC_FAILURE_MESSAGE
            if isinstance(result, dict) and result.get('message'):
                error_message = result['message']
            logger.error(f"Farm API error: {error_message}", extra={
                'path': path,
                'status_code': response.status_code,
            })
            raise HttpError(
                status_code=response.status_code,
                message=error_message,
                details={'response': result}
            )

        if not isinstance(result, dict):
            logger.error(f"Farm API returned a non-JSON body: {method} {path}")
            raise TransportError(
                message="The farm server returned an unreadable response.",
                code='INVALID_RESPONSE',
                details={'url': url}
            )

        return result

    def get(self, path: str) -> Dict[str, Any]:
        return self.request('GET', path)

    def post(self, path: str, data: dict) -> Dict[str, Any]:
        return self.request('POST', path, data)

    def put(self, path: str, data: dict) -> Dict[str, Any]:
        return self.request('PUT', path, data)

    def delete(self, path: str) -> Dict[str, Any]:
        return self.request('DELETE', path)

    # Non-CRUD endpoints

    def health(self) -> Dict[str, Any]:
        return self.get('/health')

    def send_contact(self, payload: dict) -> Dict[str, Any]:
        return self.post('/contact', payload)

    def test_contact(self) -> Dict[str, Any]:
        return self.get('/contact/test')


class CollectionResource:
    """
    A backend collection bound to its path templates and record schema.

    Records coming back from the server have ``_id`` renamed to ``id`` and
    are validated with ``serializer_class``; drafts are validated before
    they are sent.
    """

    def __init__(self, client: FarmApiClient, collection: str, serializer_class):
        self.client = client
        self.collection = collection
        self.serializer_class = serializer_class

    @property
    def path(self) -> str:
        return f"/{self.collection}"

    def _record_path(self, record_id) -> str:
        return f"{self.path}/{record_id}"

    def _to_record(self, doc) -> Dict[str, Any]:
        return validate_payload(self.serializer_class, normalize_record(doc))

    def _to_body(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        body = validate_payload(self.serializer_class, draft)
        body.pop('id', None)
        return body

    def list(self) -> List[Dict[str, Any]]:
        result = self.client.get(self.path)
        return [self._to_record(doc) for doc in result.get('data') or []]

    def get(self, record_id) -> Dict[str, Any]:
        result = self.client.get(self._record_path(record_id))
        return self._to_record(result.get('data'))

    def create(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        body = self._to_body(draft)
        result = self.client.post(self.path, body)
        if result.get('data') is None:
            return body
        return self._to_record(result['data'])

    def update(self, record_id, record: Dict[str, Any]) -> Dict[str, Any]:
        body = self._to_body(record)
        result = self.client.put(self._record_path(record_id), body)
        if result.get('data') is None:
            return {**body, 'id': record_id}
        return self._to_record(result['data'])

    def delete(self, record_id) -> Dict[str, Any]:
        return self.client.delete(self._record_path(record_id))

    def summary(self) -> Dict[str, Any]:
        result = self.client.get(f"{self.path}/summary")
        return result.get('data') or {}
