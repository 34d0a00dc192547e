"""
Tests for the generic record page endpoints, exercised through the
session-held task page.
"""
import pytest
from rest_framework import status

BASE = '/task-scheduling/'


def ids(response):
    return [row['id'] for row in response.data['rows']]


class TestPageView:

    def test_seeded_page(self, api_client):
        response = api_client.get(BASE)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['local'] is True
        assert ids(response) == [1, 2, 3, 4, 5]
        assert response.data['summary']['totalTasks'] == 5
        assert response.data['modal']['state'] == 'closed'
        assert 'Bird Care' in response.data['choices']['category']


class TestSortAndFilter:

    def test_sort_by_date_then_toggle(self, api_client):
        response = api_client.post(f'{BASE}sort/', {'key': 'date'})
        assert ids(response) == [2, 1, 4, 5, 3]

        response = api_client.post(f'{BASE}sort/', {'key': 'date'})
        assert response.data['sort'] == {'key': 'date', 'direction': 'desc'}
        assert ids(response) == [3, 5, 4, 1, 2]

    def test_sort_state_persists_between_requests(self, api_client):
        api_client.post(f'{BASE}sort/', {'key': 'time'})

        response = api_client.get(BASE)
        assert ids(response) == [5, 1, 2, 4, 3]

    def test_unknown_sort_key(self, api_client):
        response = api_client.post(f'{BASE}sort/', {'key': 'colour'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False

    def test_filter_and_clear(self, api_client):
        response = api_client.post(f'{BASE}filter/', {'field': 'status', 'value': 'Pending'})
        assert ids(response) == [1, 4]
        assert response.data['total'] == 5

        response = api_client.post(f'{BASE}filter/', {'field': 'status', 'value': 'all'})
        assert ids(response) == [1, 2, 3, 4, 5]


class TestModalFlow:

    def test_create_task(self, api_client):
        response = api_client.post(f'{BASE}modal/create/')
        assert response.data['modal']['state'] == 'creating'
        assert response.data['modal']['fields']['status'] == 'Pending'

        response = api_client.post(f'{BASE}modal/submit/', {'fields': {
            'date': '16/08/25',
            'taskDescription': 'Water line flush',
            'category': 'Cleaning & Maintenance',
            'assignedTo': 'Saman Kumara',
            'time': '05:30 PM',
        }})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        assert response.data['modal']['state'] == 'closed'
        assert ids(response)[-1] == 6
        assert response.data['summary']['pendingTasks'] == 3

        assert ids(api_client.get(BASE))[-1] == 6

    def test_validation_failure_keeps_modal_open(self, api_client):
        api_client.post(f'{BASE}modal/create/')

        response = api_client.post(f'{BASE}modal/submit/', {'fields': {'taskDescription': 'Incomplete'}})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['alert']
        assert response.data['modal']['state'] == 'creating'
        assert response.data['modal']['fields']['taskDescription'] == 'Incomplete'

        page = api_client.get(BASE)
        assert page.data['modal']['state'] == 'creating'
        assert page.data['modal']['error'] == response.data['alert']

    def test_deleted_maximum_id_is_not_reassigned(self, api_client):
        api_client.post(f'{BASE}records/5/delete/', {'confirm': True})
        api_client.post(f'{BASE}modal/create/')

        response = api_client.post(f'{BASE}modal/submit/', {'fields': {
            'date': '16/08/25',
            'taskDescription': 'Water line flush',
            'category': 'Cleaning & Maintenance',
            'assignedTo': 'Saman Kumara',
            'time': '05:30 PM',
        }})

        assert response.status_code == status.HTTP_201_CREATED
        assert ids(response) == [1, 2, 3, 4, 6]

    def test_open_twice_conflicts(self, api_client):
        api_client.post(f'{BASE}modal/create/')

        response = api_client.post(f'{BASE}modal/3/edit/')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['modal']['state'] == 'creating'

    def test_edit_task(self, api_client):
        response = api_client.post(f'{BASE}modal/3/edit/')
        assert response.data['modal']['state'] == 'editing'
        assert response.data['modal']['fields']['taskDescription'] == 'Inventory Check'

        response = api_client.post(f'{BASE}modal/submit/', {'fields': {'status': 'Pending'}})

        assert response.status_code == status.HTTP_200_OK
        row = next(r for r in response.data['rows'] if r['id'] == 3)
        assert row['status'] == 'Pending'
        assert ids(response) == [1, 2, 3, 4, 5]

    def test_edit_missing_record(self, api_client):
        response = api_client.post(f'{BASE}modal/99/edit/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['success'] is False

    def test_cancel(self, api_client):
        api_client.post(f'{BASE}modal/create/')

        response = api_client.post(f'{BASE}modal/cancel/')

        assert response.data['modal']['state'] == 'closed'

    def test_submit_without_open_form(self, api_client):
        response = api_client.post(f'{BASE}modal/submit/', {'fields': {}})

        assert response.status_code == status.HTTP_409_CONFLICT


class TestDelete:

    def test_cancelled_delete_changes_nothing(self, api_client):
        response = api_client.post(f'{BASE}records/2/delete/', {'confirm': False})

        assert response.data['success'] is False
        assert ids(response) == [1, 2, 3, 4, 5]

    @pytest.mark.parametrize('confirm', ['false', 'no', 1, 'true'])
    def test_only_literal_true_confirms(self, api_client, confirm):
        response = api_client.post(f'{BASE}records/2/delete/', {'confirm': confirm})

        assert response.data['success'] is False
        assert response.data['message'] == 'Delete cancelled'
        assert ids(api_client.get(BASE)) == [1, 2, 3, 4, 5]

    def test_confirmed_delete(self, api_client):
        response = api_client.post(f'{BASE}records/2/delete/', {'confirm': True})

        assert response.data['success'] is True
        assert ids(response) == [1, 3, 4, 5]
        assert ids(api_client.get(BASE)) == [1, 3, 4, 5]

    def test_delete_missing_record(self, api_client):
        response = api_client.post(f'{BASE}records/42/delete/', {'confirm': True})

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.parametrize('path', ['sort/', 'filter/', 'modal/create/', 'modal/cancel/'])
def test_mutating_endpoints_reject_get(api_client, path):
    assert api_client.get(f'{BASE}{path}').status_code == status.HTTP_405_METHOD_NOT_ALLOWED
