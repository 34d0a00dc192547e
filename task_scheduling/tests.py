"""
Tests for task scheduling.
"""
from task_scheduling.services import SEED_TASKS, minutes_of_day, summarize_tasks


def test_summary_counts_by_status_and_category():
    summary = summarize_tasks(list(SEED_TASKS))

    assert summary['totalTasks'] == 5
    assert summary['pendingTasks'] == 2
    assert summary['inProgressTasks'] == 2
    assert summary['completedTasks'] == 1
    assert summary['byCategory']['Bird Care'] == 1
    assert sum(summary['byCategory'].values()) == 5


def test_minutes_of_day():
    assert minutes_of_day({'time': '07:00 AM'}) == 420
    assert minutes_of_day({'time': '05:30 pm'}) == 17 * 60 + 30
    assert minutes_of_day({'time': 'dawn'}) == 0
    assert minutes_of_day({}) == 0


def test_category_filter(api_client):
    response = api_client.post('/task-scheduling/filter/', {'field': 'category', 'value': 'Inventory'})

    assert [r['taskDescription'] for r in response.data['rows']] == ['Inventory Check']


def test_unknown_category_rejected(api_client):
    api_client.post('/task-scheduling/modal/create/')

    response = api_client.post('/task-scheduling/modal/submit/', {'fields': {
        'date': '16/08/25', 'taskDescription': 'Paint coop', 'category': 'Painting',
        'assignedTo': 'Priya Perera', 'time': '09:00 AM',
    }})

    assert response.status_code == 400
    assert 'category' in response.data['fields']
