"""
Task Scheduling Service
"""

from datetime import datetime
from typing import Any, Dict, List

from records.modal import ModalController
from records.pages import RecordPage
from records.pipeline import DATE, NUMBER, TEXT, SortKey
from records.serializers import choice_values

from .serializers import CATEGORY_CHOICES, STATUS_CHOICES, TaskSerializer

TIME_FORMAT = '%I:%M %p'

SEED_TASKS = (
    {'id': 1, 'date': '12/08/25', 'taskDescription': 'Morning Egg Collection', 'category': 'Egg Collection',
     'assignedTo': 'Anusha Silva', 'time': '07:00 AM', 'status': 'Pending'},
    {'id': 2, 'date': '10/08/25', 'taskDescription': 'Feed Distribution', 'category': 'Feed Management',
     'assignedTo': 'Chaminda Fernando', 'time': '08:00 AM', 'status': 'In Progress'},
    {'id': 3, 'date': '15/08/25', 'taskDescription': 'Inventory Check', 'category': 'Inventory',
     'assignedTo': 'Ruwan Jayasuriya', 'time': '10:00 AM', 'status': 'Completed'},
    {'id': 4, 'date': '13/08/25', 'taskDescription': 'Vaccination Check - Flock A', 'category': 'Bird Care',
     'assignedTo': 'Priya Perera', 'time': '09:00 AM', 'status': 'Pending'},
    {'id': 5, 'date': '14/08/25', 'taskDescription': 'Coop Disinfection - Batch B003',
     'category': 'Cleaning & Maintenance', 'assignedTo': 'Saman Kumara', 'time': '06:00 AM',
     'status': 'In Progress'},
)


def minutes_of_day(record: Dict[str, Any]) -> int:
    """``07:00 AM`` -> 420; unparseable times sort first."""
    try:
        parsed = datetime.strptime(str(record.get('time') or '').strip().upper(), TIME_FORMAT)
    except ValueError:
        return 0
    return parsed.hour * 60 + parsed.minute


class TaskModal(ModalController):
    default_fields = {
        'date': '',
        'taskDescription': '',
        'category': '',
        'assignedTo': '',
        'time': '',
        'status': 'Pending',
    }
    create_title = 'Add New Task'
    edit_title = 'Edit Task'


def summarize_tasks(records: List[Dict[str, Any]], store=None) -> Dict[str, Any]:
    by_status = {value: 0 for value in choice_values(STATUS_CHOICES)}
    by_category = {value: 0 for value in choice_values(CATEGORY_CHOICES)}
    for task in records:
        if task.get('status') in by_status:
            by_status[task['status']] += 1
        if task.get('category') in by_category:
            by_category[task['category']] += 1

    return {
        'totalTasks': len(records),
        'pendingTasks': by_status['Pending'],
        'inProgressTasks': by_status['In Progress'],
        'completedTasks': by_status['Completed'],
        'byCategory': by_category,
    }


SORT_KEYS = {
    'date': SortKey('date', DATE),
    'taskDescription': SortKey('taskDescription', TEXT),
    'category': SortKey('category', TEXT),
    'assignedTo': SortKey('assignedTo', TEXT),
    'time': SortKey('time', NUMBER, accessor=minutes_of_day),
    'status': SortKey('status', TEXT),
}

TASK_PAGE = RecordPage(
    collection='task-scheduling',
    title='Task Scheduling',
    serializer_class=TaskSerializer,
    modal_class=TaskModal,
    sort_keys=SORT_KEYS,
    filter_fields=('status', 'category', 'assignedTo'),
    summarize=summarize_tasks,
    seed=SEED_TASKS,
    choices={
        'category': choice_values(CATEGORY_CHOICES),
        'status': choice_values(STATUS_CHOICES),
    },
    record_label='task',
)
