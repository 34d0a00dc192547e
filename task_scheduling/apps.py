from django.apps import AppConfig


class TaskSchedulingConfig(AppConfig):
    name = 'task_scheduling'
    verbose_name = 'Task Scheduling'
