"""
Task Scheduling URL Configuration
"""

from records.urls import page_urlpatterns

from .services import TASK_PAGE

app_name = 'task_scheduling'

urlpatterns = page_urlpatterns(TASK_PAGE)
