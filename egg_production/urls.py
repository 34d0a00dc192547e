"""
Egg Production URL Configuration
"""

from records.urls import page_urlpatterns

from .services import PRODUCTION_PAGE

app_name = 'egg_production'

urlpatterns = page_urlpatterns(PRODUCTION_PAGE)
