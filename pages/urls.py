"""
Page Shell URL Configuration
"""

from django.urls import path

from .views import HealthView, HomeView, NavigationView, SearchView, StaticPageView

app_name = 'pages'

urlpatterns = [
    path('', HomeView.as_view(), name='home'),
    path('navigation/', NavigationView.as_view(), name='navigation'),
    path('about/', StaticPageView.as_view(slug='about'), name='about'),
    path('services/', StaticPageView.as_view(slug='services'), name='services'),
    path('search/', SearchView.as_view(), name='search'),
    path('health/', HealthView.as_view(), name='health'),
]
