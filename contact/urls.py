"""
Contact URL Configuration
"""
from django.urls import path
from .views import ContactFormSubmitView, ContactConfigTestView

app_name = 'contact'

urlpatterns = [
    path('', ContactFormSubmitView.as_view(), name='submit'),
    path('test/', ContactConfigTestView.as_view(), name='test'),
]
