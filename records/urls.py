from django.urls import path

from . import views


def page_urlpatterns(page):
    """URL patterns for one record page; include them under the collection prefix."""
    return [
        path('', views.RecordPageView.as_view(page=page), name='page'),
        path('sort/', views.RecordSortView.as_view(page=page), name='sort'),
        path('filter/', views.RecordFilterView.as_view(page=page), name='filter'),
        path('modal/create/', views.ModalCreateView.as_view(page=page), name='modal-create'),
        path('modal/<str:record_id>/edit/', views.ModalEditView.as_view(page=page), name='modal-edit'),
        path('modal/cancel/', views.ModalCancelView.as_view(page=page), name='modal-cancel'),
        path('modal/submit/', views.ModalSubmitView.as_view(page=page), name='modal-submit'),
        path('records/<str:record_id>/delete/', views.RecordDeleteView.as_view(page=page), name='delete'),
    ]
