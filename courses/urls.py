from django.urls import path
from .views import (
    get_certificate_view,
    get_series_progress_view,
    mark_lesson_completed_view,
)

urlpatterns = [
    path('lessons/<int:lesson_id>/complete/', mark_lesson_completed_view, name='mark_lesson_completed'),
    path('series/<int:series_id>/progress/', get_series_progress_view, name='series_progress'),
    path('series/<int:series_id>/certificate/', get_certificate_view, name='series_certificate'),
]
