import logging

from courses.models import Course, CourseProgress, Enrollment, Series
from grading.exceptions import NotEligible, NotFound

from .enrollment_service import is_series_complete

logger = logging.getLogger(__name__)


def get_certificate_data(user, series_id):
    """
    Data a certificate generator needs for a completed series.

    Refuses with ``NotEligible`` unless the series completion gate holds.
    """
    try:
        series = Series.objects.get(pk=series_id)
    except Series.DoesNotExist:
        raise NotFound("Series not found.")

    if not is_series_complete(user, series_id):
        logger.info("Certificate refused for user %s: series %s not completed", user.pk, series_id)
        raise NotEligible("Complete every course of the series to receive a certificate.")

    enrollment = Enrollment.objects.get(user=user, series=series)
    progress = {
        row.course_id: row
        for row in CourseProgress.objects.filter(user=user, series=series)
    }

    return {
        'student': {
            'id': user.pk,
            'name': user.get_full_name(),
            'email': user.email,
        },
        'series': {
            'id': series.id,
            'title': series.title,
            'start_date': series.start_date,
            'end_date': series.end_date,
        },
        'completed_at': enrollment.completed_at,
        'courses': [
            {
                'course_id': course.id,
                'course_title': course.title,
                'completed_at': progress[course.id].completed_at if course.id in progress else None,
            }
            for course in Course.objects.filter(series=series)
        ],
    }
