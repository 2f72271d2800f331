import pytest

from courses.models import Course
from courses.services.certificate_service import get_certificate_data
from courses.services.progress_service import mark_course_completed
from grading.exceptions import NotEligible, NotFound


def test_certificate_refused_until_every_course_completed(student, enrollment, series, course):
    Course.objects.create(series=series, title="Statistics", position=2)
    mark_course_completed(student, course.pk)

    with pytest.raises(NotEligible):
        get_certificate_data(student, series.pk)


def test_certificate_refused_without_enrollment(other_student, series):
    with pytest.raises(NotEligible):
        get_certificate_data(other_student, series.pk)


def test_certificate_data_for_completed_series(student, enrollment, series, course):
    second = Course.objects.create(series=series, title="Statistics", position=2)
    mark_course_completed(student, course.pk)
    mark_course_completed(student, second.pk)

    data = get_certificate_data(student, series.pk)

    enrollment.refresh_from_db()
    assert data['student'] == {'id': student.pk, 'name': "Hana Tesfaye", 'email': student.email}
    assert data['series']['title'] == series.title
    assert data['completed_at'] == enrollment.completed_at
    assert [c['course_id'] for c in data['courses']] == [course.pk, second.pk]
    assert all(c['completed_at'] is not None for c in data['courses'])


def test_certificate_for_unknown_series(student):
    with pytest.raises(NotFound):
        get_certificate_data(student, 999999)
