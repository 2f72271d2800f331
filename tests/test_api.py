import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from grading.models import AssignmentSubmission


def _correct(question):
    return question.options.get(is_correct=True).pk


@pytest.fixture
def student_client(api_client, student):
    api_client.force_authenticate(user=student)
    return api_client


@pytest.fixture
def grader_client(grader):
    client = APIClient()
    client.force_authenticate(user=grader)
    return client


@pytest.fixture
def submitted_assignment(student, enrollment, make_assignment, student_client):
    assignment = make_assignment(points=(10, 10))
    q1, q2 = assignment.questions.order_by('position')
    student_client.post(
        reverse('submit_assignment', args=[assignment.pk]),
        {'answers': [{'question_id': q1.pk, 'text': "One"}, {'question_id': q2.pk, 'text': "Two"}]},
        format='json',
    )
    return AssignmentSubmission.objects.get(assignment=assignment, student=student), q1, q2


def test_submit_quiz_endpoint(student_client, enrollment, make_quiz):
    quiz = make_quiz(points=(5, 5))
    q1, _ = quiz.questions.order_by('position')
    url = reverse('submit_quiz', args=[quiz.pk])
    payload = {'answers': [{'question_id': q1.pk, 'option_id': _correct(q1)}]}

    response = student_client.post(url, payload, format='json')
    assert response.status_code == 201
    assert response.data['success'] is True
    assert response.data['data']['percentage'] == 50
    assert response.data['data']['total_possible'] == 10

    response = student_client.post(url, payload, format='json')
    assert response.status_code == 409
    assert response.data['error'] == "AlreadySubmitted"


def test_submit_quiz_requires_authentication(api_client, make_quiz):
    quiz = make_quiz()

    response = api_client.post(reverse('submit_quiz', args=[quiz.pk]), {'answers': []}, format='json')

    assert response.status_code == 401


def test_submit_quiz_with_empty_payload(student_client, enrollment, make_quiz):
    quiz = make_quiz()

    response = student_client.post(reverse('submit_quiz', args=[quiz.pk]), {'answers': []}, format='json')

    assert response.status_code == 400
    assert response.data['error'] == "ValidationError"


def test_submit_quiz_without_enrollment(student_client, make_quiz):
    quiz = make_quiz()
    q1, _ = quiz.questions.order_by('position')

    response = student_client.post(
        reverse('submit_quiz', args=[quiz.pk]),
        {'answers': [{'question_id': q1.pk, 'option_id': _correct(q1)}]},
        format='json',
    )

    assert response.status_code == 403
    assert response.data['error'] == "NotEligible"


def test_submit_quiz_with_foreign_question(student_client, enrollment, make_quiz):
    quiz = make_quiz()
    foreign = make_quiz().questions.first()

    response = student_client.post(
        reverse('submit_quiz', args=[quiz.pk]),
        {'answers': [{'question_id': foreign.pk, 'option_id': _correct(foreign)}]},
        format='json',
    )

    assert response.status_code == 400
    assert response.data['error'] == "InvalidQuestion"


def test_get_quiz_submission_endpoint(student_client, enrollment, make_quiz):
    quiz = make_quiz()
    q1, _ = quiz.questions.order_by('position')
    url = reverse('quiz_submission', args=[quiz.pk])

    assert student_client.get(url).status_code == 404

    student_client.post(
        reverse('submit_quiz', args=[quiz.pk]),
        {'answers': [{'question_id': q1.pk, 'option_id': _correct(q1)}]},
        format='json',
    )
    response = student_client.get(url)
    assert response.status_code == 200
    assert response.data['data']['status'] == "SUBMITTED"
    assert len(response.data['data']['answers']) == 1


def test_grade_and_regrade_endpoint(grader_client, submitted_assignment):
    submission, q1, q2 = submitted_assignment
    url = reverse('grade_assignment_submission', args=[submission.pk])

    response = grader_client.post(url, {
        'answers': [{'question_id': q1.pk, 'marks_awarded': 7}, {'question_id': q2.pk, 'marks_awarded': 6}],
        'overall_feedback': "Well argued",
    }, format='json')
    assert response.status_code == 200
    assert response.data['data']['total_grade'] == 13

    response = grader_client.patch(url, {'answers': [{'question_id': q1.pk, 'marks_awarded': 9}]}, format='json')
    assert response.status_code == 200
    assert response.data['data']['total_grade'] == 15
    assert response.data['data']['percentage'] == 75

    submission.refresh_from_db()
    assert submission.feedback == "Well argued"


def test_regrade_before_grading_is_conflict(grader_client, submitted_assignment):
    submission, q1, _ = submitted_assignment

    response = grader_client.patch(
        reverse('grade_assignment_submission', args=[submission.pk]),
        {'answers': [{'question_id': q1.pk, 'marks_awarded': 5}]},
        format='json',
    )

    assert response.status_code == 409
    assert response.data['error'] == "InvalidState"


def test_grade_with_marks_above_points(grader_client, submitted_assignment):
    submission, q1, _ = submitted_assignment

    response = grader_client.post(
        reverse('grade_assignment_submission', args=[submission.pk]),
        {'answers': [{'question_id': q1.pk, 'marks_awarded': 12}]},
        format='json',
    )

    assert response.status_code == 400
    assert response.data['error'] == "InvalidMarks"


def test_students_cannot_grade(student_client, submitted_assignment):
    submission, q1, _ = submitted_assignment

    response = student_client.post(
        reverse('grade_assignment_submission', args=[submission.pk]),
        {'answers': [{'question_id': q1.pk, 'marks_awarded': 10}]},
        format='json',
    )

    assert response.status_code == 403
    submission.refresh_from_db()
    assert submission.total_grade is None


def test_lesson_progress_and_certificate_endpoints(student_client, enrollment, series, course, make_lessons):
    (lesson,) = make_lessons(course, 1)
    certificate_url = reverse('series_certificate', args=[series.pk])

    response = student_client.get(certificate_url)
    assert response.status_code == 403

    response = student_client.post(reverse('mark_lesson_completed', args=[lesson.pk]))
    assert response.status_code == 200
    assert response.data['data']['is_completed'] is True

    response = student_client.get(reverse('series_progress', args=[series.pk]))
    assert response.status_code == 200
    assert response.data['data']['enrollment_status'] == "COMPLETED"
    assert response.data['data']['progress_percentage'] == 100.0

    response = student_client.get(certificate_url)
    assert response.status_code == 200
    assert response.data['data']['series']['id'] == series.pk


def test_obtain_token_and_use_it(api_client, student, enrollment, series):
    response = api_client.post(
        reverse('token_obtain_pair'),
        {'email': student.email, 'password': "s3cret-pass"},
        format='json',
    )
    assert response.status_code == 200

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
    response = api_client.get(reverse('series_progress', args=[series.pk]))
    assert response.status_code == 200


def test_completing_locked_lesson_is_conflict(student_client, enrollment, course, make_lessons):
    _, second = make_lessons(course, 2)

    response = student_client.post(reverse('mark_lesson_completed', args=[second.pk]))

    assert response.status_code == 409
    assert response.data['error'] == "InvalidState"
