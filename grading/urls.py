from django.urls import path
from .views import (
    AssignmentSubmissionView,
    GradeAssignmentSubmissionView,
    QuizSubmissionView,
    SubmitAssignmentView,
    SubmitQuizView,
)

urlpatterns = [
    path('quizzes/<int:quiz_id>/submit/', SubmitQuizView.as_view(), name='submit_quiz'),
    path('quizzes/<int:quiz_id>/submission/', QuizSubmissionView.as_view(), name='quiz_submission'),
    path('assignments/<int:assignment_id>/submit/', SubmitAssignmentView.as_view(), name='submit_assignment'),
    path('assignments/<int:assignment_id>/submission/', AssignmentSubmissionView.as_view(), name='assignment_submission'),
    path(
        'assignment-submissions/<int:submission_id>/grade/',
        GradeAssignmentSubmissionView.as_view(),
        name='grade_assignment_submission',
    ),
]
