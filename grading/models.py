"""
Assessment and submission models.

Quizzes are auto-graded against the correct options of their questions.
Assignments are graded by a human, answer by answer. Both kinds share the
same submission lifecycle (``NOT_STARTED -> SUBMITTED -> GRADED``) and the
same percentage rule, kept in the abstract bases below.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .utils import compute_percentage

# ---------------------------------------------------------------------------
# Shared bases
# ---------------------------------------------------------------------------


class PublicationStatus(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    PUBLISHED = "PUBLISHED", "Published"
    LOCKED = "LOCKED", "Locked"


class SubmissionStatus(models.TextChoices):
    NOT_STARTED = "NOT_STARTED", "Not started"
    SUBMITTED = "SUBMITTED", "Submitted"
    GRADED = "GRADED", "Graded"


class Assessment(models.Model):
    title = models.CharField(max_length=200)
    instructions = models.TextField(blank=True)
    publication_status = models.CharField(
        max_length=20, choices=PublicationStatus.choices, default=PublicationStatus.DRAFT
    )
    due_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def total_marks(self):
        return sum(q.points for q in self.questions.all())


class Question(models.Model):
    prompt = models.TextField()
    points = models.PositiveIntegerField(default=0)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        abstract = True
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.prompt[:50]} ({self.points} pts)"


class Submission(models.Model):
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='%(class)ss'
    )
    status = models.CharField(
        max_length=20, choices=SubmissionStatus.choices, default=SubmissionStatus.NOT_STARTED
    )
    total_grade = models.FloatField(null=True, blank=True)
    percentage = models.PositiveIntegerField(
        null=True, blank=True, validators=[MaxValueValidator(100)]
    )
    feedback = models.TextField(null=True, blank=True)
    is_late = models.BooleanField(default=False)
    submitted_at = models.DateTimeField(null=True, blank=True)
    graded_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-submitted_at']

    @property
    def is_graded(self):
        return self.status == SubmissionStatus.GRADED

    def apply_total(self, total_grade, total_possible):
        """Set total_grade and the derived percentage (not saved)."""
        self.total_grade = total_grade
        self.percentage = compute_percentage(total_grade, total_possible)


class Answer(models.Model):
    points_awarded = models.FloatField(
        null=True, blank=True, validators=[MinValueValidator(0)]
    )
    feedback = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


# ---------------------------------------------------------------------------
# Quizzes
# ---------------------------------------------------------------------------


class Quiz(Assessment):
    series = models.ForeignKey('courses.Series', on_delete=models.CASCADE, related_name='quizzes')
    course = models.ForeignKey(
        'courses.Course', on_delete=models.CASCADE, null=True, blank=True, related_name='quizzes'
    )

    class Meta(Assessment.Meta):
        verbose_name_plural = "Quizzes"


class QuizQuestion(Question):
    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name='questions')

    class Meta(Question.Meta):
        verbose_name_plural = "Quiz Questions"


class QuizOption(models.Model):
    question = models.ForeignKey(QuizQuestion, on_delete=models.CASCADE, related_name='options')
    option = models.CharField(max_length=500)
    is_correct = models.BooleanField(default=False)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['position', 'id']
        verbose_name_plural = "Quiz Options"

    def __str__(self):
        return f"{self.option} ({'correct' if self.is_correct else 'wrong'})"


class QuizSubmission(Submission):
    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name='submissions')

    class Meta(Submission.Meta):
        verbose_name_plural = "Quiz Submissions"
        constraints = [
            models.UniqueConstraint(fields=['quiz', 'student'], name='unique_quiz_submission_per_student'),
        ]

    def __str__(self):
        return f"{self.student} - {self.quiz.title} - {self.status}"


class QuizAnswer(Answer):
    submission = models.ForeignKey(QuizSubmission, on_delete=models.CASCADE, related_name='answers')
    question = models.ForeignKey(QuizQuestion, on_delete=models.CASCADE, related_name='student_answers')
    selected_option = models.ForeignKey(
        QuizOption, on_delete=models.SET_NULL, null=True, blank=True, related_name='selected_in_answers'
    )
    answer_text = models.TextField(null=True, blank=True)
    is_correct = models.BooleanField(default=False)

    class Meta:
        verbose_name_plural = "Quiz Answers"
        constraints = [
            models.UniqueConstraint(fields=['submission', 'question'], name='unique_quiz_answer_per_question'),
        ]

    def __str__(self):
        return f"{self.submission_id} - {self.question.prompt[:50]}"


# ---------------------------------------------------------------------------
# Assignments
# ---------------------------------------------------------------------------


class Assignment(Assessment):
    series = models.ForeignKey('courses.Series', on_delete=models.CASCADE, related_name='assignments')
    course = models.ForeignKey(
        'courses.Course', on_delete=models.CASCADE, null=True, blank=True, related_name='assignments'
    )

    class Meta(Assessment.Meta):
        verbose_name_plural = "Assignments"


class AssignmentQuestion(Question):
    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name='questions')

    class Meta(Question.Meta):
        verbose_name_plural = "Assignment Questions"


class AssignmentSubmission(Submission):
    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name='submissions')
    graded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='graded_assignment_submissions'
    )

    class Meta(Submission.Meta):
        verbose_name_plural = "Assignment Submissions"
        constraints = [
            models.UniqueConstraint(
                fields=['assignment', 'student'], name='unique_assignment_submission_per_student'
            ),
        ]

    def __str__(self):
        return f"{self.student} - {self.assignment.title} - {self.status}"


class AssignmentAnswer(Answer):
    submission = models.ForeignKey(AssignmentSubmission, on_delete=models.CASCADE, related_name='answers')
    question = models.ForeignKey(AssignmentQuestion, on_delete=models.CASCADE, related_name='student_answers')
    answer_text = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name_plural = "Assignment Answers"
        constraints = [
            models.UniqueConstraint(
                fields=['submission', 'question'], name='unique_assignment_answer_per_question'
            ),
        ]

    def __str__(self):
        return f"{self.submission_id} - {self.question.prompt[:50]}"
