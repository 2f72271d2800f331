# models.py
"""
Domain models for the courses application.

Sections:

1.  Course structure (series, courses, lessons)
2.  Enrollment and progress tracking
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

# ---------------------------------------------------------------------------
# Course Structure
# ---------------------------------------------------------------------------


class Series(models.Model):
    """A diploma track made of several courses."""
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Series"
        ordering = ["created_at"]

    def __str__(self):
        return self.title


class Course(models.Model):
    series = models.ForeignKey(Series, on_delete=models.CASCADE, related_name="courses")
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Courses"
        ordering = ["position", "created_at", "id"]
        indexes = [
            models.Index(fields=["series", "position"], name="course_series_position_idx"),
        ]

    def __str__(self):
        return f"{self.series.title} - {self.title}"


class Lesson(models.Model):
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="lessons")
    title = models.CharField(max_length=200)
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Lessons"
        ordering = ["course", "position", "id"]

    def __str__(self):
        return f"{self.id}: {self.course.title} - {self.title}"


# ---------------------------------------------------------------------------
# Enrollment & Progress
# ---------------------------------------------------------------------------


class Enrollment(models.Model):
    class Status(models.TextChoices):
        ACTIVE = "ACTIVE", "Active"
        COMPLETED = "COMPLETED", "Completed"
        CANCELLED = "CANCELLED", "Cancelled"

    PAYMENT_STATUS_CHOICES = [
        ('completed', 'Completed'),
        ('pending', 'Pending'),
        ('failed', 'Failed'),
    ]

    # Statuses that let a student submit work in the series.
    ELIGIBLE_STATUSES = (Status.ACTIVE, Status.COMPLETED)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='enrollments', db_index=True
    )
    series = models.ForeignKey(
        Series, on_delete=models.CASCADE, related_name='enrollments', db_index=True
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    payment_status = models.CharField(
        max_length=20,
        choices=PAYMENT_STATUS_CHOICES,
        default='completed'
    )
    progress_percentage = models.DecimalField(
        max_digits=5, decimal_places=2, default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    enrolled_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-enrolled_at']
        constraints = [
            models.UniqueConstraint(fields=['series', 'user'], name='unique_enrollment_per_series_user'),
        ]
        indexes = [
            models.Index(fields=["user", "status"], name="enrollment_user_status_idx"),
        ]
        verbose_name_plural = "Enrollments"

    def __str__(self):
        return f"{self.user} - {self.series.title} ({self.status})"

    @property
    def is_eligible(self):
        return self.status in self.ELIGIBLE_STATUSES and self.payment_status == 'completed'


class LessonProgress(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='lesson_progress', db_index=True
    )
    lesson = models.ForeignKey(
        Lesson, on_delete=models.CASCADE, related_name='student_progress', db_index=True
    )
    is_completed = models.BooleanField(default=False)
    first_accessed = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['lesson', 'user'], name='unique_lesson_progress_per_user'),
        ]
        verbose_name_plural = "LessonProgress"

    def __str__(self):
        return f"{self.user} - {self.lesson.title} - {'done' if self.is_completed else 'open'}"


class CourseProgress(models.Model):
    """Per-user completion of one course. COMPLETED is terminal."""

    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        IN_PROGRESS = "IN_PROGRESS", "In progress"
        COMPLETED = "COMPLETED", "Completed"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='course_progress', db_index=True
    )
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='progress_records')
    series = models.ForeignKey(Series, on_delete=models.CASCADE, related_name='course_progress')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    completion_percentage = models.DecimalField(
        max_digits=5, decimal_places=2, default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    is_completed = models.BooleanField(default=False)
    started_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['course', 'user'], name='unique_course_progress_per_user'),
        ]
        indexes = [
            models.Index(fields=["user", "series"], name="progress_user_series_idx"),
        ]
        verbose_name_plural = "Course Progress"

    def __str__(self):
        return f"{self.user} - {self.course.title} - {self.completion_percentage}% ({self.status})"
