# courses/admin.py
from django.contrib import admin
from .models import Course, CourseProgress, Enrollment, Lesson, LessonProgress, Series


class CourseInline(admin.TabularInline):
    model = Course
    extra = 1
    fields = ("title", "position")


class LessonInline(admin.TabularInline):
    model = Lesson
    extra = 1
    fields = ("title", "position")


@admin.register(Series)
class SeriesAdmin(admin.ModelAdmin):
    list_display = ("title", "start_date", "end_date", "created_at")
    search_fields = ("title",)
    inlines = [CourseInline]


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("title", "series", "position")
    list_filter = ("series",)
    search_fields = ("title", "series__title")
    inlines = [LessonInline]


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ("user", "series", "status", "payment_status", "progress_percentage", "completed_at")
    list_filter = ("status", "payment_status")
    search_fields = ("user__email", "series__title")
    # Progress columns are owned by the progress aggregator.
    readonly_fields = ("progress_percentage", "completed_at")


@admin.register(CourseProgress)
class CourseProgressAdmin(admin.ModelAdmin):
    list_display = ("user", "course", "status", "completion_percentage", "completed_at")
    list_filter = ("status",)
    search_fields = ("user__email", "course__title")
    readonly_fields = ("status", "completion_percentage", "is_completed", "completed_at")


@admin.register(LessonProgress)
class LessonProgressAdmin(admin.ModelAdmin):
    list_display = ("user", "lesson", "is_completed", "completed_at")
    list_filter = ("is_completed",)
    search_fields = ("user__email", "lesson__title")
