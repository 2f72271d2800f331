from django.contrib import admin
from .models import (
    Assignment,
    AssignmentAnswer,
    AssignmentQuestion,
    AssignmentSubmission,
    Quiz,
    QuizAnswer,
    QuizOption,
    QuizQuestion,
    QuizSubmission,
)


class QuizQuestionInline(admin.TabularInline):
    model = QuizQuestion
    extra = 1
    fields = ('prompt', 'points', 'position')


class QuizOptionInline(admin.TabularInline):
    model = QuizOption
    extra = 2
    fields = ('option', 'is_correct', 'position')


class AssignmentQuestionInline(admin.TabularInline):
    model = AssignmentQuestion
    extra = 1
    fields = ('prompt', 'points', 'position')


class QuizAnswerInline(admin.TabularInline):
    model = QuizAnswer
    extra = 0
    readonly_fields = ('question', 'selected_option', 'answer_text', 'is_correct', 'points_awarded')
    can_delete = False


class AssignmentAnswerInline(admin.TabularInline):
    model = AssignmentAnswer
    extra = 0
    readonly_fields = ('question', 'answer_text', 'points_awarded', 'feedback')
    can_delete = False


@admin.register(Quiz)
class QuizAdmin(admin.ModelAdmin):
    list_display = ('title', 'series', 'course', 'publication_status', 'due_at')
    list_filter = ('publication_status',)
    search_fields = ('title',)
    inlines = [QuizQuestionInline]


@admin.register(QuizQuestion)
class QuizQuestionAdmin(admin.ModelAdmin):
    list_display = ('prompt', 'quiz', 'points', 'position')
    search_fields = ('prompt', 'quiz__title')
    inlines = [QuizOptionInline]


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ('title', 'series', 'course', 'publication_status', 'due_at')
    list_filter = ('publication_status',)
    search_fields = ('title',)
    inlines = [AssignmentQuestionInline]


# Submissions are written only by the graders.
@admin.register(QuizSubmission)
class QuizSubmissionAdmin(admin.ModelAdmin):
    list_display = ('student', 'quiz', 'status', 'total_grade', 'percentage', 'submitted_at')
    list_filter = ('status', 'is_late')
    search_fields = ('student__email', 'quiz__title')
    readonly_fields = ('student', 'quiz', 'status', 'total_grade', 'percentage', 'submitted_at', 'graded_at')
    inlines = [QuizAnswerInline]


@admin.register(AssignmentSubmission)
class AssignmentSubmissionAdmin(admin.ModelAdmin):
    list_display = ('student', 'assignment', 'status', 'total_grade', 'percentage', 'graded_at')
    list_filter = ('status', 'is_late')
    search_fields = ('student__email', 'assignment__title')
    readonly_fields = (
        'student', 'assignment', 'status', 'total_grade', 'percentage', 'submitted_at', 'graded_at', 'graded_by',
    )
    inlines = [AssignmentAnswerInline]
