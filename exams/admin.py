from django.contrib import admin

# Register your models here.
from .models import Examination, Question


class QuestionInline(admin.TabularInline):
    model = Question
    extra = 0


@admin.register(Examination)
class ExaminationAdmin(admin.ModelAdmin):
    list_display = ('title', 'department', 'total_marks', 'passing_marks', 'duration_minutes', 'is_active')
    list_filter = ('department', 'is_active')
    inlines = [QuestionInline]
