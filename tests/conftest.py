import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from admissions.engine.grading import STANDARD_GRADES
from admissions.models import Candidate, Department, GradingRule, OLevelResult
from assessments.models import TestAttempt
from exams.models import Examination, Question
from users.models import User

# B2, A1, B3, C4, B2 -> aggregate 38, 84%
SCENARIO_RESULTS = [
    ("Mathematics", "B2"),
    ("English Language", "A1"),
    ("Physics", "B3"),
    ("Chemistry", "C4"),
    ("Biology", "B2"),
]


@pytest.fixture(autouse=True)
def clear_cache():
    """PlatformSetting is cached; keep tests independent."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def grading_rules(db):
    return {
        grade: GradingRule.objects.create(grade=grade, marks=marks)
        for grade, marks in STANDARD_GRADES.items()
    }


@pytest.fixture
def department(db):
    return Department.objects.create(
        name="Computer Science",
        code="CSC",
        utme_cutoff_mark=250,
        olevel_cutoff_aggregate=25,
        final_cutoff_mark=70,
        exam_percentage=70,
        olevel_percentage=30,
    )


@pytest.fixture
def make_candidate(grading_rules, department):
    def _make(full_name="Amina Bello", utme_score=265, results=SCENARIO_RESULTS, user=None, department=department):
        candidate = Candidate.objects.create(
            user=user, full_name=full_name, utme_score=utme_score, department=department
        )
        for subject, grade in results:
            OLevelResult.objects.create(candidate=candidate, subject=subject, grade=grade, grading_rule=grading_rules[grade])
        return candidate
    return _make


@pytest.fixture
def candidate_user(db):
    return User.objects.create_user(
        username="amina", email="amina@example.com", password="s3cret-pass", first_name="Amina"
    )


@pytest.fixture
def candidate(make_candidate, candidate_user):
    return make_candidate(user=candidate_user)


@pytest.fixture
def officer(db):
    return User.objects.create_user(
        username="officer", email="officer@example.com", password="s3cret-pass",
        role=User.Role.ADMISSION_OFFICER,
    )


@pytest.fixture
def examination(department):
    """Ten marks over five two-mark questions; option 0 is always right."""
    exam = Examination.objects.create(
        department=department, title="CSC Screening Test", total_marks=10, duration_minutes=30
    )
    for n in range(5):
        Question.objects.create(
            examination=exam, text=f"Question {n + 1}", options=["right", "wrong", "also wrong"],
            correct_answer=0, marks=2,
        )
    return exam


@pytest.fixture
def attempt(candidate, examination):
    return TestAttempt.objects.create(
        candidate=candidate, examination=examination,
        status=TestAttempt.Status.IN_PROGRESS, total_marks=examination.total_marks,
    )


@pytest.fixture
def answer_sheet(examination):
    """Answers to every question, the first `correct` of them right."""
    def _answers(correct):
        questions = list(examination.questions.order_by('id'))
        return {q.id: (0 if i < correct else 1) for i, q in enumerate(questions)}
    return _answers


@pytest.fixture
def candidate_client(candidate_user, candidate):
    client = APIClient()
    client.force_authenticate(user=candidate_user)
    return client


@pytest.fixture
def officer_client(officer):
    client = APIClient()
    client.force_authenticate(user=officer)
    return client


@pytest.fixture
def anon_client():
    return APIClient()
