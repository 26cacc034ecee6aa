# admissions/engine/exceptions.py


class AdmissionEngineError(Exception):
    """Base exception for admission engine errors."""

    pass


class InvalidGradingTableError(AdmissionEngineError):
    """The grading table cannot be used to score O'Level results."""

    pass


class UnknownGradeError(AdmissionEngineError):
    """An O'Level grade is not present in the grading table."""

    def __init__(self, grade, subject=None):
        self.grade = grade
        self.subject = subject
        if subject:
            message = f"Unknown O'Level grade '{grade}' for subject '{subject}'"
        else:
            message = f"Unknown O'Level grade '{grade}'"
        super().__init__(message)


class MissingDepartmentError(AdmissionEngineError):
    """Department cutoffs or weights are absent, so eligibility cannot be evaluated."""

    pass


class ConcurrentUpdateError(AdmissionEngineError):
    """
    Another recomputation changed the candidate while this one was running.
    Safe to retry.
    """

    def __init__(self, candidate_id, expected_version):
        self.candidate_id = candidate_id
        self.expected_version = expected_version
        super().__init__(
            f"Candidate {candidate_id} was modified concurrently "
            f"(expected version {expected_version}); retry the recomputation"
        )


class DuplicateSubjectError(AdmissionEngineError):
    """The same subject appears more than once in a candidate's O'Level results."""

    def __init__(self, subject):
        self.subject = subject
        super().__init__(f"Subject '{subject}' appears more than once")
