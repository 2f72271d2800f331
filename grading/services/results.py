from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class SubmissionResult:
    submission_id: int
    total_grade: float
    total_possible: int
    percentage: int
    status: str

    @classmethod
    def from_submission(cls, submission, total_possible):
        return cls(
            submission_id=submission.pk,
            total_grade=submission.total_grade or 0,
            total_possible=total_possible,
            percentage=submission.percentage or 0,
            status=submission.status,
        )

    def as_dict(self):
        return asdict(self)
