from typing import List, Optional, Tuple


class GradeMapper:
    """
    Maps percentages to grades, labels and summary text.
    """

    # Contiguous ladder, checked top-down
    GRADE_LADDER: List[Tuple[int, str]] = [
        (90, "A+"),
        (85, "A"),
        (80, "A-"),
        (75, "B+"),
        (70, "B"),
        (65, "B-"),
        (60, "C+"),
        (55, "C"),
        (50, "C-"),
    ]
    FAILING_GRADE = "F"

    @classmethod
    def get_grade(cls, percentage: float) -> str:
        for threshold, grade in cls.GRADE_LADDER:
            if percentage >= threshold:
                return grade
        return cls.FAILING_GRADE

    @classmethod
    def get_performance_label(cls, percentage: float) -> str:
        if percentage >= 80: return "Excellent"
        if percentage >= 65: return "Good"
        if percentage >= 50: return "Fair"
        return "Needs Improvement"

    @classmethod
    def get_summary(cls, percentage: int, grade: str) -> str:
        if percentage >= 85:
            return (
                f"Excellent performance! You scored {percentage}% with a grade of {grade}. "
                "Your responses demonstrated strong knowledge and clear communication across topics."
            )
        if percentage >= 70:
            return (
                f"Good performance! You scored {percentage}% with a grade of {grade}. "
                "You showed solid understanding with room for improvement in certain areas."
            )
        if percentage >= 55:
            return (
                f"Fair performance. You scored {percentage}% with a grade of {grade}. "
                "Focus on the areas for improvement to enhance your interview skills."
            )
        return (
            f"You scored {percentage}% with a grade of {grade}. "
            "Review the feedback carefully and practice more."
        )

    @classmethod
    def get_job_fit_analysis(cls, job_fit_score: Optional[float]) -> Optional[str]:
        if job_fit_score is None:
            return None
        if job_fit_score >= 7:
            label = "Excellent match"
        elif job_fit_score >= 5:
            label = "Good match"
        else:
            label = "Needs alignment"
        return f"Job Fit Score: {job_fit_score:.1f}/10 - {label}"
