from packages.ias_session.dto import Evaluation, AnalysisScores

NEUTRAL_SUB_SCORE = 5.0
NEUTRAL_FEEDBACK = (
    "Evaluation system temporarily unavailable. "
    "Please review your answer for clarity and relevance."
)


def neutral_evaluation(max_score: float, reason: str, score: float = 5) -> Evaluation:
    """
    Stand-in evaluation used when the evaluator fails.
    Scores min(score, max_score) and records the failure.
    """
    return Evaluation(
        score=min(float(score), max_score),
        max_score=max_score,
        feedback=NEUTRAL_FEEDBACK,
        strengths=["Good attempt at answering the question"],
        weaknesses=["Evaluation system temporarily unavailable"],
        suggestions=["Try to be more specific in your answers", "Include relevant examples"],
        analysis=AnalysisScores(
            technical_accuracy=NEUTRAL_SUB_SCORE,
            communication_skills=NEUTRAL_SUB_SCORE,
            problem_solving=NEUTRAL_SUB_SCORE,
            confidence=NEUTRAL_SUB_SCORE,
            relevance=NEUTRAL_SUB_SCORE,
        ),
        degraded=True,
        failure_reason=reason,
    )
