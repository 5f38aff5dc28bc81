import logging
from collections import Counter, defaultdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from packages.ias_core.errors import ResultsNotReadyError
from packages.ias_session.dto import Evaluation, InterviewSession
from packages.ias_session.state import SessionStatus
from packages.ias_report.dto import CategoryAggregate, CertificateData, ResultsBundle
from packages.ias_report.mapping import GradeMapper

logger = logging.getLogger("ias.report")

TOP_FEEDBACK_ITEMS = 5


def round_half_up(value: float) -> int:
    """0.5 rounds away from zero, unlike the built-in round()."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentage_of(score: float, max_score: float) -> int:
    if max_score <= 0:
        return 0
    return round_half_up(score / max_score * 100)


def mean_of_present(values: List[Optional[float]]) -> Optional[float]:
    """Arithmetic mean over non-None values; None when there are none."""
    present = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


class ResultsComposer:
    """
    Business Logic Component for the results layer.
    Converts a completed InterviewSession -> ResultsBundle.
    """

    @staticmethod
    def compose(session: InterviewSession) -> ResultsBundle:
        if session.status != SessionStatus.COMPLETED:
            raise ResultsNotReadyError(session.id, session.status.value)

        pairs = list(zip(session.questions, session.evaluations))
        evaluations = [ev for _, ev in pairs]

        percentage = percentage_of(session.total_score, session.max_possible_score)
        grade = GradeMapper.get_grade(percentage)

        category_breakdown = ResultsComposer._group(pairs, lambda q: q.category)
        topic_breakdown = ResultsComposer._group(pairs, lambda q: q.topic or "general")

        job_fit = mean_of_present([ev.job_fit_score for ev in evaluations])
        role_competency = mean_of_present([ev.role_competency_score for ev in evaluations])

        strengths = Counter(s for ev in evaluations for s in ev.strengths)
        weaknesses = Counter(w for ev in evaluations for w in ev.weaknesses)

        bundle = ResultsBundle(
            session_id=session.id,
            candidate_name=session.candidate_name,
            position=session.position,
            industry=session.industry,
            session_type=session.type.value,
            difficulty=session.difficulty.value,
            total_score=session.total_score,
            max_possible_score=session.max_possible_score,
            percentage=percentage,
            grade=grade,
            category_scores={name: agg.average_score for name, agg in category_breakdown.items()},
            category_breakdown=category_breakdown,
            topic_breakdown=topic_breakdown,
            job_fit_score=job_fit,
            role_competency_score=role_competency,
            job_fit_analysis=GradeMapper.get_job_fit_analysis(job_fit),
            strengths=[s for s, _ in strengths.most_common(TOP_FEEDBACK_ITEMS)],
            areas_for_improvement=[w for w, _ in weaknesses.most_common(TOP_FEEDBACK_ITEMS)],
            summary=GradeMapper.get_summary(percentage, grade),
            questions_answered=len(session.answers),
            degraded_evaluations=sum(1 for ev in evaluations if ev.degraded),
            started_at=session.start_time,
            completed_at=session.end_time,
        )
        logger.info(f"Composed results for {session.id}: {percentage}% ({grade})")
        return bundle

    @staticmethod
    def to_certificate(bundle: ResultsBundle) -> CertificateData:
        return CertificateData(
            session_id=bundle.session_id,
            candidate_name=bundle.candidate_name or "Candidate",
            position=bundle.position,
            total_score=bundle.total_score,
            max_possible_score=bundle.max_possible_score,
            percentage=bundle.percentage,
            grade=bundle.grade,
            date=bundle.completed_at or bundle.started_at,
        )

    @staticmethod
    def _group(pairs, key) -> Dict[str, CategoryAggregate]:
        groups: Dict[str, List[Evaluation]] = defaultdict(list)
        for question, evaluation in pairs:
            groups[key(question)].append(evaluation)

        result = {}
        for name, evs in groups.items():
            total = sum(ev.score for ev in evs)
            max_total = sum(ev.max_score for ev in evs)
            pct = percentage_of(total, max_total)
            result[name] = CategoryAggregate(
                questions=len(evs),
                total_score=total,
                max_score=max_total,
                average_score=total / len(evs),
                percentage=pct,
                performance=GradeMapper.get_performance_label(pct),
            )
        return result
