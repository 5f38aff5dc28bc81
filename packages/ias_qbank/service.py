from typing import Iterable, List, Optional

from packages.ias_core.logging import get_logger
from packages.ias_session.dto import InterviewSession, Question
from packages.ias_session.state import QuestionSource
from .data import (
    ROLE_COMPETENCY_PROFILES,
    INTRO_KEYWORDS,
    SALARY_KEYWORDS,
    SCRIPTED_TIME_LIMIT,
    SCRIPTED_MAX_SCORE,
)
from .domain import FallbackQuestion
from .repository_interface import FallbackQuestionRepository

logger = get_logger("ias_qbank.service")


def _code_part(value: str) -> str:
    return "-".join(value.split()).upper()


class FallbackQuestionBank:
    """
    Facade over the fallback table.
    Serves stand-in questions by (position, category, difficulty), builds the
    scripted bookend questions and resolves role competency profiles.
    """

    def __init__(self, repository: FallbackQuestionRepository):
        self.repository = repository

    def get_candidates(self, position: str, category: str, difficulty: str) -> List[FallbackQuestion]:
        """ACTIVE entries for the exact key, in bank order."""
        return [
            q for q in self.repository.find_all_active()
            if q.matches(position, category, difficulty)
        ]

    def lookup(
        self,
        position: str,
        category: str,
        difficulty: str,
        used_texts: Iterable[str] = ()
    ) -> Optional[Question]:
        """
        First candidate whose text the session has not seen yet; cycles when
        all were used. Returns None when the key has no entry.
        """
        candidates = self.get_candidates(position, category, difficulty)
        if not candidates:
            logger.warning(f"No fallback question for ({position}, {category}, {difficulty})")
            return None

        used = set(used_texts)
        chosen = next((q for q in candidates if q.text not in used), None)
        if chosen is None:
            seen = sum(1 for q in candidates if q.text in used)
            chosen = candidates[seen % len(candidates)]

        return Question(
            question_code=chosen.code,
            category=chosen.category,
            difficulty=chosen.difficulty,
            text=chosen.text,
            expected_keywords=list(chosen.expected_keywords),
            sample_answers=list(chosen.sample_answers),
            time_limit=chosen.time_limit,
            max_score=chosen.max_score,
            source=QuestionSource.FALLBACK,
        )

    def intro_question(self, session: InterviewSession) -> Question:
        """Scripted personal introduction opening the interview."""
        name = session.candidate_name or "candidate"
        return Question(
            question_code=f"PERS_{_code_part(session.position)}_{_code_part(session.industry)}",
            category="personalized",
            difficulty=session.difficulty,
            text=(
                f"Hi {name}, can you tell me about yourself and why you're interested in the "
                f"{session.position} role in the {session.industry} industry?"
            ),
            expected_keywords=list(INTRO_KEYWORDS),
            sample_answers=[
                f"I'm passionate about {session.industry} and have experience in {session.position}. "
                f"I'm interested in this role because..."
            ],
            time_limit=SCRIPTED_TIME_LIMIT,
            max_score=SCRIPTED_MAX_SCORE,
            source=QuestionSource.SCRIPTED,
        )

    def salary_question(self, session: InterviewSession) -> Question:
        """Scripted salary expectations question closing the interview."""
        return Question(
            question_code=f"SALARY_{_code_part(session.position)}_{_code_part(session.industry)}",
            category="salary",
            difficulty=session.difficulty,
            text=(
                f"What are your salary expectations for this {session.position} position "
                f"in the {session.industry} industry?"
            ),
            expected_keywords=list(SALARY_KEYWORDS),
            sample_answers=[
                "Based on my experience and market research, I expect a salary in the range of ...",
                "I am open to discussing compensation based on the responsibilities and company standards.",
            ],
            time_limit=SCRIPTED_TIME_LIMIT,
            max_score=SCRIPTED_MAX_SCORE,
            source=QuestionSource.SCRIPTED,
        )

    def competencies_for(self, position: str, experience_level: Optional[str]) -> Optional[List[str]]:
        """Static competency profile for a role, None when unknown."""
        profile = ROLE_COMPETENCY_PROFILES.get(position)
        if not profile:
            return None
        level = experience_level or "mid"
        competencies = profile.get(level)
        return list(competencies) if competencies else None
