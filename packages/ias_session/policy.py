from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .dto import InterviewSession
from .state import SessionType


class SequencingPolicy(ABC):
    """
    Abstract Base Class for per-type sequencing policies.
    Decides which category the next question should cover and which
    secondary scores make sense for the session type.
    The sequencer consults the policy; the policy never mutates the session.
    """

    @property
    @abstractmethod
    def session_type(self) -> SessionType:
        pass

    @abstractmethod
    def category_for(self, index: int) -> str:
        """Category for the question at 0-based position `index`."""
        pass

    def reports_job_fit(self) -> bool:
        """Should evaluations keep a job-fit score?"""
        return False

    def reports_role_competency(self) -> bool:
        """Should evaluations keep a role-competency score?"""
        return False


class TechnicalPolicy(SequencingPolicy):
    @property
    def session_type(self) -> SessionType:
        return SessionType.TECHNICAL

    def category_for(self, index: int) -> str:
        return "technical"


class BehavioralPolicy(SequencingPolicy):
    @property
    def session_type(self) -> SessionType:
        return SessionType.BEHAVIORAL

    def category_for(self, index: int) -> str:
        return "behavioral"


class MixedPolicy(SequencingPolicy):
    """Rotates technical, behavioral and problem-solving questions."""
    ROTATION = ("technical", "behavioral", "problem-solving")

    @property
    def session_type(self) -> SessionType:
        return SessionType.MIXED

    def category_for(self, index: int) -> str:
        return self.ROTATION[index % len(self.ROTATION)]


class RoleBasedPolicy(SequencingPolicy):
    """
    Alternates technical and behavioral questions against a competency profile.
    """
    ROTATION = ("technical", "behavioral")

    @property
    def session_type(self) -> SessionType:
        return SessionType.ROLE_BASED

    def category_for(self, index: int) -> str:
        return self.ROTATION[index % len(self.ROTATION)]

    def reports_role_competency(self) -> bool:
        return True


class JobSpecificPolicy(SequencingPolicy):
    """
    Technical-heavy: two technical questions for every behavioral one,
    each weighted by the parsed job requirements.
    """
    ROTATION = ("technical", "technical", "behavioral")

    @property
    def session_type(self) -> SessionType:
        return SessionType.JOB_SPECIFIC

    def category_for(self, index: int) -> str:
        return self.ROTATION[index % len(self.ROTATION)]

    def reports_job_fit(self) -> bool:
        return True


_POLICIES = {
    SessionType.TECHNICAL: TechnicalPolicy,
    SessionType.BEHAVIORAL: BehavioralPolicy,
    SessionType.MIXED: MixedPolicy,
    SessionType.ROLE_BASED: RoleBasedPolicy,
    SessionType.JOB_SPECIFIC: JobSpecificPolicy,
}


def get_policy(session_type: SessionType) -> SequencingPolicy:
    """Factory to get policy instance."""
    try:
        return _POLICIES[SessionType(session_type)]()
    except (KeyError, ValueError):
        raise ValueError(f"Unknown session type: {session_type}")


# --- Topic adaptation ---

TOPICS = {
    "technical": [
        "introduction", "system_design", "algorithms", "databases",
        "networking", "security", "cloud_computing", "microservices",
        "performance", "scalability", "architecture", "testing",
        "devops", "frontend", "backend", "mobile", "ai_ml",
    ],
    "behavioral": [
        "leadership", "teamwork", "problem-solving", "communication",
        "conflict-resolution", "time-management", "adaptability", "stress-management",
    ],
    "problem-solving": [
        "case-studies", "brain-teasers", "scenario-analysis",
        "decision-making", "critical-thinking", "analytical-skills",
    ],
}

DEEP_TOPICS = {
    "system_design", "algorithms", "databases", "networking",
    "security", "cloud_computing", "microservices", "performance",
    "scalability", "architecture", "testing", "devops",
}

DEEP_DIVE_MIN_SCORE = 7.0
MAX_QUESTIONS_PER_TOPIC = 3


class TopicPlanner:
    """
    Chooses the topic and depth hint for the next generated question.
    Deep-dives a topic the candidate handles well, otherwise moves on to
    the first topic not explored yet.
    """

    def current_topic(self, session: InterviewSession) -> Optional[str]:
        topics = [q.topic for q in session.questions[-3:] if q.topic]
        return topics[-1] if topics else None

    def should_deep_dive(self, session: InterviewSession, topic: Optional[str]) -> bool:
        if not topic or topic not in DEEP_TOPICS:
            return False

        indices = [i for i, q in enumerate(session.questions) if q.topic == topic]
        if len(indices) >= MAX_QUESTIONS_PER_TOPIC:
            return False

        # Scores on a 0-10 scale for the answered questions on this topic
        scores: List[float] = []
        for i in indices:
            if i < len(session.evaluations):
                ev = session.evaluations[i]
                scores.append(ev.score / ev.max_score * 10.0)
        recent = scores[-2:]
        if not recent:
            return False
        return sum(recent) / len(recent) >= DEEP_DIVE_MIN_SCORE

    def next_topic(self, session: InterviewSession, category: str) -> str:
        candidates = TOPICS.get(category, TOPICS["technical"])
        explored = {q.topic for q in session.questions if q.topic}
        for topic in candidates:
            if topic not in explored:
                return topic
        return candidates[len(session.questions) % len(candidates)]

    def plan(self, session: InterviewSession, category: str) -> Tuple[str, str]:
        """Returns (topic, depth)."""
        current = self.current_topic(session)
        if self.should_deep_dive(session, current):
            return current, "advanced"
        return self.next_topic(session, category), "introductory"
