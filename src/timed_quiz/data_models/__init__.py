from .problem import AnswerResult, Problem, QuizResult, SessionStatus

__all__ = [
    "AnswerResult",
    "Problem",
    "QuizResult",
    "SessionStatus",
]
