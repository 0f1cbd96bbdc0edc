"""Quiz-related constants shared across UI and core layers."""

CORRECT_ANSWER_POINTS: int = 100
TICK_INTERVAL_MS: int = 1000
DEFAULT_TIME_LIMIT_SECONDS: int = 600
LOW_TIME_THRESHOLD_SECONDS: int = 30
CRITICAL_TIME_THRESHOLD_SECONDS: int = 10
PASSING_PERCENTAGE: int = 60
ANSWER_FEEDBACK_DELAY_MS: int = 1500
MIN_OPTIONS_PER_QUESTION: int = 2
MAX_OPTIONS_PER_QUESTION: int = 6
DIFFICULTY_LEVELS: tuple[str, ...] = ("easy", "medium", "hard")
DEFAULT_DIFFICULTY: str = "medium"
