"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "QuizRunner"
PLACEHOLDER_QUESTION: str = "Enter your question text (supports Markdown)."

NAV_BUTTON_DASHBOARD: str = "Dashboard"
NAV_BUTTON_LEADERBOARD: str = "Leaderboard"
NAV_BUTTON_ADMIN: str = "Admin"
NAV_BUTTON_SIGN_IN: str = "Sign In"
NAV_BUTTON_SIGN_OUT: str = "Sign Out"

START_QUIZ_BUTTON: str = "Start Quiz"
EXIT_QUIZ_BUTTON: str = "Exit Quiz"
BACK_TO_DASHBOARD_BUTTON: str = "Back to Dashboard"
SHOW_LEADERBOARD_BUTTON: str = "Leaderboard"

ADMIN_NEW_QUIZ_BUTTON: str = "New Quiz"
ADMIN_DELETE_QUIZ_BUTTON: str = "Delete Quiz"
ADMIN_TOGGLE_STATUS_BUTTON: str = "Toggle Published"
ADMIN_SAVE_QUIZ_BUTTON: str = "Save Quiz Details"
ADMIN_INSERT_QUESTION_BUTTON: str = "Add New Question"
ADMIN_SAVE_QUESTION_BUTTON: str = "Save Question"
ADMIN_DELETE_QUESTION_BUTTON: str = "Delete Question"
ADMIN_IMPORT_BUTTON: str = "Import Quiz"
ADMIN_EXPORT_BUTTON: str = "Export Quiz"

IMPORT_DIALOG_TITLE: str = "Select quiz file"
IMPORT_FILE_FILTER: str = "Quiz files (*.txt);;All files (*.*)"
EXPORT_DIALOG_TITLE: str = "Save quiz to file"
EXPORT_FILE_FILTER: str = "Quiz files (*.txt);;All files (*.*)"

NO_QUIZZES_MESSAGE: str = "No quizzes are published yet."
SIGN_IN_REQUIRED_MESSAGE: str = "Please sign in before starting a quiz."
EMPTY_QUIZ_MESSAGE: str = "This quiz has no questions yet."
TIME_UP_MESSAGE: str = "Time's up! Your quiz has been submitted."
SUBMISSION_FAILED_MESSAGE: str = "Your result could not be saved. It is still shown below."
ALL_QUIZZES_LABEL: str = "All Quizzes"
LEADERBOARD_SIZE: int = 50
HISTORY_GROUP_TITLE: str = "Quiz History"
NO_HISTORY_MESSAGE: str = "No completed quizzes yet."

RESULTS_PASSED_TITLE: str = "Congratulations!"
RESULTS_FAILED_TITLE: str = "Quiz Completed"
RESULTS_PASSED_MESSAGE: str = "Great job on completing the quiz!"
RESULTS_FAILED_MESSAGE: str = "Keep practicing to improve your score!"
