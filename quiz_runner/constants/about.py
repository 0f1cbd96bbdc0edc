"""Static metadata describing QuizRunner."""

APP_NAME = "QuizRunner"
APP_VERSION = "0.2"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizRunner is a desktop quiz player built with Qt. "
    "Browse quizzes, answer timed multiple-choice questions and compare results on the leaderboard."
)

HELP_TEXT = (
    "Pick a quiz on the dashboard and press Start. Each correct answer is worth 100 points; "
    "the quiz ends when every question is answered or the countdown reaches zero.\n\n"
    "Administrators can author quizzes in the Admin tab or drop .txt files into the data folder:\n\n"
    "TITLE: JavaScript Fundamentals\n"
    "TIMELIMIT: 600\n\n"
    "Q: What is the output of typeof null?\n"
    "A: null\nB: object\nC: undefined\nD: number\n"
    "CORRECT: B"
)
