"""Quiz written into an empty data directory on first launch."""

SAMPLE_QUIZ_TEXT: str = """\
ID: javascript-fundamentals
TITLE: JavaScript Fundamentals
DESCRIPTION: Test your knowledge of JavaScript basics
TIMELIMIT: 600
DIFFICULTY: easy
STATUS: published

Q: What is the output of `typeof null` in JavaScript?
A: null
B: object
C: undefined
D: number
CORRECT: B

Q: Which method is used to add an element to the end of an array?
A: shift()
B: unshift()
C: push()
D: pop()
CORRECT: C

Q: What does 'use strict' do in JavaScript?
A: Makes code run faster
B: Enables strict mode for catching errors
C: Disables all warnings
D: Allows deprecated features
CORRECT: B

Q: Which of the following is NOT a JavaScript data type?
A: Boolean
B: Float
C: Symbol
D: BigInt
CORRECT: B

Q: What is the result of `3 + '3'` in JavaScript?
A: 6
B: 33
C: NaN
D: Error
CORRECT: B
"""
