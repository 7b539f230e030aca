"""Bundled quiz questions, keyed by course ID."""

from typing import Any


QUIZZES: dict[int, list[dict[str, Any]]] = {
    1: [
        {
            "id": 1,
            "question": "What is React?",
            "options": [
                "A JavaScript library for building user interfaces",
                "A backend framework",
                "A database",
                "A programming language",
            ],
            "correct": 0,
            "explanation": (
                "React is a JavaScript library developed by Facebook "
                "for building user interfaces."
            ),
        },
        {
            "id": 2,
            "question": "What does JSX stand for?",
            "options": [
                "JavaScript XML",
                "Java Syntax Extension",
                "JSON XML",
                "JavaScript Extension",
            ],
            "correct": 0,
            "explanation": "JSX stands for JavaScript XML and lets you write HTML in JavaScript.",
        },
        {
            "id": 3,
            "question": "How can a React component be defined?",
            "options": [
                "As a function or a class",
                "Only as a function",
                "Only as a class",
                "Only as an arrow function",
            ],
            "correct": 0,
            "explanation": "React components can be defined as functions or classes.",
        },
    ],
}
