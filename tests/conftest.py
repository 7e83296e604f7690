"""Shared fixtures: a realistic analysis document as the AI service returns it."""

from __future__ import annotations

import copy
import json

import pytest

from snapnotes.models import QuizKind, QuizQuestion


SAMPLE_ANALYSIS = {
    "title": "Unit 3: Protecting the Ocean",
    "vocabulary": [
        {
            "word": "pollution",
            "partOfSpeech": "n.",
            "definitionPrimary": "the process of making air, water or soil dirty",
            "definitionSecondary": "污染",
            "usageNote": "uncountable; often with 'air' or 'water'",
            "exampleSentence": "Plastic pollution harms sea turtles.",
            "derivatives": ["pollute", "pollutant"],
        },
        {
            "word": "protect",
            "partOfSpeech": "v.",
            "definitionPrimary": "to keep someone or something safe from harm",
            "definitionSecondary": "保护",
        },
    ],
    "grammar": [
        {
            "pattern": "Passive voice",
            "structure": "be + past participle",
            "explanation": "Used when the action matters more than who does it.",
            "exampleSentence": "Tons of plastic are thrown into the sea every year.",
        },
        {"pattern": "Too ... to ..."},
    ],
    "writing": {
        "genreType": "Expository",
        "logic": "Problem, causes, then solutions.",
        "summary": "The ocean is in danger and everyone can help.",
        "framework": ["Introduce the problem", "Explain the causes", "Suggest solutions"],
    },
    "background": "About eight million tons of plastic enter the oceans each year.",
    "mindMap": {
        "id": "root",
        "label": "Protecting the Ocean",
        "children": [
            {"id": "p", "label": "Problems", "children": [{"label": "Plastic"}, {"label": "Oil spills"}]},
            {"id": "s", "label": "Solutions"},
        ],
    },
    "quizzes": [
        {
            "id": "q1",
            "kind": "matching",
            "prompt": "Match 'protect' with its meaning.",
            "correctAnswer": "to keep safe",
            "explanation": "Protect means to keep safe from harm.",
        },
        {
            "id": "q2",
            "kind": "spelling",
            "prompt": "Spell the word meaning 污染.",
            "correctAnswer": "pollution",
            "explanation": "p-o-l-l-u-t-i-o-n",
            "relatedWord": "pollution",
        },
        {
            "id": "q3",
            "kind": "multipleChoice",
            "prompt": "What harms sea turtles?",
            "options": ["Plastic", "Sand", "Sunlight", "Fish"],
            "correctAnswer": "Plastic",
            "explanation": "The text says plastic pollution harms sea turtles.",
        },
        {
            "id": "q4",
            "kind": "grammar",
            "prompt": "Tons of plastic ___ into the sea.",
            "options": ["throw", "are thrown", "throwing", "is throw"],
            "correctAnswer": "are thrown",
            "explanation": "Passive voice: be + past participle.",
        },
        {
            "id": "q5",
            "kind": "reading",
            "prompt": "What is the main idea?",
            "options": ["Oceans are big", "Oceans need protection", "Fish are tasty"],
            "correctAnswer": "Oceans need protection",
            "explanation": "Every paragraph is about protecting the ocean.",
        },
    ],
}


@pytest.fixture
def sample_payload():
    """A fresh, mutable copy of a valid analysis document."""
    return copy.deepcopy(SAMPLE_ANALYSIS)


@pytest.fixture
def sample_json(sample_payload):
    return json.dumps(sample_payload, ensure_ascii=False)


def make_question(qid: str, answer: str, kind: QuizKind = QuizKind.SPELLING, options=()) -> QuizQuestion:
    return QuizQuestion(id=qid, kind=kind, prompt=f"Question {qid}", options=tuple(options), correct_answer=answer)
