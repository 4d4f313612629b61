"""Prompt templates and rendering."""

from __future__ import annotations

import string
from collections.abc import Mapping
from dataclasses import dataclass

from app.errors import PromptRenderError

_FORMATTER = string.Formatter()


def placeholders(template: str) -> list[str]:
    """Return placeholder names in order of first appearance; ``{{``/``}}`` are literals."""
    names: list[str] = []
    for _, field_name, _, _ in _FORMATTER.parse(template):
        if field_name is None:
            continue
        if not field_name.isidentifier():
            raise ValueError(f"Unsupported placeholder '{{{field_name}}}' in prompt template")
        if field_name not in names:
            names.append(field_name)
    return names


def render(template: str, variables: Mapping[str, object]) -> str:
    missing = [name for name in placeholders(template) if name not in variables]
    if missing:
        raise PromptRenderError(missing)
    return template.format_map(variables)


@dataclass(frozen=True)
class PromptTemplate:
    template: str
    input_variables: tuple[str, ...]

    def __post_init__(self) -> None:
        declared = set(self.input_variables)
        found = set(placeholders(self.template))
        if declared != found:
            raise ValueError(
                f"Template placeholders {sorted(found)} do not match declared variables {sorted(declared)}"
            )

    def format(self, **variables: object) -> str:
        return render(self.template, variables)


GRADING_PROMPT = PromptTemplate(
    template=(
        "You are a strict but fair language tutor for {language}. "
        "A learner wrote the following answer in {language}:\n\n"
        '"{answer}"\n\n'
        "Score the answer from 1 (very poor) to 10 (perfect) and list every mistake you find. "
        "Respond with ONLY a JSON object, no markdown, with exactly these keys:\n"
        '{{"mark": <integer 1-10>, "mistakes": [<string>, ...]}}\n'
        "Use an empty array for mistakes when the answer is perfect."
    ),
    input_variables=("language", "answer"),
)

FEEDBACK_PROMPT = PromptTemplate(
    template=(
        "You are a supportive language tutor for {language}. "
        "A learner's answer was marked {mark} out of 10. The mistakes found were:\n"
        "{mistakes}\n\n"
        "Write constructive feedback in English that explains each mistake and how to fix it. "
        "If the mark is 10, do not suggest corrections; praise the learner instead. "
        "Write plain prose only: no markdown, headings, or bullet points."
    ),
    input_variables=("language", "mark", "mistakes"),
)

MODERATION_PROMPT = PromptTemplate(
    template=(
        "You review feedback written for a learner of {language}. "
        "Decide whether the following text is appropriate for a learner of any age: "
        "no offensive, hateful, sexual, violent or otherwise harmful content.\n\n"
        '"{feedback}"\n\n'
        "Respond with exactly one word: Clean if the text is appropriate, Flagged if it is not."
    ),
    input_variables=("language", "feedback"),
)

LESSON_PROMPT = PromptTemplate(
    template=(
        "You are a friendly language tutor teaching {language}. "
        'Provide a brief lesson on "{topic}". Make it engaging and easy to understand.'
    ),
    input_variables=("language", "topic"),
)

EXERCISE_PROMPT = PromptTemplate(
    template=(
        "You are a language tutor for {language}. "
        'Create a simple exercise to practice "{topic}". Provide clear instructions and examples.'
    ),
    input_variables=("language", "topic"),
)

ANSWER_REVIEW_PROMPT = PromptTemplate(
    template=(
        "You are a language tutor for {language}. "
        'Provide constructive feedback on the following answer:\n\n"{answer}"\n\n'
        "Include corrections and suggestions for improvement."
    ),
    input_variables=("language", "answer"),
)
