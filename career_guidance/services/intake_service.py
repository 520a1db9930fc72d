# intake_service.py
from __future__ import annotations

import math
from typing import Any, Mapping

from career_guidance.errors import ValidationError
from career_guidance.schemas.intake import QuestionField, QuestionGroup, StepValidationResult
from career_guidance.schemas.profile import UserInfo


def _rating(field_id: str, label: str) -> QuestionField:
    return QuestionField(id=field_id, label=label, type="rating")


QUESTION_GROUPS: list[QuestionGroup] = [
    QuestionGroup(
        title="Personal Information",
        description="Tell us a bit about yourself to help tailor your career recommendations.",
        fields=[
            QuestionField(id="age", label="Age", type="number", min_value=0, max_value=130),
            QuestionField(
                id="education_level",
                label="Education Level",
                type="select",
                options=["High School", "Undergraduate", "Graduate", "Post-Graduate"],
            ),
            QuestionField(id="current_field", label="Current Field of Study/Work", type="text"),
            QuestionField(id="goals", label="Career Goals (Short description)", type="textarea"),
        ],
    ),
    QuestionGroup(
        title="Interests Assessment",
        description="Rate your interest level in the following areas from 1 (Not at all interested) to 5 (Very interested).",
        fields=[
            _rating("interest_science", "Science & Research"),
            _rating("interest_tech", "Technology & Computing"),
            _rating("interest_arts", "Arts & Design"),
            _rating("interest_business", "Business & Management"),
            _rating("interest_health", "Healthcare & Medicine"),
            _rating("interest_education", "Education & Training"),
            _rating("interest_engineering", "Engineering"),
            _rating("interest_social", "Social Services & Community"),
        ],
    ),
    QuestionGroup(
        title="Skills Assessment",
        description="Rate your skill level in the following areas from 1 (Beginner) to 5 (Expert).",
        fields=[
            _rating("skill_analytical", "Analytical Thinking"),
            _rating("skill_communication", "Communication"),
            _rating("skill_creativity", "Creativity"),
            _rating("skill_technical", "Technical Skills"),
            _rating("skill_leadership", "Leadership"),
            _rating("skill_teamwork", "Teamwork"),
            _rating("skill_problem_solving", "Problem Solving"),
            _rating("skill_adaptability", "Adaptability"),
        ],
    ),
    QuestionGroup(
        title="Work Style Preferences",
        description="Select your preferences for work environments and styles.",
        fields=[
            QuestionField(
                id="work_environment",
                label="Preferred Work Environment",
                type="select",
                options=["Remote Work", "Office Environment", "Field Work", "Mixed Environment"],
            ),
            QuestionField(
                id="work_schedule",
                label="Preferred Work Schedule",
                type="select",
                options=["Regular 9-5", "Flexible Hours", "Project-Based", "Shift Work"],
            ),
            QuestionField(
                id="work_culture",
                label="Preferred Work Culture",
                type="multiselect",
                options=["Collaborative", "Independent", "Fast-Paced", "Structured", "Creative", "Innovative"],
            ),
        ],
    ),
    QuestionGroup(
        title="Values & Motivations",
        description="What drives you in your career? Select all that apply.",
        fields=[
            QuestionField(
                id="values",
                label="Career Values",
                type="multiselect",
                options=[
                    "Financial Security",
                    "Work-Life Balance",
                    "Making a Difference",
                    "Recognition",
                    "Continuous Learning",
                    "Career Advancement",
                    "Job Security",
                    "Creative Freedom",
                ],
            ),
            QuestionField(
                id="motivation",
                label="Primary Motivation",
                type="select",
                options=[
                    "Helping Others",
                    "Financial Success",
                    "Creative Expression",
                    "Solving Problems",
                    "Building Things",
                    "Leading Teams",
                    "Continuous Learning",
                ],
            ),
        ],
    ),
]


def get_question_groups() -> list[QuestionGroup]:
    return list(QUESTION_GROUPS)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _is_missing(field: QuestionField, value: Any) -> bool:
    if value is None:
        return True
    if field.type == "multiselect":
        return not isinstance(value, (list, tuple, set)) or len(value) == 0
    if isinstance(value, str):
        return value.strip() == ""
    return False


def _is_invalid(field: QuestionField, value: Any) -> bool:
    if field.type == "rating":
        number = _as_number(value)
        return number is None or not number.is_integer() or not 1 <= number <= 5
    if field.type == "number":
        number = _as_number(value)
        if number is None or not math.isfinite(number):
            return True
        if field.min_value is not None and number < field.min_value:
            return True
        return field.max_value is not None and number > field.max_value
    if field.type == "select":
        return not isinstance(value, str) or value not in field.options
    if field.type == "multiselect":
        return any(not isinstance(item, str) or item not in field.options for item in value)
    return not isinstance(value, str)


def validate_step(group_index: int, answers: Mapping[str, Any]) -> StepValidationResult:
    """Check that every field in one question group has a usable answer.

    Raises IndexError for a group index outside the questionnaire.
    """

    if group_index < 0 or group_index >= len(QUESTION_GROUPS):
        raise IndexError(f"Question group {group_index} does not exist")

    missing: list[str] = []
    invalid: list[str] = []
    for field in QUESTION_GROUPS[group_index].fields:
        value = answers.get(field.id)
        if _is_missing(field, value):
            missing.append(field.id)
        elif _is_invalid(field, value):
            invalid.append(field.id)

    return StepValidationResult(
        step_index=group_index,
        valid=not missing and not invalid,
        missing_fields=missing,
        invalid_fields=invalid,
        is_last_step=group_index == len(QUESTION_GROUPS) - 1,
    )


def validate_answers(answers: Mapping[str, Any]) -> None:
    """Validate the full questionnaire; raise ValidationError listing every gap."""

    missing: list[str] = []
    invalid: list[str] = []
    for index in range(len(QUESTION_GROUPS)):
        result = validate_step(index, answers)
        missing.extend(result.missing_fields)
        invalid.extend(result.invalid_fields)
    if missing or invalid:
        raise ValidationError(
            "Please answer all questions before submitting.",
            missing_fields=missing,
            invalid_fields=invalid,
        )


def extract_user_info(answers: Mapping[str, Any]) -> UserInfo:
    age = _as_number(answers.get("age"))
    return UserInfo(
        age=int(age) if age is not None else None,
        education_level=answers.get("education_level"),
        current_field=answers.get("current_field"),
        goals=answers.get("goals"),
    )


def questionnaire_answers(answers: Mapping[str, Any]) -> dict[str, Any]:
    """Answers keyed by question id, restricted to known questions."""

    known = {field.id for group in QUESTION_GROUPS for field in group.fields}
    return {key: value for key, value in answers.items() if key in known}
