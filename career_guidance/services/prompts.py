"""Fixed system instructions and message builders for each guidance stage.

Every instruction asks for a single JSON object with snake_case keys; the
shape must stay in sync with the pydantic schema the stage validates against.
"""
from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from career_guidance.schemas.profile import CareerProfile
from career_guidance.services.inference import PromptMessage


PROFILE_TEMPERATURE = 0.3
MATCHES_TEMPERATURE = 0.3
ROADMAP_TEMPERATURE = 0.5
COURSES_TEMPERATURE = 0.3
PROGRESS_TEMPERATURE = 0.4
CHAT_TEMPERATURE = 0.7

_JSON_ONLY = "Respond with the JSON object only: no prose, no Markdown, no comments."

PROFILE_INSTRUCTION = f"""
You are an expert career counselor with deep knowledge of professions, required skills
and education paths. Analyze the student's aptitude questionnaire answers and create a
career profile summary.

Return a JSON object with exactly this structure:
{{
  "personality_type": "string",
  "primary_strengths": ["string"],
  "secondary_strengths": ["string"],
  "areas_for_improvement": ["string"],
  "learning_style": "string",
  "work_environment_preference": "string",
  "career_interests": ["string"],
  "skill_summary": {{
    "technical": [{{"skill": "string", "level": integer 1-10}}],
    "soft": [{{"skill": "string", "level": integer 1-10}}]
  }}
}}
Use the questionnaire's interest area labels (for example "Technology & Computing") in
career_interests. {_JSON_ONLY}
""".strip()

MATCHES_INSTRUCTION = f"""
As a career matching expert, analyze the student profile and generate suitable career
matches, best match first. For each match provide an integer compatibility score from
0 to 100 that grows with the overlap between the student's skills/interests and the
career, plus reasoning and key insights.

Return a JSON object with exactly this structure:
{{
  "career_matches": [
    {{
      "career": "string",
      "compatibility_score": integer 0-100,
      "reasoning": "string",
      "key_skills_aligned": ["string"],
      "potential_challenges": ["string"],
      "education_requirements": ["string"],
      "growth_opportunities": "string"
    }}
  ]
}}
{_JSON_ONLY}
""".strip()

ROADMAP_INSTRUCTION = f"""
As a career development expert, create a detailed roadmap for the specified career,
tailored to the user's profile and current skills. List milestones in the order they
should be completed, earliest timeline first. Every milestone must name at least one
required skill, one activity and one resource.

Return a JSON object with exactly this structure:
{{
  "career": "string",
  "overview": "string",
  "timeframe": "string",
  "milestones": [
    {{
      "title": "string",
      "description": "string",
      "timeline": "string",
      "required_skills": ["string"],
      "activities": ["string"],
      "resources": ["string"]
    }}
  ],
  "skills_to_acquire": [
    {{"skill": "string", "importance": "High" | "Medium" | "Low", "suggested_resources": ["string"]}}
  ],
  "exams_certifications": [
    {{"name": "string", "description": "string", "timeline": "string", "preparation_tips": ["string"]}}
  ],
  "project_ideas": [
    {{"title": "string", "description": "string", "skills": ["string"]}}
  ],
  "weekly_plan": {{"focus": "string", "activities": ["string"]}}
}}
{_JSON_ONLY}
""".strip()

COURSES_INSTRUCTION = f"""
As a learning advisor, recommend courses from the platform that align with the user's
chosen career path and roadmap. Focus on courses that help achieve the next incomplete
milestones. Only recommend course_id values that appear in the supplied platform courses.

Return a JSON object with exactly this structure:
{{
  "recommended_courses": [
    {{
      "course_id": "string",
      "course_name": "string",
      "relevance": "string",
      "aligned_milestone": "string",
      "priority": "High" | "Medium" | "Low"
    }}
  ],
  "recommended_tests": [{{"test_id": "string", "test_name": "string", "relevance": "string"}}],
  "recommended_sessions": [{{"session_id": "string", "session_name": "string", "relevance": "string"}}],
  "suggested_learning_path": "string"
}}
{_JSON_ONLY}
""".strip()

PROGRESS_INSTRUCTION = f"""
As a career progress advisor, analyze the user's advancement through their roadmap and
provide adaptive feedback. You may suggest timeline adjustments for milestones; each
adjustment must reference the integer "id" of a milestone listed in the roadmap.

Return a JSON object with exactly this structure:
{{
  "progress_summary": "string",
  "achievement_level": "string",
  "strengths": ["string"],
  "areas_for_improvement": ["string"],
  "adjusted_milestones": [
    {{"milestone_id": integer, "adjusted_timeline": "string", "adjustment_reason": "string"}}
  ],
  "feedback": "string",
  "motivation": "string",
  "next_steps": ["string"]
}}
{_JSON_ONLY}
""".strip()

CHAT_INSTRUCTION = """
You are a career guidance assistant helping students navigate their career paths.
You have access to the student's profile and roadmap. Answer questions, provide
guidance, suggest next steps and recommend mentors when appropriate. Keep responses
helpful, supportive and tailored to the student's situation.
""".strip()


def profile_summary(profile: CareerProfile) -> dict[str, Any]:
    """Profile content without persistence fields (ids, timestamps)."""

    return profile.model_dump(mode="json", include=set(CareerProfile.model_fields))


def to_prompt_json(value: Any) -> str:
    """Serialize entities embedded in a user message."""

    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif isinstance(value, list):
        value = [item.model_dump(mode="json") if isinstance(item, BaseModel) else item for item in value]
    return json.dumps(value, ensure_ascii=False, default=str)


def build_messages(instruction: str, request: str, sections: dict[str, Any]) -> list[PromptMessage]:
    lines = [request]
    for label, value in sections.items():
        lines.append(f"{label}: {to_prompt_json(value)}")
    return [
        {"role": "system", "content": instruction},
        {"role": "user", "content": "\n".join(lines)},
    ]
