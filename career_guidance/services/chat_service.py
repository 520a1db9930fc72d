from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from career_guidance.db.store import RecordStore
from career_guidance.errors import UpstreamUnavailableError, ValidationError
from career_guidance.models.chat_message import ChatMessageModel
from career_guidance.schemas.chat import ChatMessageRead
from career_guidance.schemas.profile import CareerProfile
from career_guidance.schemas.roadmap import CareerRoadmapRead
from career_guidance.services import prompts
from career_guidance.services.inference import InferenceClient, PromptMessage


logger = logging.getLogger(__name__)


def _context_message(profile: CareerProfile | None, roadmap: CareerRoadmapRead | None) -> str:
    lines = ["Student context:"]
    if profile is not None:
        lines.append(f"Profile: {prompts.to_prompt_json(prompts.profile_summary(profile))}")
    if roadmap is not None:
        outline = {
            "career": roadmap.career,
            "timeframe": roadmap.timeframe,
            "completion_percentage": roadmap.completion_percentage,
            "milestones": [{"title": m.title, "is_completed": m.is_completed} for m in roadmap.milestones],
        }
        lines.append(f"Roadmap: {prompts.to_prompt_json(outline)}")
    if len(lines) == 1:
        lines.append("No profile or roadmap yet.")
    return "\n".join(lines)


def chat_reply(
    client: InferenceClient,
    message: str,
    history: Sequence[ChatMessageRead],
    profile: CareerProfile | None = None,
    roadmap: CareerRoadmapRead | None = None,
) -> str:
    """Answer one chat message given the recent conversation (oldest first)."""

    if not message or not message.strip():
        raise ValidationError("Message must not be empty.", missing_fields=["message"])

    messages: list[PromptMessage] = [
        {"role": "system", "content": prompts.CHAT_INSTRUCTION},
        {"role": "system", "content": _context_message(profile, roadmap)},
    ]
    for item in history:
        messages.append({"role": "user" if item.is_user else "assistant", "content": item.message})
    messages.append({"role": "user", "content": message.strip()})

    reply = client.generate(messages, temperature=prompts.CHAT_TEMPERATURE)
    if not reply or not reply.strip():
        logger.warning("chat.reply empty response")
        raise UpstreamUnavailableError("Inference returned an empty chat reply")
    return reply.strip()


def recent_history(db: Session, user_id: int, limit: int) -> list[ChatMessageRead]:
    """Last `limit` messages, oldest first."""

    rows = RecordStore(db).query(
        ChatMessageModel,
        {"user_id": user_id},
        order=[ChatMessageModel.created_at.desc(), ChatMessageModel.id.desc()],
        limit=limit,
    )
    return [ChatMessageRead.model_validate(row) for row in reversed(rows)]


def save_exchange(db: Session, user_id: int, message: str, reply: str) -> list[ChatMessageRead]:
    rows = RecordStore(db).add_all(
        ChatMessageModel,
        [
            {"user_id": user_id, "is_user": True, "message": message.strip()},
            {"user_id": user_id, "is_user": False, "message": reply},
        ],
    )
    logger.info("chat.saved user_id=%s message_ids=%s", user_id, [row.id for row in rows])
    return [ChatMessageRead.model_validate(row) for row in rows]
