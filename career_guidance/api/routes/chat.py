# chat.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from career_guidance.api.errors import GUIDANCE_ERRORS, to_http_exception
from career_guidance.config import settings
from career_guidance.database import get_db
from career_guidance.models.user import User
from career_guidance.routers.dependencies import get_current_user, get_inference_client
from career_guidance.schemas.chat import ChatMessageRead, ChatRequest, ChatResponse
from career_guidance.services import chat_service, profile_service, roadmap_service
from career_guidance.services.inference import InferenceClient


router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
def send_chat_message(
    payload: ChatRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    client: InferenceClient = Depends(get_inference_client),
) -> ChatResponse:
    try:
        profile = profile_service.get_career_profile(db, current_user.id)
        if payload.roadmap_id is not None:
            roadmap = roadmap_service.get_roadmap(db, current_user.id, payload.roadmap_id)
            if roadmap is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Roadmap not found")
        else:
            # Most recent roadmap, if any.
            roadmaps = roadmap_service.list_roadmaps(db, current_user.id)
            roadmap = roadmaps[0] if roadmaps else None

        history = chat_service.recent_history(db, current_user.id, settings.chat_history_limit)
        reply = chat_service.chat_reply(client, payload.message, history, profile, roadmap)
        saved = chat_service.save_exchange(db, current_user.id, payload.message, reply)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return ChatResponse(reply=reply, messages=saved)


@router.get("/history", response_model=list[ChatMessageRead])
def read_chat_history(
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ChatMessageRead]:
    try:
        return chat_service.recent_history(db, current_user.id, limit)
    except GUIDANCE_ERRORS as exc:
        raise to_http_exception(exc) from exc
