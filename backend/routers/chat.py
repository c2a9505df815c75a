from __future__ import annotations

from fastapi import APIRouter

import briefing_service

from .. import schemas

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=schemas.ChatOut)
def chat(payload: schemas.ChatRequest):
    reply = briefing_service.chat_with_intel_officer(payload.message, payload.history)
    return {"reply": reply}
