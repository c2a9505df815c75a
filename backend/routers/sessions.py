from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, status

import session_history
import session_log
import settings_store

from .. import schemas

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=List[schemas.SessionLogOut])
def list_sessions():
    return session_log.load_session_logs()


@router.post("", response_model=schemas.SessionLogOut, status_code=status.HTTP_201_CREATED)
def create_session(payload: schemas.SessionCreate):
    try:
        return session_log.record_session(
            payload.duration_seconds,
            payload.zones,
            notes=payload.notes,
            uv_index=payload.uv_index,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/summary")
def get_summary() -> Dict[str, Any]:
    return session_history.summarise_sessions(
        session_log.load_session_log(), settings_store.load_settings()
    )
