from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config

from .routers import chat, sessions, timeline


@asynccontextmanager
async def lifespan(_app: FastAPI):
    config.setup_logger()
    yield


app = FastAPI(title="ipl_tracker backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(timeline.router)
app.include_router(sessions.router)
app.include_router(chat.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
