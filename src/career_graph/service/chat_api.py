from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from career_graph.chat.llm import ChatMessage
from career_graph.chat.service import ChatService

from .envelope import ok


class ChatIn(BaseModel):
    message: str | None = None
    student_id: str | None = Field(default=None, alias="studentId")
    history: list[ChatMessage] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


def build_chat_router(chat: ChatService) -> APIRouter:
    r = APIRouter(prefix="/api/chat", tags=["chat"])

    @r.post("")
    async def chat_message(payload: ChatIn):
        return ok(await chat.chat(payload.message, payload.student_id, payload.history))

    @r.get("/suggestions")
    async def generic_suggestions():
        return ok(await chat.suggestions(None))

    @r.get("/suggestions/{student_id}")
    async def suggestions(student_id: str):
        return ok(await chat.suggestions(student_id))

    return r
