from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from database import get_db
from models.schemas import (
    ChatRequest,
    ChatResponse,
    ConversationCreated,
    ConversationRecord,
    ErrorResponse,
    MessageRecord,
)
from services import history
from services.chat_pipeline import handle_chat
from services.responder import ResponseSelector

router = APIRouter(
    prefix="/api",
    tags=["chat"],
    responses={500: {"model": ErrorResponse, "description": "Conversation store failure"}},
)


def get_selector(request: Request) -> ResponseSelector:
    return request.app.state.selector


@router.post("/conversations", response_model=ConversationCreated)
def create_conversation(db: Session = Depends(get_db)):
    return ConversationCreated(conversation_id=history.create_conversation(db))


@router.get(
    "/conversations/{conversation_id}",
    response_model=ConversationRecord,
    responses={404: {"model": ErrorResponse}},
)
def read_conversation(conversation_id: str, db: Session = Depends(get_db)):
    db_conv = history.get_conversation(db, conversation_id)
    if db_conv is None:
        return JSONResponse(status_code=404, content={"error": f"Conversation '{conversation_id}' not found"})
    return db_conv


@router.get("/conversations/{conversation_id}/messages", response_model=List[MessageRecord])
def read_messages(conversation_id: str, db: Session = Depends(get_db)):
    return history.list_messages(db, conversation_id)


@router.post("/chat", response_model=ChatResponse, responses={422: {"model": ErrorResponse}})
def chat(
    request: ChatRequest,
    db: Session = Depends(get_db),
    selector: ResponseSelector = Depends(get_selector),
):
    return handle_chat(db, selector, request.conversation_id, request.message)
