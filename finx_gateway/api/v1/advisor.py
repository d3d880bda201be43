"""/v1/advisor - chat advisor backed by an external language model"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from finx_gateway.api.v1.schemas import AdvisorContextResponse, ChatRequest, ChatResponse
from finx_gateway.api.dependencies import get_chat_client, get_request_id
from finx_gateway.infrastructure.database.session import get_db
from finx_gateway.infrastructure.database.repositories import StateRepository
from finx_gateway.infrastructure.clients.chat import ChatClient
from finx_gateway.domain.advisor import build_financial_context, build_system_prompt
from finx_gateway.domain.exceptions import ChatAPIError
from finx_gateway.infrastructure.observability.logging import log_chat

router = APIRouter()


@router.get("/advisor/context", response_model=AdvisorContextResponse)
def get_advisor_context(db: Session = Depends(get_db)):
    """Financial context and system prompt that accompany every chat request"""
    snapshot = StateRepository(db).load_session().snapshot
    context = build_financial_context(snapshot)
    return AdvisorContextResponse(context=context, system_prompt=build_system_prompt(context))


@router.post("/advisor/chat", response_model=ChatResponse)
async def chat(
    request_body: ChatRequest,
    request: Request,
    db: Session = Depends(get_db),
    chat_client: ChatClient = Depends(get_chat_client),
):
    """
    Forward the conversation to the chat model.

    Flow:
    1. Load the stored snapshot
    2. Build the financial context and system prompt
    3. Call the chat model
    4. Return its reply unmodified
    """
    start_time = time.time()
    request_id = get_request_id(request)

    snapshot = StateRepository(db).load_session().snapshot
    system_prompt = build_system_prompt(build_financial_context(snapshot))
    messages = [m.model_dump() for m in request_body.messages]

    try:
        reply = await chat_client.complete(system_prompt, messages)
    except ChatAPIError as e:
        logging.error(f"Chat API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Advisor service unavailable")

    duration_ms = (time.time() - start_time) * 1000
    log_chat(request_id, len(messages), len(reply), duration_ms)

    return ChatResponse(reply=reply)
