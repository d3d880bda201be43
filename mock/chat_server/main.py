from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Dict, List
import os

app = FastAPI(title="Mock Chat Server", version="1.0.0")
# Canned reply can be overridden per deployment
REPLY_PREFIX = os.environ.get("MOCK_CHAT_REPLY_PREFIX", "Mock advisor reply")


class ChatCompletionRequest(BaseModel):
    model: str
    messages: List[Dict[str, str]]
    temperature: float = 0.7
    max_tokens: int = 1024


@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/v1/chat/completions")
def chat_completions(body: ChatCompletionRequest):
    if not body.messages or body.messages[0].get("role") != "system":
        raise HTTPException(status_code=400, detail="system prompt required")
    last_user = next((m["content"] for m in reversed(body.messages) if m.get("role") == "user"), "")
    return {
        "id": "mock-completion",
        "model": body.model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": f"{REPLY_PREFIX}: {last_user}"},
                "finish_reason": "stop",
            }
        ],
    }
