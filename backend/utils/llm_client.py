import json

from config import settings
from utils.transport import PostFn, UpstreamResponse

SYSTEM_PROMPT = """You are a concise relocation advisor expert for Costa Rica, Panama, and Belize.
Given a user's structured answers, pick the single best country (Costa Rica, Panama, or Belize),
explain why in 2-4 short bullet reasons, and list 3 cities with a brief reason for each. Put a disclaimer that this is only a suggestion and that speaking with a representative is important.
Return a strict JSON object ONLY (no extra commentary)."""

OUTPUT_SHAPE = """Return JSON with keys:
- country: string (one of "Costa Rica","Panama","Belize")
- score: integer 0-100 (confidence)
- reasons: array of short strings (2-4)
- cities: array of { name: string, reason: string } (3 entries)
Keep outputs short and concise."""


def build_messages(answers: dict) -> list[dict]:
    answers_json = json.dumps(answers, ensure_ascii=False, separators=(",", ":"))
    user = f"User answers (JSON): {answers_json}.\n{OUTPUT_SHAPE}"
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user},
    ]


async def chat_completion(post: PostFn, api_key: str, messages: list[dict]) -> UpstreamResponse:
    """Single chat-completion call. Status handling is left to the caller."""
    return await post(
        f"{settings.openai_base_url}/chat/completions",
        {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        },
        {
            "model": settings.openai_model,
            "temperature": settings.temperature,
            "messages": messages,
            "max_tokens": settings.max_tokens,
        },
    )
