import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import ClientDisconnect

from config import settings
from models.answers import Answers
from services.credential_service import resolve_api_key
from services.fallback_service import fallback_recommendation
from utils.json_helpers import extract_assistant_content, parse_json_from_text
from utils.llm_client import build_messages, chat_completion
from utils.transport import resolve_transport

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommend"])

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

RECOMMEND_PATH = "/api/recommend"

EXPECTED_KEYS = ("country", "score", "reasons", "cities")


def method_not_allowed() -> JSONResponse:
    return JSONResponse(
        status_code=405,
        content={"error": "Method not allowed. Use POST."},
        headers={"Allow": "POST"},
    )


async def read_json_body(request: Request) -> dict:
    """Return the request body as a dict; anything unparsable becomes {}."""
    parsed = getattr(request.state, "body", None)
    if isinstance(parsed, dict) and parsed:
        return parsed

    try:
        raw = await request.body()
    except ClientDisconnect:
        return {}
    try:
        body = json.loads(raw or b"{}")
    except (ValueError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


# Other methods are answered by the 405 handler registered in main.py
@router.post(RECOMMEND_PATH)
@limiter.limit(settings.recommend_rate_limit)
async def recommend(request: Request):
    body = await read_json_body(request)
    answers = body.get("answers") or {}
    if not isinstance(answers, dict):
        answers = {}

    api_key = resolve_api_key()

    if not api_key:
        logger.warning("No OpenAI key found; returning fallback recommendation")
        recommendation = fallback_recommendation(Answers.model_validate(answers))
        return JSONResponse(status_code=200, content=recommendation.model_dump())

    messages = build_messages(answers)

    try:
        post = resolve_transport()
        response = await chat_completion(post, api_key, messages)

        if not response.ok:
            logger.error("OpenAI API error %s: %s", response.status_code, response.text)
            return JSONResponse(
                status_code=502,
                content={
                    "error": "OpenAI API error",
                    "status": response.status_code,
                    "body": response.text,
                },
            )

        assistant = extract_assistant_content(json.loads(response.text))

        try:
            parsed = parse_json_from_text(assistant)
        except ValueError:
            logger.warning("Failed to parse assistant JSON; returning text: %.500s", assistant)
            return JSONResponse(status_code=200, content={"text": assistant})

        if not isinstance(parsed, dict) or not all(k in parsed for k in EXPECTED_KEYS):
            logger.debug("Model output does not match the recommendation shape")
        return JSONResponse(status_code=200, content=parsed)

    except Exception as e:
        logger.exception("Server error in recommend")
        return JSONResponse(
            status_code=500,
            content={"error": "Server error", "message": str(e)},
        )
