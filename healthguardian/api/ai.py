# healthguardian/api/ai.py
from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from healthguardian.config.logger import get_logger
from healthguardian.config.settings import settings
from healthguardian.engine.risk import classify
from healthguardian.runtime.assistant import HealthAssistant
from healthguardian.schemas.chat import ChatIn, ChatResponse, RiskIn
from healthguardian.schemas.risk import RiskAssessment
from healthguardian.services.gemini_client import GeminiClient

logger = get_logger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])

RETRY_AFTER_SECONDS = "60"


async def get_assistant() -> AsyncIterator[HealthAssistant]:
    async with HealthAssistant(settings.ai_config()) as assistant:
        yield assistant


async def get_gemini_client() -> AsyncIterator[GeminiClient]:
    client = GeminiClient(settings.ai_config())
    try:
        yield client
    finally:
        await client.aclose()


@router.post("", response_model=ChatResponse)
async def ask(
    payload: ChatIn,
    assistant: HealthAssistant = Depends(get_assistant),
):
    """Answer a health question; degrades to the local rule engine, never 5xx."""
    if not payload.query.strip():
        raise HTTPException(status_code=400, detail="Query is required")

    return await assistant.respond(
        payload.query,
        profile=payload.profile,
        metrics=payload.metrics,
        symptoms=payload.symptoms,
        reports=payload.medical_reports,
        history=payload.message_history,
    )


@router.post("/risk", response_model=RiskAssessment)
async def risk(payload: RiskIn):
    return classify(payload.profile, payload.metrics)


@router.get("/health")
async def health(client: GeminiClient = Depends(get_gemini_client)):
    status = await client.ping()
    if status == "healthy":
        return {"status": "healthy", "message": "AI service is operational"}
    if status == "rate_limited":
        return JSONResponse(
            status_code=429,
            content={
                "status": "degraded",
                "error": "rate_limited",
                "message": "AI service is rate limited. Please try again later.",
            },
            headers={"Retry-After": RETRY_AFTER_SECONDS},
        )
    return JSONResponse(
        status_code=500,
        content={
            "status": "degraded",
            "error": "error",
            "message": "AI service is currently unavailable",
        },
    )
