from typing import List
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from langcoach.core import config
from langcoach.models.feedback import FeedbackRequest, SegmentRequest
from langcoach.services import llm
from langcoach.services.feedback import analyze, attach_feedback
from langcoach.services.highlight import segment

router = APIRouter(prefix="/feedback", tags=["feedback"])

@router.post("")
def create_feedback(req: FeedbackRequest):
    result = analyze(
        req.text,
        target_language=req.target_language,
        user_level=req.user_level,
        context=req.context,
    )
    if req.message_id:
        # best-effort, the analysis already succeeded
        attach_feedback(req.message_id, result)
    return result.model_dump(by_alias=True)

@router.post("/segments")
def create_segments(req: SegmentRequest) -> List[dict]:
    return [s.model_dump(by_alias=True) for s in segment(req.text, req.corrections)]

@router.get("/health")
def model_health():
    if llm.check_health():
        return {"status": "healthy", "service": "ollama"}
    return JSONResponse(
        status_code=503,
        content={
            "status": "unhealthy",
            "service": "ollama",
            "message": f"Model server is not available at {config.OLLAMA_BASE_URL}. Please run: ollama serve",
        },
    )

@router.get("/models")
def available_models():
    return {"models": llm.list_models()}
