import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from langcoach.api.routes_feedback import router as feedback_router
from langcoach.api.routes_messages import router as messages_router
from langcoach.api.routes_languages import router as languages_router
from langcoach.middleware.limits import BodySizeLimitMiddleware
from langcoach.services.errors import InvalidInput, GenerationUnavailable

log = logging.getLogger("langcoach")

app = FastAPI(title="AI Language Coach")

app.add_middleware(BodySizeLimitMiddleware)

@app.exception_handler(InvalidInput)
async def invalid_input(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=400, content={"error": str(exc)})

@app.exception_handler(GenerationUnavailable)
async def generation_unavailable(request: Request, exc: GenerationUnavailable):
    log.error("Feedback generation error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=502,
        content={"error": "Feedback generation failed", "details": str(exc)},
    )

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(feedback_router)
app.include_router(messages_router)
app.include_router(languages_router)
