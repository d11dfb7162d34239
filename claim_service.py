# claim_service.py
# HTTP front end for the retaliation claim questionnaire.
#
# Run:
#   uvicorn claim_service:app --reload
#
# Endpoints:
#   GET  /prompt   current claim element (or complete)
#   POST /answer   submit facts for the current element
#   GET  /ruling   plausibility ruling once all elements are answered

import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from claim_session import FlowController, SessionCompleteError, ValidationError
from factual_scorer import SCORING_VERSION
from plausibility_ruling import compute_all_scores_and_verdict

logging.basicConfig(
    level=os.getenv("CLAIM_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Retaliation Claim Plausibility Questionnaire"
SERVICE_VERSION = "1.0"

OPEN_PATHS = ("/docs", "/openapi.json", "/redoc", "/health")


class APIKeyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        # Docs and health stay reachable without a key
        if request.url.path in OPEN_PATHS:
            return await call_next(request)
        api_key = os.getenv("CLAIM_API_KEY", "")
        if api_key and request.headers.get("x-api-key") != api_key:
            return JSONResponse({"detail": "Unauthorized"}, status_code=401)
        return await call_next(request)


class AnswerRequest(BaseModel):
    answer: str


def prompt_state(controller: FlowController) -> dict:
    """Describe what the presentation layer should render next"""
    prompt = controller.current_prompt()
    step, total = controller.progress()
    if prompt is None:
        return {"complete": True, "step": step, "total": total}
    return {
        "complete": False,
        "step": step + 1,
        "total": total,
        "identity": prompt.identity,
        "title": prompt.title,
        "question": prompt.question_text,
    }


def get_controller(request: Request) -> FlowController:
    return request.app.state.controller


def create_app() -> FastAPI:
    """Build an app that owns exactly one questionnaire session"""
    app = FastAPI(
        title=SERVICE_NAME,
        version=SERVICE_VERSION,
        description="Scores retaliation claim facts against the plausibility standard",
    )
    app.state.controller = FlowController()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Lock down in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(APIKeyMiddleware)

    @app.get("/")
    def root():
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "description": "Answer three claim elements, receive a plausibility ruling",
        }

    @app.get("/health")
    def health():
        return {"status": "ok", "version": SERVICE_VERSION}

    @app.get("/prompt")
    def current_prompt(request: Request):
        return prompt_state(get_controller(request))

    @app.post("/answer")
    def submit_answer(req: AnswerRequest, request: Request):
        controller = get_controller(request)
        try:
            controller.submit(req.answer)
        except ValidationError as ve:
            raise HTTPException(status_code=400, detail=str(ve))
        except SessionCompleteError as se:
            raise HTTPException(status_code=409, detail=str(se))
        return prompt_state(controller)

    @app.get("/ruling")
    def ruling(request: Request):
        controller = get_controller(request)
        if not controller.is_complete():
            raise HTTPException(status_code=409, detail="Answer every claim element before requesting a ruling.")

        result = compute_all_scores_and_verdict(controller.session.answers)
        titles = {p.identity: p.title for p in controller.prompts}

        # NOTE: scores are never included in the output
        return {
            "facts": [
                {"element": identity, "title": titles.get(identity, identity), "answer": text}
                for identity, text in result.facts
            ],
            "ruling": {
                "tier": result.verdict.tier,
                "label": result.verdict.label,
                "description": result.verdict.description,
                "severity_class": result.verdict.severity_class,
            },
            "scoring_version": dict(SCORING_VERSION),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
