"""FastAPI application: diagnosis session routes, symptom search, CORS, session sweep."""

import asyncio
from contextlib import asynccontextmanager, suppress
from datetime import datetime, timezone
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from symptom_intake.config import settings
from symptom_intake.diagnosis.orchestrator import DiagnosisOrchestrator
from symptom_intake.errors import SymptomIntakeError, error_payload
from symptom_intake.llm.client import ChatCompletionClient
from symptom_intake.models import (
    AddSymptomRequest,
    AnalyzeRequest,
    CatalogSymptom,
    DiagnosisResult,
    OperationStatus,
    RemoveSymptomRequest,
    SessionCreated,
    SymptomReport,
)
from symptom_intake.sessions.store import SessionStore
from symptom_intake.symptom_catalog import search_symptoms

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def _sweep_sessions(store: SessionStore, interval_seconds: float) -> None:
    """Periodically evict idle sessions until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        store.purge_expired()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the session store, model client and orchestrator."""
    store = SessionStore(ttl_seconds=settings.session_ttl_seconds)
    client = ChatCompletionClient.from_settings(settings)
    app.state.store = store
    app.state.orchestrator = DiagnosisOrchestrator(
        store,
        client,
        temperature=settings.llm_temperature,
    )

    if not client.configured:
        logger.warning(
            "Upstream model API key missing. Analysis requests will fail until "
            "PERPLEXITY_API_KEY or SYMPTOM_INTAKE_LLM_API_KEY is set."
        )
    logger.info(
        "Upstream model configured at: %s (model: %s)",
        settings.llm_base_url,
        settings.llm_model,
    )

    sweep_task = None
    if settings.session_sweep_interval_seconds > 0:
        sweep_task = asyncio.create_task(
            _sweep_sessions(store, settings.session_sweep_interval_seconds)
        )
    yield
    if sweep_task is not None:
        sweep_task.cancel()
        with suppress(asyncio.CancelledError):
            await sweep_task
    logger.info("Shutting down.")


app = FastAPI(
    title="Symptom Intake",
    description="Symptom intake with emergency screening and model-backed differential diagnosis",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SymptomIntakeError)
async def symptom_intake_error_handler(request: Request, exc: SymptomIntakeError):
    logger.error("%s on %s: %s", exc.__class__.__name__, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc))


@app.post("/api/diagnosis/init", response_model=SessionCreated)
async def init_session(request: Request):
    store: SessionStore = request.app.state.store
    return SessionCreated(session_id=store.create_session())


@app.post("/api/diagnosis/add-symptom", response_model=OperationStatus)
async def add_symptom(body: AddSymptomRequest, request: Request):
    store: SessionStore = request.app.state.store
    store.add_symptom(body.session_id, body.symptom.strip(), body.duration, body.intensity)
    return OperationStatus()


@app.post("/api/diagnosis/remove-symptom", response_model=OperationStatus)
async def remove_symptom(body: RemoveSymptomRequest, request: Request):
    store: SessionStore = request.app.state.store
    store.remove_symptom(body.session_id, body.symptom.strip())
    return OperationStatus()


@app.get("/api/diagnosis/symptoms/{session_id}", response_model=list[SymptomReport])
async def list_symptoms(session_id: str, request: Request):
    store: SessionStore = request.app.state.store
    return store.get_symptoms(session_id)


@app.post("/api/diagnosis/analyze", response_model=DiagnosisResult)
async def analyze(body: AnalyzeRequest, request: Request):
    orchestrator: DiagnosisOrchestrator = request.app.state.orchestrator
    return await orchestrator.analyze(body.session_id, body.to_profile())


@app.get("/api/symptoms/search", response_model=dict[str, list[CatalogSymptom]])
async def search(q: str = ""):
    return {"symptoms": search_symptoms(q)}


@app.get("/api/health")
async def health(request: Request):
    orchestrator: DiagnosisOrchestrator = request.app.state.orchestrator
    configured = bool(getattr(orchestrator.client, "configured", True))
    return {
        "status": "ok" if configured else "degraded",
        "model": settings.llm_model,
        "llm_configured": configured,
        "live_sessions": len(request.app.state.store),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "symptom_intake.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
