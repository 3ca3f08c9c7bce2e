"""
Point d'entrée principal de l'API du conseil des élèves.
Démarrage : uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import app.models  # noqa: F401 — enregistre tous les modèles dans Base.metadata avant les routers
from app.config import settings
from app.database import SessionLocal, init_db
from app.routers import announcements, auth, goodness, users
from app.scheduler import start_scheduler, stop_scheduler
from app.services.seed_service import seed_demo_data
from app.sessions import build_session_store

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie : schéma, données de démonstration, purge planifiée des sessions."""
    init_db()
    if settings.SEED_DEMO_DATA:
        with SessionLocal() as db:
            seed_demo_data(db)
    start_scheduler(app.state.session_store)
    yield
    stop_scheduler()


app = FastAPI(
    title="Student Council API",
    description="API du conseil des élèves : bonnes actions, points et annonces",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Store unique pour tout le processus, partagé par les cycles de vie successifs
app.state.session_store = build_session_store(settings, SessionLocal)

# Le cookie de session exige allow_credentials, donc des origines explicites (pas de "*").
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Accept"],
)


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(announcements.router)
app.include_router(goodness.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Entrée invalide → 400 avec le premier champ en erreur.
    Format : {"detail": "<message>", "field": "<champ>"}
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    # loc = ("body", "firstName") ou ("query", "userId") ; JSON mal formé : ("body", <position>)
    parts = tuple(first.get("loc", ()))[1:]
    field = ".".join(parts) if parts and all(isinstance(p, str) for p in parts) else None
    return JSONResponse(
        status_code=400,
        content={
            "detail": first.get("msg", "Requête invalide."),
            "field": field,
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées pour garantir que la réponse 500
    passe bien par CORSMiddleware (qui injecte les headers CORS).
    Aucun détail interne n'est renvoyé au client.
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Une erreur interne est survenue."},
    )


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "Student Council API", "version": "0.1.0"}
