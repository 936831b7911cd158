import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from referee import __version__
from referee.config import settings

# ─── Logging setup (console, plus rotating file when LOG_DIR is set) ───
_handlers: list[logging.Handler] = [logging.StreamHandler()]
if settings.log_dir:
    _log_dir = Path(settings.log_dir)
    _log_dir.mkdir(parents=True, exist_ok=True)
    _handlers.append(
        RotatingFileHandler(
            _log_dir / "referee.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
    )

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=_handlers,
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from referee.routers import compare, examples

logger = logging.getLogger(__name__)

app = FastAPI(
    title="The Referee API",
    version=__version__,
    description="Smart comparison tool for technical decisions",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(compare.router, prefix="/api", tags=["compare"])
app.include_router(examples.router, prefix="/api/examples", tags=["examples"])


@app.get("/")
async def root():
    return {
        "name": "The Referee API",
        "version": __version__,
        "description": "Smart comparison tool for technical decisions",
        "endpoints": {
            "/api/compare/apis": "Compare API options",
            "/api/compare/cloud": "Compare cloud services",
            "/api/recommend/tech-stack": "Get tech stack recommendations",
            "/api/compare/general": "General option comparison",
        },
    }


@app.get("/api/health")
async def health():
    return {"status": "ok"}
