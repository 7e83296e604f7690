import logging
from typing import Optional

from fastapi import FastAPI

from .gemini_client import GeminiClient
from .session import ClientFactory, StudySession
from .settings import settings
from .routers import health, scan, notes, mindmap, practice


def setup_logging() -> None:
	level = getattr(logging, settings.log_level.upper(), logging.INFO)
	logging.basicConfig(
		level=level,
		format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
	)
	logging.getLogger("snapnotes").setLevel(level)
	# httpx logs full request URLs at INFO, which include the AI Studio key
	logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app(client_factory: Optional[ClientFactory] = None) -> FastAPI:
	setup_logging()
	app = FastAPI(title="SnapNotes API")
	# Single study session per process; nothing is persisted
	app.state.study = StudySession(client_factory or GeminiClient)
	app.include_router(health.router)
	app.include_router(scan.router)
	app.include_router(notes.router)
	app.include_router(mindmap.router)
	app.include_router(practice.router)

	@app.get("/info")
	def root():
		return {"status": "ok", "gemini_configured": bool(settings.gemini_api_key)}

	return app


app = create_app()
