import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .db import init_db
from .errors import InvalidInput
from .settings import settings
from .routers import scoring
from .routers import exams

logging.basicConfig(
	level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Exam Scoring API")
app.include_router(scoring.router)
app.include_router(exams.router)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
	return JSONResponse(status_code=400, content={"error": str(exc), "status": "error"})


@app.get("/health")
def health():
	return {"ok": True}


@app.get("/info")
def root():
	return {"status": "ok", "remote_scoring_configured": bool(settings.ai_scoring_url)}


@app.on_event("startup")
async def startup_event():
	init_db()
