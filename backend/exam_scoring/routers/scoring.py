from __future__ import annotations
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from ..errors import InvalidInput
from ..remote_scorer import RemoteScoringClient, get_remote_client, score_with_fallback
from ..scoring import parse_answers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["scoring"])


@router.post("/score-exam")
async def score_exam(request: Request, client: Optional[RemoteScoringClient] = Depends(get_remote_client)):
	try:
		body = await request.json()
	except ValueError as err:
		raise InvalidInput("request body must be valid JSON") from err
	pairs = parse_answers(body)
	try:
		result, source = await score_with_fallback(pairs, client)
	except Exception:
		# Never leak internals to the caller
		logger.exception("Error in score-exam API")
		return JSONResponse(status_code=500, content={"error": "Internal server error", "status": "error"})
	logger.debug("score-exam served by %s scorer", source)
	return result.to_wire()
