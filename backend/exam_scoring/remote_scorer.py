from __future__ import annotations
import asyncio
import logging
from typing import Optional, Sequence, Tuple
import httpx
from pydantic import ValidationError
from .errors import RemoteLogicError, RemoteUnavailable
from .schemas import BatchResult, QuestionAnswerPair
from .scoring import score_batch
from .settings import settings
from .similarity import SimilarityPolicy

logger = logging.getLogger(__name__)

SOURCE_REMOTE = "remote"
SOURCE_LOCAL = "local"

_SUCCESS_FIELDS = ("results", "total_score", "total_max_score")


class RemoteScoringClient:
	"""Client for the external AI scoring service.

	One POST scores a whole exam. Every failure is raised as
	``RemoteUnavailable`` or ``RemoteLogicError`` so callers can fall back.
	"""

	def __init__(
		self,
		base_url: Optional[str] = None,
		*,
		timeout: Optional[float] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.base_url = base_url or settings.ai_scoring_url
		if not self.base_url:
			raise ValueError("AI_SCORING_URL is not configured")
		self.timeout = float(timeout if timeout is not None else settings.ai_scoring_timeout_seconds)
		self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

	async def score(self, pairs: Sequence[QuestionAnswerPair]) -> BatchResult:
		payload = {"answers": [pair.to_wire() for pair in pairs]}
		try:
			# httpx timeouts are per phase; wait_for bounds the whole round trip
			r = await asyncio.wait_for(
				self._client.post(self.base_url, json=payload, headers={"Content-Type": "application/json"}),
				timeout=self.timeout,
			)
			r.raise_for_status()
		except asyncio.TimeoutError as err:
			raise RemoteUnavailable(f"scoring service timed out after {self.timeout:g}s") from err
		except httpx.HTTPStatusError as http_err:
			raise RemoteUnavailable(f"scoring service returned status {http_err.response.status_code}") from http_err
		except (httpx.RequestError, httpx.InvalidURL) as net_err:
			raise RemoteUnavailable(f"scoring service unreachable: {net_err}") from net_err
		try:
			data = r.json()
			result = BatchResult.model_validate(data)
		except (ValueError, ValidationError) as err:
			raise RemoteUnavailable(f"Unexpected scoring service response: {r.text[:200]}") from err
		if result.status != "success":
			raise RemoteLogicError(result.error or "scoring service reported an error")
		missing = [k for k in _SUCCESS_FIELDS if k not in data]
		if missing:
			raise RemoteUnavailable(f"scoring service response lacks {', '.join(missing)}")
		# One outcome per answer, in request order
		if [o.question_id for o in result.results] != [p.question_id for p in pairs]:
			raise RemoteUnavailable("scoring service results do not match the submitted answers")
		return result

	async def aclose(self) -> None:
		await self._client.aclose()


async def score_with_fallback(
	pairs: Sequence[QuestionAnswerPair],
	client: Optional[RemoteScoringClient],
	policy: Optional[SimilarityPolicy] = None,
) -> Tuple[BatchResult, str]:
	"""Score remotely if possible, otherwise locally. Returns (result, source)."""
	if client is not None:
		try:
			result = await client.score(pairs)
			logger.info("Exam of %d answers scored by remote service", len(pairs))
			return result, SOURCE_REMOTE
		except RemoteLogicError as err:
			logger.warning("Remote scorer returned error (%s), using fallback", err)
		except RemoteUnavailable as err:
			logger.warning("Remote scorer not available (%s), using fallback", err)
	result = score_batch(list(pairs), policy)
	logger.info("Exam of %d answers scored locally", len(pairs))
	return result, SOURCE_LOCAL


async def get_remote_client():
	"""FastAPI dependency: a client per request, or None when no service is configured."""
	if not settings.ai_scoring_url:
		yield None
		return
	client = RemoteScoringClient()
	try:
		yield client
	finally:
		await client.aclose()
