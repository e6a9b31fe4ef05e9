from __future__ import annotations
import math
from typing import Any, List, Optional, Sequence
from pydantic import ValidationError
from .errors import InvalidInput
from .schemas import BatchResult, QuestionAnswerPair, ScoringOutcome
from .similarity import SimilarityPolicy, similarity


def round_half_up(value: float) -> int:
	# Same as JavaScript Math.round: halves go toward +infinity
	return int(math.floor(value + 0.5))


def score_pair(pair: QuestionAnswerPair, policy: Optional[SimilarityPolicy] = None) -> ScoringOutcome:
	s = similarity(pair.reference_answer, pair.candidate_answer, policy)
	final_score = round_half_up(s * pair.max_score)
	# A fractional max_score must not be exceeded by the rounded integer
	final_score = max(0, min(final_score, int(math.floor(pair.max_score))))
	return ScoringOutcome(
		question_id=pair.question_id,
		similarity_score=round(s, 4),
		final_score=final_score,
		max_score=pair.max_score,
	)


def score_batch(pairs: Sequence[QuestionAnswerPair], policy: Optional[SimilarityPolicy] = None) -> BatchResult:
	"""Score every pair locally and total the points.

	The output keeps the input order. Only a missing or non-list input fails;
	once the pairs are here the result is always ``success``.
	"""
	if pairs is None or not isinstance(pairs, (list, tuple)):
		raise InvalidInput("answers array is required")
	policy = policy or SimilarityPolicy.from_settings()
	results = [score_pair(pair, policy) for pair in pairs]
	return BatchResult(
		results=results,
		total_score=sum(r.final_score for r in results),
		total_max_score=sum(pair.max_score for pair in pairs),
		status="success",
	)


def parse_answers(payload: Any) -> List[QuestionAnswerPair]:
	if not isinstance(payload, dict):
		raise InvalidInput("request body must be a JSON object")
	answers = payload.get("answers")
	if not isinstance(answers, list):
		raise InvalidInput("answers array is required")
	pairs: List[QuestionAnswerPair] = []
	for idx, item in enumerate(answers):
		if not isinstance(item, dict):
			raise InvalidInput(f"answers[{idx}] must be an object")
		try:
			pairs.append(QuestionAnswerPair.model_validate(item))
		except ValidationError as exc:
			fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
			raise InvalidInput(f"answers[{idx}] is invalid: {fields}") from exc
	return pairs
