from __future__ import annotations
from typing import Optional, Set
from pydantic import BaseModel, ConfigDict
from .settings import settings


class SimilarityPolicy(BaseModel):
	"""Knobs for the lexical similarity used by the local scorer.

	The default policy drops tokens shorter than ``min_token_length`` and never
	short-circuits on substrings. ``lenient()`` keeps every token and grants a
	fixed bonus when one answer contains the other.
	"""

	model_config = ConfigDict(frozen=True)

	drop_short_tokens: bool = True
	min_token_length: int = 3
	substring_bonus: bool = False
	substring_bonus_score: float = 0.8

	@classmethod
	def from_settings(cls) -> "SimilarityPolicy":
		return cls(
			drop_short_tokens=settings.similarity_drop_short_tokens,
			min_token_length=settings.similarity_min_token_length,
			substring_bonus=settings.similarity_substring_bonus,
			substring_bonus_score=settings.similarity_substring_bonus_score,
		)

	@classmethod
	def lenient(cls) -> "SimilarityPolicy":
		return cls(drop_short_tokens=False, substring_bonus=True)


def normalize(text: str) -> str:
	return (text or "").lower().strip()


def tokenize(text: str, policy: SimilarityPolicy) -> Set[str]:
	words = text.split()
	if policy.drop_short_tokens:
		words = [w for w in words if len(w) >= policy.min_token_length]
	return set(words)


def _clamp(value: float) -> float:
	return max(0.0, min(1.0, float(value)))


def similarity(a: str, b: str, policy: Optional[SimilarityPolicy] = None) -> float:
	"""Jaccard overlap of the word sets of ``a`` and ``b``, in [0, 1]."""
	policy = policy or SimilarityPolicy.from_settings()
	t1 = normalize(a)
	t2 = normalize(b)

	if t1 == t2:
		return 1.0
	if not t1 or not t2:
		return 0.0
	if policy.substring_bonus and (t1 in t2 or t2 in t1):
		return _clamp(policy.substring_bonus_score)

	words1 = tokenize(t1, policy)
	words2 = tokenize(t2, policy)
	union = words1 | words2
	if not union:
		return 0.0
	return _clamp(len(words1 & words2) / len(union))
