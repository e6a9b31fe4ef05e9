from __future__ import annotations
import math
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


Number = Union[int, float]


def _check_max_score(value: Number) -> Number:
	if isinstance(value, bool) or not math.isfinite(value) or value <= 0:
		raise ValueError("max_score must be a positive number")
	return value


class QuestionAnswerPair(BaseModel):
	"""One answer to score. Wire names follow the scoring service contract."""

	model_config = ConfigDict(populate_by_name=True)

	question_id: str
	# Shown to the student only; never used for scoring
	question_text: str = ""
	reference_answer: str = Field(alias="key_answer")
	candidate_answer: str = Field(default="", alias="student_answer")
	max_score: Number

	@field_validator("candidate_answer", mode="before")
	@classmethod
	def _none_is_empty(cls, value: Any) -> Any:
		return "" if value is None else value

	@field_validator("max_score")
	@classmethod
	def _positive_max_score(cls, value: Number) -> Number:
		return _check_max_score(value)

	def to_wire(self) -> Dict[str, Any]:
		return self.model_dump(by_alias=True, exclude={"question_text"})


class ScoringOutcome(BaseModel):
	question_id: str
	similarity_score: float
	final_score: Number
	max_score: Number


class BatchResult(BaseModel):
	results: List[ScoringOutcome] = Field(default_factory=list)
	total_score: Number = 0
	total_max_score: Number = 0
	status: Literal["success", "error"]
	error: Optional[str] = None

	def to_wire(self) -> Dict[str, Any]:
		return self.model_dump(exclude_none=True)


# ---- Exam submissions ----

class SubmittedAnswer(BaseModel):
	question_id: str
	question: str = ""
	user_answer: str = ""
	key_answer: str
	max_score: Number

	@field_validator("max_score")
	@classmethod
	def _positive_max_score(cls, value: Number) -> Number:
		return _check_max_score(value)

	def to_pair(self) -> QuestionAnswerPair:
		return QuestionAnswerPair(
			question_id=self.question_id,
			question_text=self.question,
			reference_answer=self.key_answer,
			candidate_answer=self.user_answer,
			max_score=self.max_score,
		)


class ExamSubmission(BaseModel):
	user_id: str
	user_display_name: str = ""
	user_email: str = ""
	user_avatar: Optional[str] = None
	module_title: str = ""
	answers: List[SubmittedAnswer] = Field(min_length=1)


class ExamResultAnswer(BaseModel):
	question_id: str
	question: str
	user_answer: str
	key_answer: str
	max_score: Number
	similarity_score: float
	final_score: Number


class ExamResultOut(BaseModel):
	id: str
	user_id: str
	user_display_name: str
	user_email: str
	user_avatar: Optional[str] = None
	module_id: str
	module_title: str
	submitted_at: datetime
	total_score: Number
	total_max_score: Number
	percentage: int
	scored_by: str
	answers: List[ExamResultAnswer]


class UserSummary(BaseModel):
	user_id: str
	exams_taken: int
	average_score: int
