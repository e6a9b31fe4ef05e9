from __future__ import annotations
import json
import logging
import uuid
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from ..db import get_db
from ..models import ExamResult
from ..remote_scorer import RemoteScoringClient, get_remote_client, score_with_fallback
from ..schemas import ExamResultAnswer, ExamResultOut, ExamSubmission, UserSummary
from ..scoring import round_half_up

logger = logging.getLogger(__name__)

router = APIRouter(tags=["exams"])


def _display_name(submission: ExamSubmission) -> str:
	if submission.user_display_name:
		return submission.user_display_name
	if submission.user_email:
		return submission.user_email.split("@")[0]
	return "User"


def _percentage(total_score: float, total_max_score: float) -> int:
	if not total_max_score:
		return 0
	return round_half_up(total_score / total_max_score * 100)


def _to_out(row: ExamResult) -> ExamResultOut:
	answers = [ExamResultAnswer(**a) for a in json.loads(row.answers_json or "[]")]
	return ExamResultOut(
		id=row.id,
		user_id=row.user_id,
		user_display_name=row.user_display_name,
		user_email=row.user_email,
		user_avatar=row.user_avatar,
		module_id=row.module_id,
		module_title=row.module_title,
		submitted_at=row.submitted_at,
		total_score=row.total_score,
		total_max_score=row.total_max_score,
		percentage=_percentage(row.total_score, row.total_max_score),
		scored_by=row.scored_by,
		answers=answers,
	)


@router.post("/exams/{module_id}/submissions", response_model=ExamResultOut, status_code=201)
async def submit_exam(
	module_id: str,
	submission: ExamSubmission,
	db: Session = Depends(get_db),
	client: Optional[RemoteScoringClient] = Depends(get_remote_client),
):
	pairs = [answer.to_pair() for answer in submission.answers]
	try:
		result, source = await score_with_fallback(pairs, client)
	except Exception:
		logger.exception("Error scoring exam submission for module %s", module_id)
		return JSONResponse(status_code=500, content={"error": "Internal server error", "status": "error"})

	breakdown: List[ExamResultAnswer] = []
	# Outcomes come back in answer order, one per answer
	for answer, outcome in zip(submission.answers, result.results):
		breakdown.append(ExamResultAnswer(
			question_id=answer.question_id,
			question=answer.question,
			user_answer=answer.user_answer,
			key_answer=answer.key_answer,
			max_score=answer.max_score,
			similarity_score=outcome.similarity_score,
			final_score=outcome.final_score,
		))

	row = ExamResult(
		id=uuid.uuid4().hex,
		user_id=submission.user_id,
		user_display_name=_display_name(submission),
		user_email=submission.user_email,
		user_avatar=submission.user_avatar,
		module_id=module_id,
		module_title=submission.module_title,
		total_score=sum(a.final_score for a in breakdown),
		total_max_score=sum(a.max_score for a in breakdown),
		scored_by=source,
		answers_json=json.dumps([a.model_dump() for a in breakdown]),
		submitted_at=datetime.utcnow(),
	)
	db.add(row)
	db.commit()
	db.refresh(row)
	return _to_out(row)


@router.get("/users/{user_id}/exam-results", response_model=List[ExamResultOut])
def list_exam_results(user_id: str, db: Session = Depends(get_db)):
	rows = (
		db.query(ExamResult)
		.filter(ExamResult.user_id == user_id)
		.order_by(ExamResult.submitted_at.desc())
		.all()
	)
	return [_to_out(r) for r in rows]


@router.get("/exam-results/{result_id}", response_model=ExamResultOut)
def get_exam_result(result_id: str, db: Session = Depends(get_db)):
	row = db.get(ExamResult, result_id)
	if row is None:
		raise HTTPException(status_code=404, detail="exam result not found")
	return _to_out(row)


@router.get("/users/{user_id}/summary", response_model=UserSummary)
def user_summary(user_id: str, db: Session = Depends(get_db)):
	rows = db.query(ExamResult.total_score).filter(ExamResult.user_id == user_id).all()
	scores = [r[0] for r in rows]
	average = round_half_up(sum(scores) / len(scores)) if scores else 0
	return UserSummary(user_id=user_id, exams_taken=len(scores), average_score=average)
