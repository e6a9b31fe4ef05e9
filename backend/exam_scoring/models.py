from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Float, Text
from .db import Base


class ExamResult(Base):
	__tablename__ = "exam_results"
	id = Column(String(64), primary_key=True)
	user_id = Column(String(128), index=True, nullable=False)
	user_display_name = Column(String(256), nullable=False, default="")
	user_email = Column(String(256), nullable=False, default="")
	user_avatar = Column(String(512), nullable=True)
	module_id = Column(String(128), index=True, nullable=False)
	module_title = Column(String(256), nullable=False, default="")
	total_score = Column(Float, nullable=False, default=0)
	total_max_score = Column(Float, nullable=False, default=0)
	# "remote" or "local"
	scored_by = Column(String(16), nullable=False)
	answers_json = Column(Text, nullable=False)  # JSON list of per-question breakdowns
	submitted_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
