from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# External AI scoring service; when unset every exam is scored locally
	ai_scoring_url: str | None = Field(default=None, validation_alias="AI_SCORING_URL")
	# Generous enough to absorb the cold start of an on-demand backend
	ai_scoring_timeout_seconds: float = Field(default=60.0, validation_alias="AI_SCORING_TIMEOUT_SECONDS")

	# Local similarity policy
	similarity_drop_short_tokens: bool = Field(default=True, validation_alias="SIMILARITY_DROP_SHORT_TOKENS")
	similarity_min_token_length: int = Field(default=3, validation_alias="SIMILARITY_MIN_TOKEN_LENGTH")
	similarity_substring_bonus: bool = Field(default=False, validation_alias="SIMILARITY_SUBSTRING_BONUS")
	similarity_substring_bonus_score: float = Field(default=0.8, validation_alias="SIMILARITY_SUBSTRING_BONUS_SCORE")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
