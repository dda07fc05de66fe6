from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")
	extraction_timeout_seconds: float = Field(default=60.0, validation_alias="EXTRACTION_TIMEOUT_SECONDS")

	# Auth
	jwt_secret_key: str = Field(default="change-me", validation_alias="JWT_SECRET_KEY")
	jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
	access_token_expire_minutes: int = Field(default=7 * 24 * 60, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Uploaded images, served back under /uploads
	upload_dir: str = Field(default="uploads", validation_alias="UPLOAD_DIR")
	max_upload_bytes: int = Field(default=10 * 1024 * 1024, validation_alias="MAX_UPLOAD_BYTES")

	# Optional remote transliteration (Google Input Tools)
	transliteration_service_enabled: bool = Field(default=True, validation_alias="TRANSLITERATION_SERVICE_ENABLED")
	transliteration_service_url: str = Field(default="https://inputtools.google.com/request", validation_alias="TRANSLITERATION_SERVICE_URL")
	transliteration_timeout_seconds: float = Field(default=2.0, validation_alias="TRANSLITERATION_TIMEOUT_SECONDS")
	transliteration_remote_limit: int = Field(default=3, validation_alias="TRANSLITERATION_REMOTE_LIMIT")
	# How long suggestions wait on remote candidates before going out with local ones only
	transliteration_remote_budget_seconds: float = Field(default=0.8, validation_alias="TRANSLITERATION_REMOTE_BUDGET_SECONDS")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	# Development diagnostics: include exception text in 500 responses
	debug: bool = Field(default=False, validation_alias="DEBUG")
	# Comma separated
	cors_allow_origins: str = Field(default="", validation_alias="CORS_ALLOW_ORIGINS")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	def cors_origins(self) -> list[str]:
		seen: list[str] = []
		for item in self.cors_allow_origins.split(","):
			item = item.strip()
			if item and item not in seen:
				seen.append(item)
		return seen

settings = Settings()
