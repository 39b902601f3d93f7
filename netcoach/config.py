from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:  # pragma: no cover - avoids circular import at runtime
    from netcoach.features.prioritization.domain.models import RelevanceWeights


ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    LOG_LEVEL: str = "INFO"

    # =================================================================
    # RELEVANCE WEIGHTS - used when the user has no overrides saved
    # =================================================================
    RELEVANCE_WEIGHT_INDUSTRY: float = Field(default=30, ge=0)
    RELEVANCE_WEIGHT_ROLE: float = Field(default=25, ge=0)
    RELEVANCE_WEIGHT_LOCATION: float = Field(default=15, ge=0)
    RELEVANCE_WEIGHT_COMPANY: float = Field(default=15, ge=0)
    RELEVANCE_WEIGHT_SKILLS: float = Field(default=15, ge=0)

    # Weekly planning
    DEFAULT_WEEKLY_CAPACITY: int = Field(default=5, ge=1)

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def default_relevance_weights(self) -> "RelevanceWeights":
        """
        Build the weights injected into the scoring service when a caller
        does not pass per-user overrides.
        """
        from netcoach.features.prioritization.domain.models import RelevanceWeights

        return RelevanceWeights(
            industry=self.RELEVANCE_WEIGHT_INDUSTRY,
            role=self.RELEVANCE_WEIGHT_ROLE,
            location=self.RELEVANCE_WEIGHT_LOCATION,
            company=self.RELEVANCE_WEIGHT_COMPANY,
            skills=self.RELEVANCE_WEIGHT_SKILLS,
        )


settings = Settings()
