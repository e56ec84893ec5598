"""Application configuration."""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    
    # Database
    DATABASE_URL: str = "postgresql+asyncpg://leadscope:leadscope123@db:5432/leadscope"
    
    # Enrichment
    ENRICHMENT_MODE: str = "live"  # live | simulated
    SOURCE_TIMEOUT_SECONDS: float = 12.0
    USER_AGENT: str = "Mozilla/5.0 (compatible; LeadScopeBot/1.0)"
    
    # External APIs
    CRUNCHBASE_API_KEY: Optional[str] = None
    SERPAPI_API_KEY: Optional[str] = None
    GITHUB_TOKEN: Optional[str] = None
    NEWS_API_KEY: Optional[str] = None
    
    # Batch Enrichment Configuration
    BATCH_WINDOW_SIZE: int = 5
    BATCH_PACING_SECONDS: float = 1.0
    
    # Scoring
    SCORING_STRATEGY: str = "weighted"  # weighted | simple
    
    # Scheduled re-enrichment
    ENABLE_SCHEDULED_ENRICHMENT: bool = False
    ENRICHMENT_SCHEDULE_HOURS: str = "0,12"  # cron hour field, UTC
    
    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def simulated(self) -> bool:
        return self.ENRICHMENT_MODE.lower() == "simulated"


settings = Settings()
