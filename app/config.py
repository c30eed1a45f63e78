from pathlib import Path

from pydantic_settings import BaseSettings

DEFAULT_REVIEWS_FILE = Path(__file__).parent / "data" / "reviews.json"


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    hostaway_api_key: str
    hostaway_account_id: str = "61148"
    hostaway_api_url: str = "https://api.hostaway.com/v1/reviews"
    hostaway_timeout: float = 10.0
    reviews_file: Path = DEFAULT_REVIEWS_FILE
    log_level: str = "INFO"


class CorsSettings(BaseSettings):
    model_config = {
        "env_prefix": "CORS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    allowed_origins: list[str] = ["https://reviews-dashboard-92a1.vercel.app"]
    allow_origin_regex: str = r"https://.*\.vercel\.app"
