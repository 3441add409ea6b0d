from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_path: Path = Path.home() / ".talentsearch" / "db.sqlite"
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = [
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ]

    # Search engine. When disabled or unreachable at startup the process
    # serves every search from the document store until restarted.
    elasticsearch_enabled: bool = True
    elasticsearch_url: str = "http://localhost:9200"
    elasticsearch_username: str | None = None
    elasticsearch_password: str | None = None
    index_prefix: str = ""

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"

    default_page_size: int = 10
    recommendation_limit: int = 10

    model_config = {"env_prefix": "TALENTSEARCH_"}


settings = Settings()
