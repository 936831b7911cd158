from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Scoring fan-out
    scorer_timeout_seconds: float = 10.0
    scorer_concurrency: int = 10

    # API health probes
    health_probe_timeout_seconds: float = 5.0

    # General comparisons: "field" (deterministic) or "random" (demo/test only)
    general_scorer: str = "field"
    random_seed: int = 0

    # Logging
    log_level: str = "INFO"
    log_dir: str = ""

    # CORS
    cors_origins: str = "http://localhost:5173"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
