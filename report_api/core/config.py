import os
from pydantic import BaseModel

class Settings(BaseModel):
    # Basic
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Models
    MODEL_PROVIDER: str = "openai"  # openai | mock

    # LLM
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4.1"
    OPENAI_TEMPERATURE: float = 0.7

    # How often an in-flight generation checks whether the caller went away
    DISCONNECT_POLL_SECONDS: float = 0.5

    # CORS
    ALLOW_ORIGINS: str = "*"

    # Metrics
    PROMETHEUS_ENABLED: bool = True

    # Form UI
    REPORT_API_URL: str = "http://localhost:8000"
    FORM_STATE_PATH: str = os.path.join(os.path.expanduser("~"), ".tibreton", "form.json")
    UI_REQUEST_TIMEOUT_SECONDS: float = 180.0

def load_settings() -> Settings:
    """
    Read the environment once. Call at startup and pass the result around;
    nothing in the request path should touch os.environ.
    """
    defaults = Settings()
    return Settings(
        ENV=os.getenv("ENV", defaults.ENV),
        LOG_LEVEL=os.getenv("LOG_LEVEL", defaults.LOG_LEVEL),
        MODEL_PROVIDER=os.getenv("MODEL_PROVIDER", defaults.MODEL_PROVIDER).lower(),
        OPENAI_API_KEY=os.getenv("OPENAI_API_KEY") or None,
        OPENAI_MODEL=os.getenv("OPENAI_MODEL", defaults.OPENAI_MODEL),
        OPENAI_TEMPERATURE=float(os.getenv("OPENAI_TEMPERATURE", str(defaults.OPENAI_TEMPERATURE))),
        DISCONNECT_POLL_SECONDS=float(os.getenv("DISCONNECT_POLL_SECONDS", str(defaults.DISCONNECT_POLL_SECONDS))),
        ALLOW_ORIGINS=os.getenv("ALLOW_ORIGINS", defaults.ALLOW_ORIGINS),
        PROMETHEUS_ENABLED=os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true",
        REPORT_API_URL=os.getenv("REPORT_API_URL", defaults.REPORT_API_URL),
        FORM_STATE_PATH=os.getenv("FORM_STATE_PATH", defaults.FORM_STATE_PATH),
        UI_REQUEST_TIMEOUT_SECONDS=float(
            os.getenv("UI_REQUEST_TIMEOUT_SECONDS", str(defaults.UI_REQUEST_TIMEOUT_SECONDS))
        ),
    )
