from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Routers
from .routers.report import router as report_router

# Core modules
from .core.config import Settings, load_settings
from .core.errors import ReportError, report_error_handler
from .core.logging import configure_logging, CorrelationIdMiddleware
from .core.metrics import PromMiddleware, metrics_endpoint
from .models.base import ReportModel
from .services.report_service import ReportService, build_model

def create_app(settings: Settings | None = None, model: ReportModel | None = None) -> FastAPI:
    """
    App factory so tests and ASGI servers can instantiate cleanly.
    Settings are read once here. Pass `model` to inject a writer; otherwise
    one is built from the settings.
    """
    settings = settings or load_settings()
    configure_logging(settings.LOG_LEVEL)  # Set up JSON logs + correlation-id filter

    app = FastAPI(
        title="TiBreton Immo Expert – Générateur de rapports",
        version="1.0.0",
        description="Génère des rapports d’expertise immobilière et des synthèses de marché à partir de notes de visite.",
    )

    # One model client for the process, handed to the handler through app.state
    if model is None:
        model = build_model(settings)
    app.state.settings = settings
    app.state.report_service = ReportService(model, disconnect_poll_seconds=settings.DISCONNECT_POLL_SECONDS)

    # CORS: allow the form UI to call the API from another origin.
    allow_origins = [o.strip() for o in settings.ALLOW_ORIGINS.split(",")] if settings.ALLOW_ORIGINS else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    # Observability middlewares
    app.add_middleware(CorrelationIdMiddleware)  # Adds/propagates X-Request-Id
    if settings.PROMETHEUS_ENABLED:
        app.add_middleware(PromMiddleware)       # Records req/latency metrics

    # Every failure leaves as {"error": "..."}
    app.add_exception_handler(ReportError, report_error_handler)

    # Meta routes
    @app.get("/v1/health", tags=["meta"])
    def health():
        return {"status": "ok", "model_configured": app.state.report_service.model is not None}

    @app.get("/v1/ping", tags=["meta"])
    def ping():
        return {"pong": True}

    if settings.PROMETHEUS_ENABLED:
        # Standard Prometheus scrape endpoint
        app.add_route("/v1/metrics", metrics_endpoint, methods=["GET"])

    # Business routes
    app.include_router(report_router, prefix="/api", tags=["report"])

    return app

app = create_app()
