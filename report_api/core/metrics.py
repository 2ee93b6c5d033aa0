import time
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

# Define metrics (names follow Prometheus conventions)
REQ_COUNT = Counter("http_requests_total", "Total HTTP requests", ["path","method","code"])
REQ_LATENCY = Histogram("http_request_duration_seconds", "Request latency", ["path","method"])

# One increment per generation attempt that reached the service
REPORT_OUTCOMES = Counter(
    "report_generations_total",
    "Report generation attempts by outcome",
    ["outcome"],  # success | invalid | unconfigured | empty | upstream_error | disconnected
)
UPSTREAM_LATENCY = Histogram("report_upstream_duration_seconds", "Model call latency")

class PromMiddleware:
    """
    Measures latency and counts requests. Plain ASGI, same reason as
    CorrelationIdMiddleware: it must not hide client disconnects.
    """
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status = {"code": 500}

        async def send_with_status(message: Message):
            if message["type"] == "http.response.start":
                status["code"] = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_with_status)
        finally:
            elapsed = time.perf_counter() - start

            # Use the route template when available to keep label cardinality bounded
            route = scope.get("route")
            path = getattr(route, "path", None) or scope["path"]
            method = scope["method"]
            code = str(status["code"])

            REQ_COUNT.labels(path=path, method=method, code=code).inc()
            REQ_LATENCY.labels(path=path, method=method).observe(elapsed)

async def metrics_endpoint(request: Request):
    """
    GET /v1/metrics, scraped by Prometheus.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
