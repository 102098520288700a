# catering/observability/metrics.py
from fastapi import APIRouter
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest
from starlette.responses import Response

router = APIRouter(tags=["observability"])

quotes_received_total = Counter(
    "catering_quotes_received_total",
    "Quote requests received through the public intake",
    ["service_type"],
)

estimates_generated_total = Counter(
    "catering_estimates_generated_total",
    "Draft estimates generated from quote requests",
    ["result"],  # created|existing|regenerated
)

pricing_applied_total = Counter(
    "catering_pricing_applied_total",
    "Flat-rate pricing runs",
    ["source"],  # tier|custom
)

function_invocations_total = Counter(
    "catering_function_invocations_total",
    "Backend function calls",
    ["function", "result"],  # success|error|dev
)


@router.get("/metrics", include_in_schema=True)
def metrics() -> Response:
    # Prometheus expects text/plain; version=0.0.4
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
