from fastapi import APIRouter, Depends, Request
from ..core.errors import PayloadValidationError
from ..schemas import ErrorResponse, ReportRequest, ReportResponse
from ..services.report_service import ReportService

router = APIRouter()

def service_dep(request: Request) -> ReportService:
    # Built once in create_app; the model client is shared across requests.
    return request.app.state.report_service

@router.post(
    "/generate-report",
    response_model=ReportResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ReportRequest.model_json_schema(by_alias=True)}},
        }
    },
)
async def post_generate_report(
    request: Request,
    svc: ReportService = Depends(service_dep),
):
    # The body is read by hand so a missing key answers 500 whatever was sent.
    svc.ensure_configured()
    try:
        data = await request.json()
    except ValueError as exc:
        raise PayloadValidationError("Requête invalide.") from exc
    body = svc.parse(data)
    text = await svc.generate(body, request=request)
    return {"result": text}
