from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
import structlog

from chalet_enquiry.api.deps import get_enquiry_service, get_app_settings
from chalet_enquiry.core.config import SUCCESS_MESSAGE, Settings
from chalet_enquiry.core.cors import cors_headers
from chalet_enquiry.core.errors import InvalidBody, MethodNotAllowed, ValidationError
from chalet_enquiry.schemas.enquiry import EnquiryRequest
from chalet_enquiry.services.enquiry import EnquiryService

router = APIRouter(tags=["Enquiry"])
logger = structlog.get_logger()

"""
ENQUIRY ROUTE => ONE HANDLER FOR EVERY PATH AND METHOD

1) OPTIONS => PREFLIGHT, CORS HEADERS ONLY, BODY NEVER READ
2) POST    => PARSE, VALIDATE, NOTIFY CHALET, CONFIRM TO GUEST (BEST EFFORT)
3) OTHER   => 405

"""

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{path:path}", methods=ALL_METHODS)
async def handle_enquiry(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_app_settings),
    service: EnquiryService = Depends(get_enquiry_service),
):
    headers = cors_headers(request.headers.get("origin"), settings)

    if request.method == "OPTIONS":
        return Response(headers=headers)

    if request.method != "POST":
        raise MethodNotAllowed()

    try:
        data = await request.json()
    except ValueError:
        raise InvalidBody()

    try:
        enquiry = EnquiryRequest.from_payload(data)
    except ValidationError as e:
        logger.info("enquiry_rejected", reason=e.message)
        raise

    logger.info(
        "enquiry_received",
        arrival_date=enquiry.arrival_date,
        departure_date=enquiry.departure_date,
        guests=enquiry.guests,
    )

    #Provider calls block, so they run in the threadpool like a sync route
    await run_in_threadpool(service.submit, enquiry, background_tasks.add_task)

    return JSONResponse(
        {"success": True, "message": SUCCESS_MESSAGE},
        status_code=200,
        headers=headers,
    )
