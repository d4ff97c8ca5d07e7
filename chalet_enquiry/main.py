from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from chalet_enquiry.api.router import api_router
from chalet_enquiry.core.config import Settings, get_settings
from chalet_enquiry.core.cors import cors_headers
from chalet_enquiry.core.errors import EnquiryError, MethodNotAllowed
from chalet_enquiry.core.log import configure_logging
from chalet_enquiry.services.email import EmailProvider, build_provider

logger = structlog.get_logger()


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    settings = request.app.state.settings
    return JSONResponse(
        {"error": message},
        status_code=status_code,
        headers=cors_headers(request.headers.get("origin"), settings),
    )


def create_app(
    settings: Settings | None = None,
    provider: EmailProvider | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    #Create application instance
    app = FastAPI(
        title="Chalet Josephine Enquiry Worker",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    #Configuration and mail backend are chosen once, at construction
    app.state.settings = settings
    app.state.email_provider = provider or build_provider(settings)

    #Every failure leaves as {"error": ...} with the same CORS headers as success
    @app.exception_handler(EnquiryError)
    async def enquiry_error_handler(request: Request, exc: EnquiryError):
        return _error_response(request, exc.status_code, exc.message)

    #Methods the route does not list are refused by the router itself
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return _error_response(request, 405, MethodNotAllowed.message)
        return _error_response(request, exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path)
        return _error_response(request, 500, "Internal server error")

    #Register the enquiry route under the main application
    app.include_router(api_router)

    logger.info(
        "app_created",
        provider=app.state.email_provider.name,
        to_email=settings.TO_EMAIL,
    )

    return app


app = create_app()
