from fastapi import Request, status
from fastapi.exception_handlers import http_exception_handler as fastapi_http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from guestbook.app.routers.guestbook import method_not_allowed
from guestbook.core import exceptions
import logging

logger = logging.getLogger(__name__)

def _error_response(message: str, status_code: int, headers: dict = None) -> PlainTextResponse:
    # 브라우저용 프론트엔드이므로 에러 본문은 text/plain
    headers = dict(headers or {})
    headers["X-Content-Type-Options"] = "nosniff"
    return PlainTextResponse(f"{message}\n", status_code=status_code, headers=headers)

async def guestbook_exception_handler(request: Request, exc: exceptions.GuestbookError):
    status_code = status.HTTP_400_BAD_REQUEST
    headers = None

    if isinstance(exc, exceptions.PageNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND

    elif isinstance(exc, exceptions.MethodNotAllowedError):
        status_code = status.HTTP_405_METHOD_NOT_ALLOWED
        headers = {"Allow": exc.allowed}

    elif isinstance(exc, (exceptions.EntryValidationError, exceptions.MessageNotSavedError)):
        status_code = status.HTTP_400_BAD_REQUEST

    elif isinstance(exc, exceptions.BackendError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        logger.error(f"backend error on {request.method} {request.url.path}: {exc.message}")

    return _error_response(exc.message, status_code, headers)

async def general_exception_handler(request: Request, exc: Exception):
    # 예상치 못한 모든 에러 처리
    error_msg = f"Unhandled Exception: {str(exc)}\nPath: {request.url.path}"
    logger.error(f"❌ {error_msg}", exc_info=True)

    return _error_response("Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR)

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # ALL_METHODS 밖의 메서드(TRACE 등)는 라우팅 단계에서 405로 거절됨
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return await guestbook_exception_handler(request, method_not_allowed(request))
    return await fastapi_http_exception_handler(request, exc)
