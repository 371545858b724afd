import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse, StreamingResponse
from fastapi.templating import Jinja2Templates
from starlette.datastructures import FormData

from guestbook.core.config import Settings
from guestbook.core.deps import get_backend_client, get_settings, get_templates
from guestbook.core.exceptions import GuestbookError, MessageNotSavedError, MethodNotAllowedError, PageNotFoundError
from guestbook.core.templating import HOME_TEMPLATE, render_stream
from guestbook.services.guestbook_service import list_messages, save_message

logger = logging.getLogger(__name__)

router = APIRouter(tags=["guestbook"])

# 메서드 검사는 핸들러 안에서 직접 수행 (잘못된 메서드 → 405)
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

def method_not_allowed(request: Request) -> MethodNotAllowedError:
    # /post만 POST, 나머지 경로는 GET
    if request.url.path == "/post":
        return MethodNotAllowedError("POST")
    return MethodNotAllowedError("GET", message=f"only GET requests are supported (got {request.method})")

def _form_value(request: Request, form: FormData, key: str) -> str:
    # 본문 폼 값이 우선, 없으면 쿼리 스트링
    if key in form:
        value = form.get(key)
        return value if isinstance(value, str) else ""
    return request.query_params.get(key, "")

@router.api_route("/", methods=ALL_METHODS)
async def home(
    request: Request,
    settings: Settings = Depends(get_settings),
    templates: Jinja2Templates = Depends(get_templates),
    client: httpx.AsyncClient = Depends(get_backend_client),
):
    """
    방명록 목록을 백엔드에서 가져와 home 템플릿으로 렌더링합니다.
    """
    logger.info(f"received request: {request.method} {request.url.path}")
    if request.method != "GET":
        raise method_not_allowed(request)

    entries = await list_messages(client, settings.BACKEND_BASE_URL)

    template = templates.get_template(HOME_TEMPLATE)
    return StreamingResponse(render_stream(template, {"messages": entries}), media_type="text/html")

@router.api_route("/post", methods=ALL_METHODS)
async def post_message(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_backend_client),
):
    """
    폼으로 제출된 메시지를 백엔드에 저장하고 홈으로 리다이렉트합니다.
    """
    logger.info(f"received request: {request.method} {request.url.path}")
    if request.method != "POST":
        raise method_not_allowed(request)

    form = await request.form()
    try:
        await save_message(
            client,
            settings.BACKEND_BASE_URL,
            _form_value(request, form, "name"),
            _form_value(request, form, "message"),
        )
    except GuestbookError as e:
        raise MessageNotSavedError(e.message) from e

    # redirect to homepage
    return RedirectResponse("/", status_code=302)

@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def not_found(request: Request):
    logger.info(f"received request: {request.method} {request.url.path}")
    if request.method != "GET":
        raise method_not_allowed(request)
    raise PageNotFoundError()
