import httpx
from fastapi import Request
from fastapi.templating import Jinja2Templates

from guestbook.core.config import Settings

def get_settings(request: Request) -> Settings:
    """create_app()에서 app.state에 올려둔 설정을 반환합니다."""
    return request.app.state.settings

def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates

async def get_backend_client():
    """
    요청마다 백엔드 호출용 httpx.AsyncClient를 열고 닫습니다.
    타임아웃 등은 httpx 기본값을 그대로 사용합니다.
    """
    async with httpx.AsyncClient() as client:
        yield client
