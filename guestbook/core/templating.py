"""
HTML 템플릿 로딩 및 렌더링.

템플릿은 기동 시점에 한 번 컴파일되며, Jinja2 autoescape가 켜져 있어
author/message 같은 사용자 입력은 렌더링 시 HTML 이스케이프됩니다.
"""
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator, Optional

from fastapi.templating import Jinja2Templates
from jinja2 import Template, TemplateError

from guestbook.core.exceptions import StartupConfigError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "app" / "templates"
HOME_TEMPLATE = "home.html"


def format_duration(seconds: int) -> str:
    """초 단위 경과 시간을 '1h2m3s' 형태로 표시합니다. (0이면 '0s')"""
    if seconds == 0:
        return "0s"
    sign = "-" if seconds < 0 else ""
    seconds = abs(seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


def since_date(t: datetime, now: Optional[datetime] = None) -> str:
    """
    템플릿에서 사람이 읽기 쉬운 경과 시간을 표시할 때 사용합니다.
    초 미만은 버리며(0 방향), tzinfo가 없는 시각은 UTC로 간주합니다.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    micros = (now - t) // timedelta(microseconds=1)
    whole = abs(micros) // 1_000_000
    return format_duration(-whole if micros < 0 else whole)


def load_templates(directory: Path = TEMPLATES_DIR) -> Jinja2Templates:
    """템플릿 디렉터리를 로드하고 home 템플릿을 미리 컴파일합니다."""
    templates = Jinja2Templates(directory=str(directory))
    templates.env.globals["since"] = since_date
    try:
        templates.get_template(HOME_TEMPLATE)
    except TemplateError as e:
        raise StartupConfigError(f"could not parse templates: {e!r}") from e
    return templates


def render_stream(template: Template, context: dict) -> Iterator[str]:
    """
    템플릿을 조각 단위로 생성합니다.
    응답 헤더가 이미 전송된 뒤이므로 렌더링 실패는 로그만 남기고 스트림을 끝냅니다.
    """
    try:
        for chunk in template.generate(**context):
            yield chunk
    except Exception as e:
        logger.warning(f"WARNING: failed to render html template: {e!r}", exc_info=True)
