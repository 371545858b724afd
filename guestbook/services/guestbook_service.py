import logging
from typing import List

import httpx
from pydantic import ValidationError

from guestbook.core.exceptions import (
    BackendBadStatusError,
    BackendDecodeError,
    BackendUnavailableError,
    MessageRequiredError,
    NameRequiredError,
)
from guestbook.schemas.guestbook import GuestbookCreate, GuestbookEntry, decode_entries

logger = logging.getLogger(__name__)

async def list_messages(client: httpx.AsyncClient, base_url: str) -> List[GuestbookEntry]:
    """
    백엔드에서 방명록 목록을 조회합니다. (GET /messages)
    """
    logger.info("querying backend for entries")
    try:
        resp = await client.get(f"{base_url}/messages")
    except httpx.RequestError as e:
        raise BackendUnavailableError(repr(e))

    if resp.status_code != httpx.codes.OK:
        raise BackendBadStatusError(resp.status_code, resp.text)

    logger.info("parsing backend response into json")
    try:
        entries = decode_entries(resp.content)
    except ValidationError as e:
        logger.warning(f"WARNING: failed to decode json from the api: {e} input={resp.text!r}")
        raise BackendDecodeError(str(e))

    logger.info(f"retrieved {len(entries)} messages from the backend api")
    return entries

async def save_message(client: httpx.AsyncClient, base_url: str, author: str, message: str) -> None:
    """
    백엔드에 메시지 저장을 요청합니다. (POST /messages)
    작성자/내용이 비어 있으면 네트워크 호출 없이 실패합니다.
    date는 백엔드에서 부여하므로 보내지 않습니다.
    """
    if not author:
        raise NameRequiredError()
    if not message:
        raise MessageRequiredError()

    entry = GuestbookCreate(author=author, message=message)
    try:
        resp = await client.post(
            f"{base_url}/messages",
            content=entry.model_dump_json(),
            headers={"Content-Type": "application/json"},
        )
    except httpx.RequestError as e:
        raise BackendUnavailableError(repr(e), message_prefix="backend returned failure")

    if resp.status_code != httpx.codes.OK:
        raise BackendBadStatusError(
            resp.status_code,
            resp.text,
            message=f"unexpected status code from backend: {resp.status_code} {resp.reason_phrase}",
        )
    logger.info(f"saved message from {author!r}")
