from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from guestbook.core.exceptions import StartupConfigError

class Settings(BaseSettings):
    # 1. 백엔드 API 주소 (host:port). guestbook-frontend.deployment.yaml에서 주입
    GUESTBOOK_API_ADDR: str

    # 2. 리슨 포트. guestbook-frontend.deployment.yaml에서 주입
    PORT: int

    # 3. 서버 설정
    HOST: str = "0.0.0.0"
    LOG_LEVEL: str = "INFO"

    @field_validator("GUESTBOOK_API_ADDR", "PORT", mode="before")
    @classmethod
    def _not_empty(cls, v):
        # 빈 문자열은 미설정과 동일하게 취급
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("environment variable not specified")
        return v

    @property
    def BACKEND_BASE_URL(self) -> str:
        return f"http://{self.GUESTBOOK_API_ADDR}"

    model_config = SettingsConfigDict(
        # 운영체제 환경변수를 1순위로 읽고, 없으면 .env 파일을 찾습니다. (로컬 실행용)
        env_file = ".env",
        extra = "ignore",
        frozen = True
    )


def load_settings(**overrides) -> Settings:
    """
    환경변수에서 설정을 읽어옵니다.
    필수 값이 없거나 잘못된 경우 StartupConfigError를 발생시킵니다.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        err = e.errors()[0]
        field = err["loc"][0] if err["loc"] else "settings"
        if err["type"] in ("missing", "value_error"):
            raise StartupConfigError(f"{field} environment variable not specified") from e
        raise StartupConfigError(f"{field} environment variable is invalid: {err['msg']}") from e
