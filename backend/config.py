# config.py
# env driven settings (.env supported). Read once per app, passed around explicitly

import os
from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from dotenv import load_dotenv

FRONTEND_LOCAL = "http://localhost:3000"


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() not in ["0", "false", "no"]


def _number(name: str, default: str, kind=int):
    raw = os.getenv(name, default)
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"{name} must be a {kind.__name__}, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    notion_token: str = ""
    notion_database_id: str = ""
    date_property: str = "日付"
    title_property: str = "名前"
    page_size: int = 10
    prefilter: bool = True
    max_pages: int = 10
    timeout_s: float = 10.0
    timezone: str = "UTC"
    untitled: str = "タイトルなし"
    frontend_prod: str = ""

    @property
    def tz(self) -> tzinfo:
        return ZoneInfo(self.timezone)

    @property
    def cors_origins(self) -> list[str]:
        origins = [FRONTEND_LOCAL]
        if self.frontend_prod:
            origins.append(self.frontend_prod)
        return origins


def load_settings() -> Settings:
    """Build Settings from the environment. Bad numbers or zones raise ValueError here, not per request."""
    load_dotenv()
    timezone = os.getenv("COUNTDOWN_TZ", "UTC")
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"COUNTDOWN_TZ is not a known IANA timezone: {timezone!r}") from None

    return Settings(
        notion_token=os.getenv("NOTION_TOKEN", ""),
        notion_database_id=os.getenv("NOTION_DATABASE_ID", ""),
        date_property=os.getenv("NOTION_DATE_PROPERTY", "日付"),
        title_property=os.getenv("NOTION_TITLE_PROPERTY", "名前"),
        # notion caps page_size at 100
        page_size=max(1, min(_number("NOTION_PAGE_SIZE", "10"), 100)),
        prefilter=_flag("NOTION_PREFILTER", "1"),
        max_pages=max(1, _number("NOTION_MAX_PAGES", "10")),
        timeout_s=_number("NOTION_TIMEOUT_S", "10", float),
        timezone=timezone,
        untitled=os.getenv("UNTITLED_PLACEHOLDER", "タイトルなし"),
        frontend_prod=os.getenv("FRONTEND_PROD", ""),
    )
