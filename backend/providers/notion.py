# providers/notion.py
# Notion database query (read-only). Pages -> CandidateRecord

import logging
import httpx
from datetime import date, timedelta
from typing import List, Optional
from config import Settings
from errors import UpstreamError
from models import CandidateRecord

NOTION_API = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"

HEADERS = {
    "User-Agent": "Countdown/0.1",
    "Accept": "application/json",
    "Notion-Version": NOTION_VERSION,
}

log = logging.getLogger("countdown.notion")


def _plain_text(prop: dict) -> Optional[str]:
    # title props are a list of rich text fragments
    parts = prop.get("title")
    if not isinstance(parts, list):
        return None
    return "".join((p or {}).get("plain_text") or "" for p in parts)


def page_to_record(page: dict, date_property: str, title_property: str) -> CandidateRecord:
    props = (page or {}).get("properties") or {}
    date_prop = props.get(date_property)
    title_prop = props.get(title_property)
    date_value = date_prop.get("date") if isinstance(date_prop, dict) else None
    start = date_value.get("start") if isinstance(date_value, dict) else None
    return CandidateRecord(
        date_start=start if isinstance(start, str) else None,
        title=_plain_text(title_prop) if isinstance(title_prop, dict) else None,
    )


class NotionSource:
    """Fetches candidate events from a single Notion database."""

    def __init__(
        self,
        token: str,
        database_id: str,
        date_property: str = "日付",
        title_property: str = "名前",
        page_size: int = 10,
        prefilter: bool = True,
        timeout_s: float = 10.0,
        max_pages: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.database_id = database_id
        self.date_property = date_property
        self.title_property = title_property
        self.page_size = page_size
        self.prefilter = prefilter
        self.timeout_s = timeout_s
        self.max_pages = max_pages
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "NotionSource":
        return cls(
            token=settings.notion_token,
            database_id=settings.notion_database_id,
            date_property=settings.date_property,
            title_property=settings.title_property,
            page_size=settings.page_size,
            prefilter=settings.prefilter,
            timeout_s=settings.timeout_s,
            max_pages=settings.max_pages,
            transport=transport,
        )

    def build_query(self, today: date) -> dict:
        body = {
            "page_size": self.page_size,
            "sorts": [{"property": self.date_property, "direction": "ascending"}],
        }
        if self.prefilter:
            # notion reads a bare date as UTC; a day of slack covers any local
            # "today". the selector drops what is actually past
            body["filter"] = {
                "property": self.date_property,
                "date": {"on_or_after": (today - timedelta(days=1)).isoformat()},
            }
        return body

    def _results(self, r: httpx.Response) -> dict:
        if r.status_code != 200:
            raise UpstreamError(f"notion status {r.status_code}: {r.text[:400]}")
        try:
            js = r.json()
        except ValueError as e:
            raise UpstreamError("notion returned invalid JSON") from e
        if not isinstance(js, dict) or not isinstance(js.get("results"), list):
            raise UpstreamError("notion response has no results list")
        return js

    async def fetch_candidates(self, today: date) -> List[CandidateRecord]:
        if not self.token or not self.database_id:
            raise UpstreamError("NOTION_TOKEN / NOTION_DATABASE_ID not configured")

        url = f"{NOTION_API}/databases/{self.database_id}/query"
        headers = {**HEADERS, "Authorization": f"Bearer {self.token}"}
        body = self.build_query(today)
        # unfiltered queries start at the oldest event, so keep paging
        pages = 1 if self.prefilter else self.max_pages
        out: List[CandidateRecord] = []
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, headers=headers, transport=self._transport) as client:
                for _ in range(pages):
                    js = self._results(await client.post(url, json=body))
                    out.extend(
                        page_to_record(p, self.date_property, self.title_property)
                        for p in js["results"] if isinstance(p, dict)
                    )
                    cursor = js.get("next_cursor")
                    if not js.get("has_more") or not cursor:
                        break
                    body = {**body, "start_cursor": cursor}
        except httpx.HTTPError as e:
            raise UpstreamError(f"notion request failed: {e}") from e

        log.info("notion: %d candidate(s)", len(out))
        return out
