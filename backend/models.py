# models.py
# typed records flowing from the data source to the /api/days response

import datetime as dt
from typing import Literal, Optional, Union
from pydantic import BaseModel


class CandidateRecord(BaseModel):
    # raw values as the data source returns them; either may be missing
    date_start: Optional[str] = None
    title: Optional[str] = None


class SelectedEvent(BaseModel):
    date: dt.date
    title: str


class DaysResponse(BaseModel):
    days: int
    title: str


class TodayResponse(BaseModel):
    status: Literal["today"] = "today"
    title: str


ResultPayload = Union[DaysResponse, TodayResponse]


class ErrorResponse(BaseModel):
    error: str
