"""Pydantic models for forms API response bodies."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class FormURL(BaseModel):
    id: str = ""
    form_id: str = ""
    version: str = ""


class CreateResult(BaseModel):
    id: str = ""
    urls: List[FormURL] = []


class ApiErrorBody(BaseModel):
    error_type: str = Field(default="", alias="error")
    field: str = ""
    description: str = ""


__all__ = ["FormURL", "CreateResult", "ApiErrorBody"]
