"""Pydantic schemas for account operations."""

from pydantic import BaseModel


class AccountDeleted(BaseModel):
    message: str
