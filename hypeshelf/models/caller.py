"""The per-request identity passed explicitly into every gateway operation."""

from __future__ import annotations
from typing import Optional

from pydantic import BaseModel


class Identity(BaseModel):
    """An identity vouched for by the external identity provider."""

    subject: str
    name: Optional[str] = None


class CallerContext(BaseModel):
    """Who is calling, or nobody.

    `identity` is None for unauthenticated callers.
    """

    identity: Optional[Identity] = None

    @classmethod
    def anonymous(cls) -> CallerContext:
        return cls(identity=None)

    @classmethod
    def for_subject(cls, subject: str, name: Optional[str] = None) -> CallerContext:
        return cls(identity=Identity(subject=subject, name=name))

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None
