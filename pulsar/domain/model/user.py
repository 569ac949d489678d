"""User aggregate root.

Users sign in with an email or a mobile number and vote on submissions.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pulsar.domain.model.common import DomainModel
from pulsar.domain.value import UserId


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    name: str = ""
    email: Optional[str] = None
    mobile: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
