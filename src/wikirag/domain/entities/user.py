"""User entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class User:
    """Team member issuing searches."""

    id: UUID
    team_id: UUID
    name: str
