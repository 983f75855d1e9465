from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """Pure domain model for User entity - only what camera views need"""
    id: Optional[int]
    first_name: str
    last_name: str
    email: Optional[str] = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
