from dataclasses import dataclass
from typing import Optional


@dataclass
class Location:
    """Physical location a camera can be installed in"""
    id: Optional[int]
    name: str
    is_active: bool = True
