"""
In-memory representation of a stored blog post row.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class BlogPost:
    id: int
    title: str
    content: str
    creation_date: datetime
