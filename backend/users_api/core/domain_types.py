"""Domain Types — identity types that replace bare primitives.

Invariants:
    - UserId wraps a UUID — route and service signatures never take a bare str id
"""

from typing import NewType
from uuid import UUID


UserId = NewType("UserId", UUID)
