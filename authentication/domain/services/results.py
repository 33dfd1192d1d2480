"""
Result objects for the authentication service layer.

Dataclasses give views a typed outcome instead of tuples or loose dicts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LoginResult:
    """Result of a login attempt."""

    success: bool
    user: Optional[Any] = None  # CustomUser instance
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None
    message: Optional[str] = None


@dataclass
class RegisterResult:
    """Result of a registration attempt."""

    success: bool
    user: Optional[Any] = None  # CustomUser instance
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None
    errors: Optional[Dict[str, str]] = None  # Field-level errors
    conflict: bool = False
    message: Optional[str] = None


@dataclass
class Result:
    """Generic result for simple operations."""

    success: bool
    message: str
    data: Optional[Dict[str, Any]] = field(default_factory=dict)
    error: Optional[str] = None
    status: str = "ok"  # ok | not_found | forbidden | invalid | unauthorized
