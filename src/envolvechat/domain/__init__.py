"""Domain models for envolvechat.

All models use Pydantic v2 and are frozen once built.
"""

from envolvechat.domain.models import (
    NO_IP_BINDING,
    ClientContext,
    CommandFields,
    CommandName,
    Credential,
    LoginOptions,
    SignedCommand,
)

__all__ = [
    "NO_IP_BINDING",
    "ClientContext",
    "CommandFields",
    "CommandName",
    "Credential",
    "LoginOptions",
    "SignedCommand",
]
