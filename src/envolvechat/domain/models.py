"""Core domain models for envolvechat.

These models describe what flows through the signer: the validated
credential split out of an Envolve API key, the client the command is
bound to, the optional login attributes, and the signed result.
"""

from __future__ import annotations

import enum
import re

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from envolvechat.errors import InvalidCredentialError, MalformedCommandError

# Searched, not anchored: any key containing digits-hyphen-word chars passes.
API_KEY_PATTERN = re.compile(r"\d+-\w+")
DIGEST_PATTERN = re.compile(r"^[0-9a-f]{40}$")

# Sentinel client IP that tells the widget backend not to check the IP.
NO_IP_BINDING = "none"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class CommandName(str, enum.Enum):
    """Commands understood by the widget."""

    LOGIN = "login"
    LOGOUT = "logout"


# ---------------------------------------------------------------------------
# Credential / Context Models
# ---------------------------------------------------------------------------


class Credential(BaseModel):
    """An Envolve API key split into its public and private halves.

    Always build one with :meth:`from_api_key`, which validates the key
    and derives ``site_id`` and ``secret`` in one step.
    """

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr = Field(description="The full API key as issued by Envolve")
    site_id: str = Field(description="Public site identifier, the part before the first hyphen")
    secret: SecretStr = Field(description="Signing secret, everything after the first hyphen")

    @classmethod
    def from_api_key(cls, api_key: str) -> Credential:
        """Validate ``api_key`` and split it on its first hyphen.

        Raises:
            InvalidCredentialError: If the key does not contain
                ``<digits>-<word chars>``.
        """
        if not isinstance(api_key, str) or not API_KEY_PATTERN.search(api_key):
            length = len(api_key) if isinstance(api_key, str) else 0
            raise InvalidCredentialError("Invalid Envolve API key", api_key_length=length)
        site_id, secret = api_key.split("-", 1)
        return cls(api_key=SecretStr(api_key), site_id=site_id, secret=SecretStr(secret))


class ClientContext(BaseModel):
    """The client a command is bound to.

    ``client_ip`` is usually the request's REMOTE_ADDR. It is not
    validated; ``"none"`` disables IP checking on the widget side.
    """

    model_config = ConfigDict(frozen=True)

    client_ip: str = Field(default=NO_IP_BINDING, description="Client IP address or 'none'")


class LoginOptions(BaseModel):
    """Optional user attributes sent along with a login command."""

    model_config = ConfigDict(frozen=True)

    last_name: str | None = Field(default=None, description="The user's last name")
    picture_url: str | None = Field(default=None, description="URL of an avatar for the user")
    is_admin: bool = Field(
        default=False,
        description="Grants chat admin privileges (creating and closing chats)",
    )

    def to_params(self) -> dict[str, str]:
        """Wire parameters for the attributes that were actually supplied."""
        params: dict[str, str] = {}
        if self.last_name is not None:
            params["ln"] = self.last_name
        if self.picture_url is not None:
            params["pic"] = self.picture_url
        if self.is_admin:
            params["admin"] = "t"
        return params


# ---------------------------------------------------------------------------
# Command Models
# ---------------------------------------------------------------------------


class SignedCommand(str):
    """The signed command string, ``<digest>;<canonical>``.

    It is a plain ``str`` for every caller that embeds or compares it;
    ``digest`` and ``canonical`` expose the two halves.

    Raises:
        MalformedCommandError: If ``digest`` is not 40 lowercase hex chars.
    """

    def __new__(cls, digest: str, canonical: str) -> SignedCommand:
        if not DIGEST_PATTERN.match(digest):
            raise MalformedCommandError(
                "Signature is not a 40 character hex digest", command=f"{digest};{canonical}"
            )
        self = super().__new__(cls, f"{digest};{canonical}")
        self._digest = digest
        self._canonical = canonical
        return self

    def __getnewargs__(self) -> tuple[str, str]:
        return (self._digest, self._canonical)

    @property
    def digest(self) -> str:
        """Lowercase hex SHA-1 of the canonical string followed by the secret."""
        return self._digest

    @property
    def canonical(self) -> str:
        """The unsigned canonical command string."""
        return self._canonical


class CommandFields(BaseModel):
    """A canonical command string broken back into its parts."""

    model_config = ConfigDict(frozen=True)

    client_ip: str
    year: int
    month: int = Field(ge=0, le=11, description="Zero-based month, January is 0")
    day: int = Field(ge=1, le=31)
    version: str
    command: str
    params: dict[str, str] = Field(
        default_factory=dict, description="Decoded parameter values in wire order"
    )
