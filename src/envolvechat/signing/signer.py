"""The command signer: turns a user identity into a signed widget command.

Example usage::

    signer = CommandSigner(api_key="111-xxx", client_ip="127.0.0.1")
    html = signer.render_embed_tags("Joe")
    command = signer.build_login_command("Joe")

The signer holds no mutable state. To sign for another user, pass that
user's ``client_ip`` to the call or use :meth:`CommandSigner.with_client_ip`.
"""

from __future__ import annotations

import copy
import logging
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Callable, Mapping

from envolvechat.domain.models import (
    NO_IP_BINDING,
    ClientContext,
    CommandName,
    Credential,
    LoginOptions,
    SignedCommand,
)
from envolvechat.embed import render_embed_tags
from envolvechat.signing.protocol import build_canonical_string, sign_command_string

if TYPE_CHECKING:
    from envolvechat.config.settings import Settings

logger = logging.getLogger(__name__)

Clock = Callable[[], date]


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class CommandSigner:
    """Signs login and logout commands for one Envolve site.

    Args:
        api_key: The API key provided by Envolve, ``<site id>-<secret>``.
        client_ip: Default client IP bound into commands. ``"none"``
                   disables IP checking.
        clock: Returns the calendar date stamped into commands.
               Defaults to the host's local date.

    Raises:
        InvalidCredentialError: If ``api_key`` is malformed.
    """

    def __init__(
        self,
        api_key: str,
        client_ip: str = NO_IP_BINDING,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._credential = Credential.from_api_key(api_key)
        self._context = ClientContext(client_ip=client_ip)
        self._clock: Clock = clock or date.today

    @classmethod
    def from_settings(cls, settings: Settings) -> CommandSigner:
        """Build a signer from loaded configuration."""
        clock = utc_today if settings.signing.clock == "utc" else date.today
        return cls(
            api_key=settings.api_key.get_secret_value(),
            client_ip=settings.client_ip,
            clock=clock,
        )

    @property
    def credential(self) -> Credential:
        return self._credential

    @property
    def site_id(self) -> str:
        return self._credential.site_id

    @property
    def client_ip(self) -> str:
        return self._context.client_ip

    def with_client_ip(self, client_ip: str) -> CommandSigner:
        """Return a signer for the same site bound to another client IP."""
        clone = copy.copy(self)
        clone._context = ClientContext(client_ip=client_ip)
        return clone

    # -- Commands -----------------------------------------------------------

    def build_login_command(
        self,
        first_name: str,
        options: LoginOptions | None = None,
        *,
        client_ip: str | None = None,
    ) -> SignedCommand:
        """Build a signed command that logs the user into the chat.

        Run it in the page with ``env_executeCommand(command)`` or inline
        it through :meth:`render_embed_tags`.

        Args:
            first_name: The user's first name or alias. Must not be empty.
            options: Last name, picture URL and admin flag, each sent only
                     when supplied.
            client_ip: Overrides the signer's client IP for this call.

        Raises:
            ValueError: If ``first_name`` is empty.
        """
        if not first_name:
            raise ValueError("first_name is required for a login command; use logout instead")
        params = {"fn": first_name}
        if options is not None:
            params.update(options.to_params())
        return self.build_command(CommandName.LOGIN, params, client_ip=client_ip)

    def build_logout_command(self, *, client_ip: str | None = None) -> SignedCommand:
        """Build a signed command that logs the user out of the chat."""
        return self.build_command(CommandName.LOGOUT, client_ip=client_ip)

    def build_command(
        self,
        command: CommandName | str,
        params: Mapping[str, str] | None = None,
        *,
        client_ip: str | None = None,
    ) -> SignedCommand:
        """Build and sign an arbitrary command for today's date."""
        name = command.value if isinstance(command, CommandName) else command
        ip = self._context.client_ip if client_ip is None else client_ip
        canonical = build_canonical_string(ip, self._clock(), name, params)
        logger.debug(
            "Signed %s command for site %s (params: %s)",
            name, self.site_id, ", ".join(params or {}) or "none",
        )
        return sign_command_string(canonical, self._credential.secret.get_secret_value())

    def render_embed_tags(
        self,
        first_name: str | None = None,
        options: LoginOptions | None = None,
        *,
        client_ip: str | None = None,
        escape: bool = False,
    ) -> str:
        """HTML that starts the widget, logged in when ``first_name`` is given."""
        if first_name:
            command = self.build_login_command(first_name, options, client_ip=client_ip)
        else:
            command = self.build_logout_command(client_ip=client_ip)
        return render_embed_tags(self.site_id, command, escape=escape)

    def __repr__(self) -> str:
        return f"CommandSigner(site_id={self.site_id!r}, client_ip={self.client_ip!r})"
