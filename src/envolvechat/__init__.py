"""envolvechat -- Signed login/logout commands for the Envolve chat widget.

This package turns an Envolve API key plus a user's identity into the
signed, date-stamped command string the widget's JavaScript uses to log
that user in or out, and can render the HTML tags that bootstrap the
widget with it. Nothing here talks to the network.
"""

from envolvechat.domain.models import ClientContext, Credential, LoginOptions, SignedCommand
from envolvechat.embed import render_embed_tags
from envolvechat.errors import InvalidCredentialError, MalformedCommandError
from envolvechat.signing.signer import CommandSigner

__version__ = "0.1.0"

__all__ = [
    "ClientContext",
    "CommandSigner",
    "Credential",
    "InvalidCredentialError",
    "LoginOptions",
    "MalformedCommandError",
    "SignedCommand",
    "render_embed_tags",
]
