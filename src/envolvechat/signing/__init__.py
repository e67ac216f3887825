"""Command signing for the Envolve widget.

Public API:
    CommandSigner -- Builds signed login/logout commands for one site
    build_canonical_string, sign_command_string -- The wire protocol
    parse_signed_command, verify_signed_command -- Inspecting commands
"""

from envolvechat.signing.protocol import (
    build_canonical_string,
    decode_param_value,
    encode_param_value,
    parse_canonical_string,
    parse_signed_command,
    sign_command_string,
    verify_signed_command,
)
from envolvechat.signing.signer import CommandSigner

__all__ = [
    "CommandSigner",
    "build_canonical_string",
    "decode_param_value",
    "encode_param_value",
    "parse_canonical_string",
    "parse_signed_command",
    "sign_command_string",
    "verify_signed_command",
]
