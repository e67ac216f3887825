"""The Envolve command-string protocol.

A signed command looks like::

    <sha1 hex>;<client ip>;<year>;<zero-based month>;<day>;v=0.1,c=<command>[,<key>=<b64>==]*

Each parameter value is the base64 of its UTF-8 bytes followed by a
literal ``==``. That suffix is appended whether or not the base64 text
already ends in padding; the widget backend expects it, so it stays.

The signature is ``sha1_hex(canonical + secret)``. It is a plain keyed
hash, not an HMAC.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import re
from datetime import date
from typing import Mapping

from pydantic import ValidationError

from envolvechat.domain.models import DIGEST_PATTERN, CommandFields, SignedCommand
from envolvechat.errors import MalformedCommandError

PROTOCOL_VERSION = "0.1"
PARAM_SUFFIX = "=="

_HEADER_RE = re.compile(
    r"^(?P<client_ip>[^;]*);(?P<year>\d+);(?P<month>\d+);(?P<day>\d+);"
    r"v=(?P<version>[^,]*),c=(?P<command>[^,]*)(?P<params>(?:,.*)?)$",
    re.DOTALL,
)


def encode_param_value(value: str) -> str:
    """Encode one parameter value for the wire, including the ``==`` suffix."""
    encoded = base64.b64encode(value.encode("utf-8")).decode("ascii")
    return encoded.rstrip("\n") + PARAM_SUFFIX


def decode_param_value(encoded: str) -> str:
    """Recover the text of a parameter value produced by :func:`encode_param_value`.

    Raises:
        MalformedCommandError: If the value is missing the suffix or is
            not valid base64.
    """
    if not encoded.endswith(PARAM_SUFFIX):
        raise MalformedCommandError("Parameter value lacks the '==' suffix", command=encoded)
    # The suffix sits after already padded base64, so the body decodes as is.
    body = encoded[: -len(PARAM_SUFFIX)]
    try:
        return base64.b64decode(body, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise MalformedCommandError(f"Undecodable parameter value: {e}", command=encoded) from e


def build_canonical_string(
    client_ip: str,
    today: date,
    command: str,
    params: Mapping[str, str] | None = None,
) -> str:
    """Build the unsigned command string.

    Parameters are emitted in the mapping's iteration order. The widget
    does not depend on the order; callers pass them in insertion order.
    """
    parts = [
        f"{client_ip};{today.year};{today.month - 1};{today.day}"
        f";v={PROTOCOL_VERSION},c={command}"
    ]
    for key, value in (params or {}).items():
        parts.append(f",{key}={encode_param_value(value)}")
    return "".join(parts)


def compute_digest(canonical: str, secret: str) -> str:
    """Lowercase hex SHA-1 of ``canonical`` immediately followed by ``secret``."""
    return hashlib.sha1((canonical + secret).encode("utf-8")).hexdigest()


def sign_command_string(canonical: str, secret: str) -> SignedCommand:
    """Sign a canonical string with the site secret."""
    return SignedCommand(digest=compute_digest(canonical, secret), canonical=canonical)


def parse_signed_command(text: str) -> SignedCommand:
    """Split ``<digest>;<canonical>`` back into a :class:`SignedCommand`.

    Raises:
        MalformedCommandError: If there is no separator or the digest is
            not 40 lowercase hex characters.
    """
    digest, sep, canonical = text.partition(";")
    if not sep:
        raise MalformedCommandError("Signed command has no ';' separator", command=text)
    if not DIGEST_PATTERN.match(digest):
        raise MalformedCommandError("Signature is not a 40 character hex digest", command=text)
    return SignedCommand(digest=digest, canonical=canonical)


def parse_canonical_string(canonical: str) -> CommandFields:
    """Break a canonical string into header fields and decoded parameters.

    Raises:
        MalformedCommandError: If the header or any parameter is malformed.
    """
    match = _HEADER_RE.match(canonical)
    if match is None:
        raise MalformedCommandError("Unrecognised command string header", command=canonical)

    params: dict[str, str] = {}
    raw_params = match.group("params")
    if raw_params:
        for item in raw_params[1:].split(","):
            key, sep, value = item.partition("=")
            if not sep or not key:
                raise MalformedCommandError(f"Malformed parameter {item!r}", command=canonical)
            params[key] = decode_param_value(value)

    try:
        return CommandFields(
            client_ip=match.group("client_ip"),
            year=int(match.group("year")),
            month=int(match.group("month")),
            day=int(match.group("day")),
            version=match.group("version"),
            command=match.group("command"),
            params=params,
        )
    except ValidationError as e:
        raise MalformedCommandError(f"Out of range command header: {e}", command=canonical) from e


def verify_signed_command(text: str | SignedCommand, secret: str) -> bool:
    """Check that a signed command was produced with ``secret``.

    A string that cannot be parsed simply fails verification.
    """
    if isinstance(text, SignedCommand):
        signed = text
    else:
        try:
            signed = parse_signed_command(text)
        except MalformedCommandError:
            return False
    expected = compute_digest(signed.canonical, secret)
    return hmac.compare_digest(expected, signed.digest)
