"""Shared test fixtures for the envolvechat test suite.

Provides a fixed clock and ready-made signers so signed output is
deterministic within a test.
"""

from __future__ import annotations

from datetime import date

import pytest

from envolvechat.domain.models import LoginOptions
from envolvechat.signing.signer import CommandSigner

API_KEY = "123-abcSECRETxyz"
CLIENT_IP = "10.0.0.7"
FIXED_DATE = date(2024, 1, 15)


@pytest.fixture
def fixed_clock():
    """A clock pinned to 15 January 2024."""
    return lambda: FIXED_DATE


@pytest.fixture
def signer(fixed_clock) -> CommandSigner:
    """A signer for site 123 bound to CLIENT_IP with a fixed clock."""
    return CommandSigner(api_key=API_KEY, client_ip=CLIENT_IP, clock=fixed_clock)


@pytest.fixture
def full_options() -> LoginOptions:
    return LoginOptions(
        last_name="Smith",
        picture_url="http://example.com/joe.png",
        is_admin=True,
    )
