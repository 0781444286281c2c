"""
Shared fixtures for the terraform_pinto tests.

The Pinto API is mocked with ``responses``; canned payloads live as JSON under
tests/fixtures/pinto/ so that real API responses can be dropped in later.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from terraform_pinto import PintoClient, PintoProvider

FIXTURE_DIR = Path(__file__).parent / "fixtures" / "pinto"

BASE_URL = "https://pinto.example.com"
PROVIDER = "digitalocean"
ENVIRONMENT = "prod1"


def _load(name: str) -> Any:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def load_fixture():
    return _load


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def provider() -> PintoProvider:
    """Provider with digitalocean/prod1 defaults and no authentication."""
    return PintoProvider(PintoClient(BASE_URL), provider=PROVIDER, environment=ENVIRONMENT)


@pytest.fixture
def bare_provider() -> PintoProvider:
    """Provider without any default scope."""
    return PintoProvider(PintoClient(BASE_URL))
