"""Shared pytest fixtures for Structify tests."""
from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog

from structify.config import StructifyConfig, reset_config
from structify.llm.adapters.mock import MockLLMAdapter

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Every test starts with no global config and no API key in env."""
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    monkeypatch.delenv("OPENROUTER_MODEL", raising=False)
    reset_config()
    yield
    reset_config()
    structlog.reset_defaults()


@pytest.fixture
def mock_responses() -> dict[str, Any]:
    """Load mock LLM response fixtures."""
    with open(FIXTURES_DIR / "mock_llm_responses.json") as f:
        return json.load(f)  # type: ignore[no-any-return]


@pytest.fixture
def test_config() -> StructifyConfig:
    """Config with a fake key and defaults everywhere else."""
    return StructifyConfig(openrouter_api_key="test-key-not-real")


@pytest.fixture
def invoice_text() -> str:
    """Messy OCR-style invoice text."""
    return "\nInv No: 88921\nTotal Rp. 1.250.000\nDate 03/12/24\nPT Maju Jaya\n"


@pytest.fixture
def invoice_schema() -> dict[str, Any]:
    return {
        "invoice_number": "string",
        "invoice_date": "date",
        "total_amount": "number",
        "vendor_name": "string",
    }


@pytest.fixture
def receipt_schema() -> dict[str, Any]:
    return {
        "items": [{"name": "string", "price": "number", "taxable": "boolean"}],
        "total": "number",
        "date": "date",
    }


@pytest.fixture
def shipping_schema() -> dict[str, Any]:
    return {
        "tracking": "string",
        "sender": {
            "name": "string",
            "address": {"city": "string", "postal_code": "string"},
        },
        "recipient": {"name": "string"},
        "delivered": "boolean",
        "weight_kg": "number",
    }


@pytest.fixture
def mock_invoice_adapter(mock_responses: dict[str, Any]) -> MockLLMAdapter:
    """Mock adapter returning a messy invoice extraction."""
    return MockLLMAdapter(response_json=mock_responses["invoice_messy"])
