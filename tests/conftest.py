"""Shared test fixtures for Grocery Identity."""

import json
from datetime import datetime

import pytest

from grocery_identity.models import PriceObservation, PriceSource


@pytest.fixture
def pantry_names():
    """Candidate names as they come back from a user's pantry."""
    return ["milk", "bread", "eggs", "butter", "cheese", "yam", "jam"]


@pytest.fixture
def config_file(tmp_path):
    """Create a temporary config file."""
    config_path = tmp_path / "config.toml"
    config_path.write_text("""
[matching]
min_similarity = 60
max_results = 3
duplicate_similarity = 90

[vocabulary]
extra_abbreviations = ["M&S", "RSPCA"]
extra_lowercase_words = ["from"]
extra_denylist = ["sample product"]

[display]
currency = "$"

[logging]
level = "debug"
""")
    return config_path


@pytest.fixture
def observations():
    """Mixed price observations for one variant."""
    return [
        PriceObservation(price=1.55, source=PriceSource.AI_ESTIMATE),
        PriceObservation(
            price=1.45, source=PriceSource.CROWDSOURCED, report_count=4, store_name="Tesco"
        ),
        PriceObservation(
            price=1.30, source=PriceSource.CROWDSOURCED, report_count=12, store_name="Aldi"
        ),
    ]


@pytest.fixture
def observations_file(tmp_path):
    """Observations written as JSON, as a catalog export would provide them."""
    path = tmp_path / "observations.json"
    path.write_text(
        json.dumps(
            [
                {
                    "price": 1.25,
                    "source": "personal",
                    "report_count": 1,
                    "store_name": "Tesco",
                    "observed_at": datetime(2026, 1, 5, 10, 0).isoformat(),
                },
                {
                    "price": 1.40,
                    "source": "crowdsourced",
                    "report_count": 6,
                    "store_name": "Asda",
                },
            ]
        )
    )
    return path
