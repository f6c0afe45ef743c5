"""Tests for CLI commands."""

import json
import re

import pytest
from typer.testing import CliRunner

from grocery_identity.main import app

runner = CliRunner()

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")


@pytest.fixture
def no_config(tmp_path):
    """Path to a config file that does not exist, so defaults apply."""
    return str(tmp_path / "none.toml")


def invoke_json(config_path, *args):
    """Run a command in JSON mode and parse its output."""
    result = runner.invoke(app, ["--json", "--config", config_path, *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestValidateCommand:
    """Tests for validate command."""

    def test_valid_name(self, no_config):
        """Real product names are valid."""
        data = invoke_json(no_config, "validate", "Semi Skimmed Milk")
        assert data["data"] == {"name": "Semi Skimmed Milk", "valid": True}

    def test_invalid_name(self, no_config):
        """Placeholder text is rejected."""
        data = invoke_json(no_config, "validate", "N/A")
        assert data["data"]["valid"] is False

    def test_invalid_name_rich(self, no_config):
        """Rich mode prints a warning for invalid names."""
        result = runner.invoke(app, ["--config", no_config, "validate", "12345"])
        assert result.exit_code == 0
        assert "does not look like a product name" in ANSI_ESCAPE_RE.sub("", result.stdout)


class TestNormalizeCommand:
    """Tests for normalize command."""

    def test_normalize(self, no_config):
        """Both comparison and display forms are returned."""
        data = invoke_json(no_config, "normalize", "ORGANIC EGGS")
        normalized = data["data"]["normalized"]
        assert normalized["comparison"] == "egg"
        assert normalized["display"] == "Organic Eggs"
        assert normalized["valid"] is True


class TestTitleCommand:
    """Tests for title command."""

    def test_title(self, no_config):
        """Abbreviations and measurements survive title casing."""
        data = invoke_json(no_config, "title", "140g uht SEMI SKIMMED MILK")
        assert data["data"]["title"] == "140g UHT Semi Skimmed Milk"

    def test_title_rich(self, no_config):
        """Rich mode prints the titled text."""
        result = runner.invoke(app, ["--config", no_config, "title", "pg tips tea bags"])
        assert result.exit_code == 0
        assert "PG Tips Tea Bags" in ANSI_ESCAPE_RE.sub("", result.stdout)


class TestKeyCommand:
    """Tests for key command."""

    def test_key_with_size(self, no_config):
        """Variant key joins normalized name and compact size."""
        data = invoke_json(no_config, "key", "Roasted Cashews", "180 g")
        variant = data["data"]["variant"]
        assert variant["key"] == "roasted cashew|180g"
        assert variant["size_token"] == "180:weight"

    def test_key_without_size(self, no_config):
        """Size is optional."""
        data = invoke_json(no_config, "key", "The Bananas")
        assert data["data"]["variant"]["key"] == "banana|"
        assert data["data"]["variant"]["size"] is None


class TestMatchCommand:
    """Tests for match command."""

    def test_match(self, no_config):
        """Matches are ranked and deduplicated by normalized form."""
        data = invoke_json(no_config, "match", "milk", "milk", "Milk", "bread", "silk")
        matches = data["data"]["matches"]
        assert [m["name"] for m in matches] == ["milk", "silk"]
        assert matches[0]["is_exact"] is True
        assert matches[1]["similarity"] == 75

    def test_match_options(self, no_config):
        """Threshold and result limit can be given on the command line."""
        data = invoke_json(no_config, "match", "milk", "silk", "milk", "-m", "80")
        assert [m["name"] for m in data["data"]["matches"]] == ["milk"]

        data = invoke_json(no_config, "match", "milk", "milk", "silk", "--max-results", "1")
        assert len(data["data"]["matches"]) == 1

    def test_match_uses_config(self, tmp_path):
        """Defaults come from the config file."""
        config_path = tmp_path / "config.toml"
        config_path.write_text("[matching]\nmax_results = 1\n")

        data = invoke_json(str(config_path), "match", "milk", "milk", "silk")
        assert len(data["data"]["matches"]) == 1

    def test_match_rich(self, no_config):
        """Rich mode shows a results table."""
        result = runner.invoke(app, ["--config", no_config, "match", "milk", "silk", "bread"])
        assert result.exit_code == 0
        output = ANSI_ESCAPE_RE.sub("", result.stdout)
        assert "Found 1 match(es)" in output
        assert "silk" in output


class TestDuplicateCommand:
    """Tests for duplicate command."""

    def test_duplicate_found(self, no_config):
        """Plural forms are duplicates."""
        data = invoke_json(no_config, "duplicate", "Chicken", "Beef", "Chickens")
        assert data["data"]["duplicate"] == "Chickens"

    def test_no_duplicate(self, no_config):
        """Distinct items are not duplicates."""
        data = invoke_json(no_config, "duplicate", "Rice", "Rice Pudding")
        assert data["data"]["duplicate"] is None


class TestLabelCommand:
    """Tests for label command."""

    def test_ai_estimate(self, no_config):
        """AI estimates are approximate."""
        data = invoke_json(no_config, "label", "2.5", "--source", "ai_estimate")
        assert data["data"]["label"]["text"] == "~£2.50 est."

    def test_store_label(self, no_config):
        """A couple of reports name the store."""
        data = invoke_json(no_config, "label", "1.2", "-r", "2", "--store", "Tesco")
        label = data["data"]["label"]
        assert label["suffix"] == "at Tesco"
        assert label["text"] == "£1.20 at Tesco"

    def test_currency_from_config(self, tmp_path):
        """Configured currency symbol is used."""
        config_path = tmp_path / "config.toml"
        config_path.write_text('[display]\ncurrency = "$"\n')

        data = invoke_json(str(config_path), "label", "3", "-r", "20")
        assert data["data"]["label"]["text"] == "$3.00"


class TestResolveCommand:
    """Tests for resolve command."""

    def test_resolve(self, no_config, observations_file):
        """A personal receipt wins."""
        data = invoke_json(no_config, "resolve", str(observations_file))
        resolved = data["data"]["resolved"]
        assert resolved["price"] == 1.25
        assert resolved["source"] == "personal"
        assert resolved["confidence"] == 1.0
        assert resolved["text"] == "£1.25 at Tesco"

    def test_resolve_ai_fallback(self, no_config, tmp_path):
        """The AI estimate is used when nothing else is known."""
        path = tmp_path / "empty.json"
        path.write_text("[]")

        data = invoke_json(no_config, "resolve", str(path), "--ai-estimate", "2")
        assert data["data"]["resolved"]["text"] == "~£2.00 est."

    def test_resolve_nothing(self, no_config, tmp_path):
        """No observations and no estimate resolves to no price."""
        path = tmp_path / "empty.json"
        path.write_text("[]")

        data = invoke_json(no_config, "resolve", str(path))
        assert data["data"]["resolved"]["price"] is None
        assert data["data"]["resolved"]["text"] is None

    def test_missing_file(self, no_config, tmp_path):
        """Unreadable files fail with a file error."""
        result = runner.invoke(
            app, ["--json", "--config", no_config, "resolve", str(tmp_path / "missing.json")]
        )
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error_code"] == "FILE_ERROR"

    def test_invalid_json(self, no_config, tmp_path):
        """Malformed JSON fails cleanly."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        result = runner.invoke(app, ["--json", "--config", no_config, "resolve", str(path)])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error_code"] == "INVALID_JSON"

    def test_invalid_observation(self, no_config, tmp_path):
        """Observations that fail validation are reported."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"price": 1.0, "source": "rumour"}]))

        result = runner.invoke(app, ["--json", "--config", no_config, "resolve", str(path)])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error_code"] == "VALIDATION_ERROR"


class TestSizeCommand:
    """Tests for size command."""

    def test_size(self, no_config):
        """Sizes parse into base units."""
        data = invoke_json(no_config, "size", "2 pints")
        assert data["data"]["size"]["display"] == "2pt"
        assert data["data"]["size"]["category"] == "volume"
        assert data["data"]["dedup_token"] == "1136:volume"

    def test_unrecognised_size(self, no_config):
        """Unknown sizes still get a dedup token."""
        data = invoke_json(no_config, "size", "Large Tin")
        assert data["data"]["size"] is None
        assert data["data"]["dedup_token"] == "largetin"
