"""CLI entry point for Grocery Identity."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import TypeAdapter, ValidationError

from .config import ConfigManager
from .fuzzy_match import find_duplicate_name, find_fuzzy_matches
from .item_normalizer import is_valid_product_name, normalize_item_name
from .models import PriceObservation, PriceSource
from .output_formatter import OutputFormatter
from .price_resolver import get_price_label, resolve_price
from .size_normalizer import normalize_size_for_dedup, parse_size
from .title_case import normalize_display_name, to_grocery_title_case
from .variant_key import variant_key

app = typer.Typer(
    name="grocery-id",
    help="Resolve grocery item names, pack sizes and price labels",
    no_args_is_help=True,
)

# Global state for formatter and config (set by callback)
formatter: OutputFormatter = OutputFormatter()
config: ConfigManager | None = None

_observations_adapter = TypeAdapter(list[PriceObservation])


def get_config() -> ConfigManager:
    """Get or create ConfigManager instance."""
    global config
    if config is None:
        config = ConfigManager()
    return config


def _configure_logging(verbose: bool, level_name: str) -> None:
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("grocery_identity").setLevel(level)


@app.callback()
def main(
    json_output: Annotated[
        bool, typer.Option("--json", help="Output as JSON for programmatic use")
    ] = False,
    config_path: Annotated[
        Path | None, typer.Option("--config", help="Path to a TOML config file")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output")] = False,
) -> None:
    """Grocery Identity CLI - canonical names, variant keys and price labels."""
    global formatter, config

    config = ConfigManager(config_path=config_path)
    formatter = OutputFormatter(json_mode=json_output, currency=config.display.currency)
    _configure_logging(verbose, config.logging.level)


@app.command()
def validate(
    name: Annotated[str, typer.Argument(help="Product name to check")],
) -> None:
    """Check whether a name looks like a real product."""
    valid = is_valid_product_name(name, get_config().vocabulary)
    result = {"success": True, "data": {"name": name, "valid": valid}}
    if valid or formatter.json_mode:
        formatter.output(result, f"'{name}' is a valid product name")
    else:
        formatter.warning(f"'{name}' does not look like a product name")


@app.command()
def normalize(
    name: Annotated[str, typer.Argument(help="Item name to normalize")],
) -> None:
    """Show the comparison and display forms of an item name."""
    vocabulary = get_config().vocabulary
    result = {
        "success": True,
        "data": {
            "normalized": {
                "input": name,
                "comparison": normalize_item_name(name),
                "display": normalize_display_name(name, vocabulary),
                "valid": is_valid_product_name(name, vocabulary),
            }
        },
    }
    formatter.output(result)


@app.command()
def title(
    text: Annotated[str, typer.Argument(help="Text to title-case")],
) -> None:
    """Title-case an item name for display."""
    titled = to_grocery_title_case(text, get_config().vocabulary) or ""
    formatter.output({"success": True, "data": {"title": titled}}, titled)


@app.command()
def key(
    name: Annotated[str, typer.Argument(help="Item name")],
    size: Annotated[str | None, typer.Argument(help="Pack size, e.g. 180g")] = None,
) -> None:
    """Build the variant key for a name and pack size."""
    result = {
        "success": True,
        "data": {
            "variant": {
                "name": name,
                "size": size,
                "key": variant_key(name, size),
                "size_token": normalize_size_for_dedup(size),
            }
        },
    }
    formatter.output(result)


@app.command()
def match(
    query: Annotated[str, typer.Argument(help="Text typed or scanned")],
    candidates: Annotated[list[str], typer.Argument(help="Catalog names to match against")],
    min_similarity: Annotated[
        float | None, typer.Option("--min-similarity", "-m", help="Minimum similarity (0-100)")
    ] = None,
    max_results: Annotated[
        int | None, typer.Option("--max-results", "-n", help="Maximum matches to return")
    ] = None,
) -> None:
    """Rank catalog names by similarity to the query."""
    cfg = get_config()
    matches = find_fuzzy_matches(
        query,
        candidates,
        min_similarity=min_similarity if min_similarity is not None else cfg.matching.min_similarity,
        max_results=max_results if max_results is not None else cfg.matching.max_results,
    )
    result = {
        "success": True,
        "data": {"query": query, "matches": [m.model_dump(mode="json") for m in matches]},
    }
    formatter.output(result, f"Found {len(matches)} match(es) for '{query}'")


@app.command()
def duplicate(
    name: Annotated[str, typer.Argument(help="New item name")],
    existing: Annotated[list[str], typer.Argument(help="Names already on the list")],
) -> None:
    """Find an existing name that duplicates a new one."""
    found = find_duplicate_name(name, existing, get_config().matching.duplicate_similarity)
    formatter.output({"success": True, "data": {"name": name, "duplicate": found}})


@app.command()
def label(
    price: Annotated[float, typer.Argument(help="Price to label")],
    source: Annotated[
        PriceSource, typer.Option("--source", "-s", help="Where the price came from")
    ] = PriceSource.CROWDSOURCED,
    reports: Annotated[int, typer.Option("--reports", "-r", help="Number of reports")] = 0,
    store: Annotated[str | None, typer.Option("--store", help="Store the price is from")] = None,
) -> None:
    """Show a price with its confidence label."""
    price_label = get_price_label(price, source, reports, store)
    text = price_label.format(price, formatter.currency)
    result = {
        "success": True,
        "data": {"label": {**price_label.model_dump(mode="json"), "price": price, "text": text}},
    }
    formatter.output(result)


@app.command()
def resolve(
    observations_file: Annotated[
        Path, typer.Argument(help="JSON file with a list of price observations")
    ],
    store: Annotated[str | None, typer.Option("--store", help="Store being shopped at")] = None,
    ai_estimate: Annotated[
        float | None, typer.Option("--ai-estimate", help="Fallback AI price estimate")
    ] = None,
) -> None:
    """Pick one price out of several observations for a variant."""
    try:
        raw = json.loads(observations_file.read_text())
        observations = _observations_adapter.validate_python(raw)
    except OSError as e:
        formatter.error(f"Cannot read {observations_file}: {e}", error_code="FILE_ERROR")
        raise typer.Exit(code=1)
    except json.JSONDecodeError as e:
        formatter.error(f"Invalid JSON: {e}", error_code="INVALID_JSON")
        raise typer.Exit(code=1)
    except ValidationError as e:
        formatter.error(f"Invalid observations: {e}", error_code="VALIDATION_ERROR")
        raise typer.Exit(code=1)

    resolved = resolve_price(observations, store_name=store, ai_estimate=ai_estimate)
    text = None
    if resolved.price is not None:
        text = resolved.label.format(resolved.price, formatter.currency)
    result = {
        "success": True,
        "data": {"resolved": {**resolved.model_dump(mode="json"), "text": text}},
    }
    formatter.output(result)


@app.command()
def size(
    text: Annotated[str, typer.Argument(help="Pack size, e.g. '2 pints'")],
) -> None:
    """Parse a pack size into base units."""
    parsed = parse_size(text)
    result = {
        "success": True,
        "data": {
            "size": parsed.model_dump(mode="json") if parsed else None,
            "dedup_token": normalize_size_for_dedup(text),
        },
    }
    formatter.output(result)


if __name__ == "__main__":
    app()
