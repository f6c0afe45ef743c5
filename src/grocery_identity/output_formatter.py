"""Output formatting for CLI and programmatic use."""

import json
from datetime import date, datetime
from enum import Enum
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for output."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, date):
            return obj.isoformat()
        return super().default(obj)


class OutputFormatter:
    """Formats output for both Rich terminal and JSON modes."""

    def __init__(self, json_mode: bool = False, currency: str = "£"):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
            currency: Currency symbol used when rendering prices
        """
        self.json_mode = json_mode
        self.currency = currency
        self.console = Console()

    def output(self, data: dict[str, Any], message: str = "") -> None:
        """Output data in appropriate format.

        Args:
            data: Data to output
            message: Optional message for Rich mode
        """
        if self.json_mode:
            self._output_json(data)
        else:
            self._output_rich(data, message)

    def _output_json(self, data: dict[str, Any]) -> None:
        """Output as JSON to stdout."""
        print(json.dumps(data, cls=JSONEncoder, indent=2))

    def _output_rich(self, data: dict[str, Any], message: str) -> None:
        """Output with Rich formatting."""
        if message:
            self.console.print(f"[green]✓[/green] {message}")

        payload = data.get("data", {})
        if "matches" in payload:
            self._render_matches(data)
        elif "variant" in payload:
            self._render_variant(data)
        elif "normalized" in payload:
            self._render_normalized(data)
        elif "resolved" in payload:
            self._render_resolved(data)
        elif "label" in payload:
            self._render_label(data)
        elif "size" in payload:
            self._render_size(data)
        elif "duplicate" in payload:
            self._render_duplicate(data)

    def _render_matches(self, data: dict) -> None:
        """Render ranked fuzzy matches."""
        matches = data["data"]["matches"]

        if not matches:
            self.console.print("[dim]No matches[/dim]")
            return

        table = Table(title="Matches", show_header=True, header_style="bold cyan")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Name", style="cyan")
        table.add_column("Similarity", style="magenta", justify="right")
        table.add_column("Exact", justify="center")

        for rank, match in enumerate(matches, start=1):
            table.add_row(
                str(rank),
                match["name"],
                f"{match['similarity']:.1f}%",
                "[green]✓[/green]" if match["is_exact"] else "",
            )

        self.console.print(table)

    def _render_normalized(self, data: dict) -> None:
        """Render comparison and display forms of a name."""
        info = data["data"]["normalized"]
        valid = "[green]yes[/green]" if info["valid"] else "[red]no[/red]"

        panel = Panel(
            f"""[bold]{info["input"]}[/bold]

Comparison form: {info["comparison"]}
Display form: {info["display"]}
Valid product name: {valid}""",
            title="Normalized Name",
            border_style="green",
        )
        self.console.print(panel)

    def _render_variant(self, data: dict) -> None:
        """Render a variant key."""
        variant = data["data"]["variant"]

        table = Table(show_header=False, box=None)
        table.add_column("Field", style="bold")
        table.add_column("Value", style="cyan")
        table.add_row("Name", variant["name"])
        table.add_row("Size", variant["size"] or "-")
        table.add_row("Variant key", variant["key"])
        table.add_row("Size token", variant["size_token"] or "-")
        self.console.print(table)

    def _render_label(self, data: dict) -> None:
        """Render a labelled price."""
        label = data["data"]["label"]
        self.console.print(f"[bold]{label['text']}[/bold]")

    def _render_resolved(self, data: dict) -> None:
        """Render the outcome of price resolution."""
        resolved = data["data"]["resolved"]

        if resolved["price"] is None:
            self.console.print("[dim]No price known[/dim]")
            return

        content = f"""[bold]{resolved["text"]}[/bold]

Source: {resolved["source"]}
Confidence: {resolved["confidence"]:.0%}
Reports: {resolved["report_count"]}"""
        if resolved.get("store_name"):
            content += f"\nStore: {resolved['store_name']}"

        self.console.print(Panel(content, title="Resolved Price", border_style="green"))

    def _render_size(self, data: dict) -> None:
        """Render a parsed pack size."""
        size = data["data"]["size"]

        if size is None:
            self.console.print("[yellow]Size not recognised[/yellow]")
            return

        table = Table(show_header=False, box=None)
        table.add_column("Field", style="bold")
        table.add_column("Value", style="cyan")
        table.add_row("Display", size["display"])
        table.add_row("Category", size["category"])
        table.add_row("Base amount", f"{size['normalized_value']:g}{size['unit']}")
        self.console.print(table)

    def _render_duplicate(self, data: dict) -> None:
        """Render a duplicate lookup."""
        duplicate = data["data"]["duplicate"]
        if duplicate:
            self.console.print(f"Duplicate of [bold cyan]{duplicate}[/bold cyan]")
        else:
            self.console.print("[dim]No duplicate found[/dim]")

    def error(self, message: str, error_code: str | None = None) -> None:
        """Output error message.

        Args:
            message: Error message
            error_code: Optional error code
        """
        if self.json_mode:
            output = {"success": False, "error": message}
            if error_code:
                output["error_code"] = error_code
            print(json.dumps(output))
        else:
            self.console.print(f"[red]✗ Error:[/red] {message}")

    def warning(self, message: str) -> None:
        """Output warning message.

        Args:
            message: Warning message
        """
        if self.json_mode:
            print(json.dumps({"warning": message}))
        else:
            self.console.print(f"[yellow]⚠[/yellow] {message}")
