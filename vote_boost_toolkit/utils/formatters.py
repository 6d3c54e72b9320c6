"""Shared formatting and file utilities for commands."""

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List

from rich.console import Console
from rich.table import Table

from vote_boost_toolkit.boost.models import AddressWeight

# Shared console instance
console = Console()


def format_address(address: str, length: int = 10) -> str:
    """
    Format an Ethereum address to show first and last characters.

    Args:
        address: Ethereum address
        length: Total visible characters (default: 10)

    Returns:
        Formatted address like "0x1234...5678"
    """
    if not address:
        return "N/A"
    if len(address) <= length:
        return address
    return f"{address[:6]}...{address[-4:]}"


def format_amount(value: Decimal, places: int = 4) -> str:
    """Format a token amount with a fixed number of decimals."""
    return f"{float(value):,.{places}f}"


def save_json_output(
    data: Dict[str, Any],
    filename: str,
    output_dir: str = "output",
    print_path: bool = True,
) -> str:
    """
    Save data to a JSON file with automatic directory creation.

    Args:
        data: Data to save
        filename: Output filename (can include subdirectories)
        output_dir: Base output directory (default: 'output')
        print_path: Whether to print the saved file path

    Returns:
        Full path to saved file
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    filepath = output_path / filename

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2)

    if print_path:
        console.print(f"[cyan]Data saved to:[/cyan] {filepath}")

    return str(filepath)


def generate_timestamped_filename(prefix: str, extension: str = "json") -> str:
    """
    Generate a filename with timestamp.

    Returns:
        Filename like "prefix_20240315_123456.json"
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}.{extension}"


def create_weights_table(weights: List[AddressWeight]) -> Table:
    """
    Create a Rich table with one row per address.

    Columns: address, working balance of every sample, final voting power.
    """
    table = Table(
        show_header=True,
        header_style="bold cyan",
        show_lines=False,
        pad_edge=False,
        box=None,
    )
    samples = max((len(w.working_balances) for w in weights), default=0)

    table.add_column("Address", width=14)
    for i in range(samples):
        table.add_column(f"Sample {i}", justify="right")
    table.add_column("Voting power", justify="right")
    table.add_column("WL", width=3, justify="center")

    for weight in weights:
        table.add_row(
            format_address(weight.address),
            *[format_amount(b) for b in weight.working_balances],
            f"[bold]{format_amount(weight.weight)}[/bold]",
            "[yellow]✓[/yellow]" if weight.whitelisted else "",
        )
    return table


def weights_to_dict(weights: List[AddressWeight]) -> Dict[str, Any]:
    """Serializable form of a weight breakdown."""
    return {
        w.address: {
            "working_balances": [str(b) for b in w.working_balances],
            "voting_power": float(w.weight),
            "whitelisted": w.whitelisted,
        }
        for w in weights
    }
