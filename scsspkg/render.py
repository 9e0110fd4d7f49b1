"""
Rendering functions for scsspkg output.

Core functions return data, this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import Dict, Any

console = Console()

DECISION_STYLES = {
    'proceed': 'green',
    'no-op': 'yellow',
    'behind': 'red',
}


def render_result_table(result: Dict[str, Any]) -> None:
    """
    Render a run result as a two-column table.

    Args:
        result: RunResult.to_dict() output
    """
    decision = result.get('decision', '')
    style = DECISION_STYLES.get(decision, 'white')

    table = Table(
        title="swagger-ui-scss",
        box=box.ROUNDED,
        show_header=False,
    )
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Upstream tag", result.get('tag') or '')
    table.add_row("Published version", result.get('published_version') or "[dim]not published[/dim]")
    table.add_row("Decision", f"[{style}]{decision}[/{style}]")
    if result.get('staged_path'):
        table.add_row("Staged package", result['staged_path'])

    console.print(table)
