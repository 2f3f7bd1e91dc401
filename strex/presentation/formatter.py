"""Formatter for regex match output."""

from typing import Any, Iterable, Tuple

from rich import box
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ..data_providers.regex_provider import GroupMatch
from ..engine import Pattern
from ..engine.nodes import Alternation, Node, alternatives, describe


class RegexFormatter:
    """Formats regex match results for display."""

    # Colors for capture groups (cycling) - using backgrounds for better visibility
    GROUP_STYLES = [
        "bold white on dark_cyan",
        "bold white on dark_green",
        "bold black on yellow",
        "bold white on dark_magenta",
        "bold white on dark_blue",
        "bold black on bright_cyan",
        "bold black on bright_green",
        "bold black on bright_yellow",
        "bold black on bright_magenta",
    ]

    def __init__(self, input_content: str):
        """Initialize the formatter with input content.

        Args:
            input_content: The original input text
        """
        self.input_content = input_content

    def create_highlighted_output(self, matches: list[list[GroupMatch]], current_match_index: int = -1) -> Text:
        """Create highlighted output with a background per match and group.

        Args:
            matches: List of matches, where each match is a list of GroupMatch objects
            current_match_index: Index of the match to emphasize (default: -1 for none)

        Returns:
            Text object with highlighting applied
        """
        text = Text(self.input_content)

        for match_idx, match_groups in enumerate(matches):
            for group in match_groups:
                if group.group_index == 0:
                    if match_idx == current_match_index:
                        text.stylize("bold reverse white", group.span[0], group.span[1])
                    else:
                        text.stylize("bold white on #444444", group.span[0], group.span[1])
                else:
                    style = self.GROUP_STYLES[(group.group_index - 1) % len(self.GROUP_STYLES)]
                    if match_idx == current_match_index:
                        style = f"reverse {style}"
                    text.stylize(style, group.span[0], group.span[1])

        return text

    def get_match_positions(self, matches: list[list[GroupMatch]]) -> list[int]:
        """Get the start offsets of all matches."""
        positions = []
        for match_groups in matches:
            if match_groups and match_groups[0].group_index == 0:
                positions.append(match_groups[0].span[0])
        return positions

    @staticmethod
    def create_groups_output(matches: list[list[GroupMatch]]) -> Table:
        """Create a table of every capture group of every match.

        Args:
            matches: List of matches, where each match is a list of GroupMatch objects

        Returns:
            Rich Table showing all groups
        """
        table = Table(
            box=box.ROUNDED,
            expand=True,
            show_header=True,
            show_lines=False,
            padding=(0, 1)
        )
        table.add_column("Match", style="cyan", no_wrap=True, width=6)
        table.add_column("Group", style="magenta", no_wrap=True, width=6)
        table.add_column("Name", style="green", width=12)
        table.add_column("Value", style="white")
        table.add_column("Span", style="yellow", justify="right", width=12)

        for i, match_groups in enumerate(matches, 1):
            for group in match_groups:
                if group.group_index == 0:
                    continue

                table.add_row(
                    str(i),
                    str(group.group_index),
                    Text(group.name or "-"),
                    Text(group.value),
                    f"{group.span[0]}-{group.span[1]}"
                )

        return table

    @staticmethod
    def create_results_table(title: str, rows: Iterable[Tuple[str, Any]]) -> Table:
        """Create a two-column table of subject -> result for the CLI."""
        table = Table(title=title, box=box.ROUNDED, show_header=True)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Subject", style="white")
        table.add_column("Result", style="cyan")

        for i, (subject, result) in enumerate(rows, 1):
            table.add_row(str(i), Text(subject), Text(format_value(result)))

        return table

    @staticmethod
    def create_pattern_tree(pattern: Pattern) -> Tree:
        """Render a compiled pattern's syntax tree."""
        tree = Tree(f"[bold cyan]{escape(pattern.source)}[/bold cyan] "
                    f"[dim]({pattern.group_count} groups)[/dim]")
        _add_branch(tree, pattern.root)
        return tree


def _add_branch(tree: Tree, node: Node) -> None:
    branch = tree.add(Text(describe(node)))
    children = alternatives(node) if isinstance(node, Alternation) else node.children()
    for child in children:
        _add_branch(branch, child)


def format_value(value: Any) -> str:
    """Render a utility result compactly for a table cell."""
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, tuple):
        return "(" + ", ".join(_format_item(item) for item in value) + ")"
    if isinstance(value, list):
        if not value:
            return "(none)"
        return ", ".join(_format_item(item) for item in value)
    return str(value)


def _format_item(item: Any) -> str:
    if isinstance(item, str):
        return repr(item)
    return format_value(item)
