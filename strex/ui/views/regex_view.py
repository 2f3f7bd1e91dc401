"""Interactive TUI for trying patterns against a text."""

import asyncio
import math
import re
from typing import Optional, cast

import pyperclip
from rich.markup import escape
from rich.text import Text
from textual import on
from textual.app import App, ComposeResult, ReturnType
from textual.containers import Horizontal, ScrollableContainer, Vertical
from textual.widgets import Button, Footer, Header, Input, Select, Static

from ...data_providers.profile_manager import ProfileManager, RegexProfile
from ...data_providers.regex_provider import RegexProvider
from ...presentation.formatter import RegexFormatter
from ...utils.regex_help import STRING_HELP, help_sections
from ..widgets.features_widget import FeaturesWidget

ERROR_POSITION = re.compile(r"at position (\d+)")
TERMINAL_NOISE = (
    re.compile(r"(\x1b\[|\x9b)[0-9;<>?]*[a-zA-Z]"),
    re.compile(r"\^\[\[<[\d;]+[mM]"),
)


class StrexApp(App[ReturnType]):
    """Main TUI application for pattern testing."""

    CSS_PATH = "../../strex.tcss"

    BINDINGS = [
        ("f2", "toggle_view", "Toggle View"),
        ("n", "next_match", "Next Match"),
        ("N", "prev_match", "Prev Match"),
        ("i", "focus_input", "Input"),
        ("g", "focus_groups", "Groups"),
        ("c", "copy_pattern", "Copy Pattern"),
        ("enter", "focus_results", "Results"),
        ("j", "scroll_down", "Scroll Down"),
        ("k", "scroll_up", "Scroll Up"),
        ("escape", "quit", "Quit"),
    ]

    def __init__(
        self,
        input_content: str,
        initial_pattern: Optional[str] = None,
        profile_id: Optional[str] = None,
    ):
        """Initialize the TUI.

        Args:
            input_content: The text content to test patterns against
            initial_pattern: Initial pattern to display
            profile_id: Engine profile to start with (default profile if None)
        """
        super().__init__()
        self.input_content: str = input_content
        self.pattern = initial_pattern or ""

        self.profile_manager = ProfileManager()
        self.regex_provider = RegexProvider(input_content)
        self.formatter = RegexFormatter(input_content)

        self.profile_id = profile_id or self.profile_manager.get_default_profile_id()
        profile = self.profile_manager.get_profile(self.profile_id)
        if profile:
            self.regex_provider.set_profile(profile)

        # Match navigation tracking
        self.match_positions: list[int] = []
        self.current_match_index: int = -1
        self._last_matches: list = []

        # 0: Groups, 1: Help, 2: Features (builtin engine only)
        self.view_mode = 0

    def compose(self) -> ComposeResult:
        """Compose the UI layout."""
        yield Header()
        with Horizontal(id="input-row"):
            with Vertical(id="input-controls"):
                yield Input(value=self.pattern, placeholder="Enter regex pattern", id="pattern_input")
                with Horizontal(id="button-row"):
                    yield Button("Toggle View (F2)", id="toggle_view", variant="primary")
                    yield Button("Copy Pattern", id="copy_pattern")

            profiles = [(p.name, p.id) for p in self.profile_manager.list_profiles()]
            yield Select(
                profiles,
                value=self.profile_id,
                id="profile_select",
                allow_blank=False
            )

        with ScrollableContainer(id="result"):
            with ScrollableContainer(id="output-container", can_focus=True):
                yield Static("Result", classes="panel-title")
                yield Static(self._add_line_numbers(self.input_content), id="output", markup=True)
            with ScrollableContainer(id="groups-container", can_focus=True):
                yield Static("Pattern Breakdown", id="panel-header", classes="panel-title")
                yield Static(id="groups")
                yield Static(id="help", markup=True)

                profile = self.regex_provider.current_profile
                yield FeaturesWidget(profile.enabled_features if profile else set(), id="features_widget")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#help", Static).display = False
        self.query_one("#features_widget", FeaturesWidget).display = False

    def _add_line_numbers(self, content: str) -> str:
        """Add line numbers to content, escaping markup."""
        lines = content.split('\n')
        width = len(str(len(lines)))

        numbered_lines = []
        for i, line in enumerate(lines, 1):
            numbered_lines.append(f"[dim]{i:>{width}}[/dim] {escape(line)}")

        return '\n'.join(numbered_lines)

    def _add_line_numbers_with_highlighting(self, highlighted_text: Text) -> Text:
        """Add line numbers to already-highlighted Rich Text object."""
        lines_text = highlighted_text.split('\n', allow_blank=True)
        max_line_num = len(lines_text)
        width = len(str(max_line_num))

        result = Text()
        for i, line_text in enumerate(lines_text, 1):
            result.append(Text(f"{i:>{width}} ", style="dim"))
            result.append(line_text)
            if i < max_line_num:
                result.append("\n")
        return result

    # ========= Side panel ==========

    def action_toggle_view(self) -> None:
        """Cycle between groups, help and features."""
        self.view_mode = (self.view_mode + 1) % 3
        profile = self.regex_provider.current_profile
        if self.view_mode == 2 and not (profile and profile.is_builtin):
            # Only the teaching engine has toggleable features
            self.view_mode = 0

        groups_widget = self.query_one("#groups", Static)
        help_widget = self.query_one("#help", Static)
        features_widget = self.query_one("#features_widget", FeaturesWidget)
        header_widget = self.query_one("#panel-header", Static)

        groups_widget.display = self.view_mode == 0
        help_widget.display = self.view_mode == 1
        features_widget.display = self.view_mode == 2

        if self.view_mode == 0:
            header_widget.update("Pattern Breakdown")
        elif self.view_mode == 1:
            header_widget.update("Regex Help")
            help_widget.update(self.get_help_content())
        else:
            header_widget.update("Features Configuration")

    def get_help_content(self) -> str:
        """Generate help content for the current profile."""
        profile = self.regex_provider.current_profile
        if not profile:
            return "[dim]No profile selected[/dim]"

        lines = [f"[bold cyan]{escape(profile.name)}[/bold cyan]", f"[dim]{escape(profile.description)}[/dim]\n"]
        features = profile.enabled_features if profile.is_builtin else None
        for category, entries in help_sections(features):
            lines.append(f"[bold]{category}:[/bold]")
            for pattern, description in entries.items():
                lines.append(f"[cyan]{escape(pattern):<10}[/cyan] {description}")
            lines.append("")

        lines.append("[bold]String helpers:[/bold]")
        for signature, description in STRING_HELP.items():
            lines.append(f"[cyan]{escape(signature)}[/cyan]  {description}")

        lines.append("\n[dim]Press F2 to toggle view[/dim]")
        return "\n".join(lines)

    @on(FeaturesWidget.Changed)
    def on_features_widget_changed(self, message: FeaturesWidget.Changed) -> None:
        """Apply saved feature changes and re-run the pattern."""
        if self.regex_provider.current_profile:
            self.regex_provider.current_profile.enabled_features = message.enabled_features
            self.run_worker(self.update_regex(self.pattern), exclusive=True)

    # ========= Actions ==========

    def action_quit(self) -> None:
        """Quit the application."""
        self.exit()

    def action_copy_pattern(self) -> None:
        """Copy the current pattern to the clipboard."""
        if not self.pattern:
            self.notify("Nothing to copy", severity="warning")
            return
        try:
            pyperclip.copy(self.pattern)
        except pyperclip.PyperclipException as e:
            self.notify(f"Failed to copy: {e}", severity="error")
            return
        self.notify("Pattern copied to clipboard!", severity="information")

    def action_focus_results(self) -> None:
        self.query_one("#output-container", ScrollableContainer).focus()

    def action_focus_input(self) -> None:
        self.query_one("#pattern_input", Input).focus()

    def action_focus_groups(self) -> None:
        self.query_one("#groups-container", ScrollableContainer).focus()

    def action_next_match(self) -> None:
        """Navigate to the next match."""
        if not self.match_positions:
            return
        self.current_match_index = (self.current_match_index + 1) % len(self.match_positions)
        self._scroll_to_match(self.current_match_index)
        self._refresh_highlighting()

    def action_prev_match(self) -> None:
        """Navigate to the previous match."""
        if not self.match_positions:
            return
        self.current_match_index = (self.current_match_index - 1) % len(self.match_positions)
        self._scroll_to_match(self.current_match_index)
        self._refresh_highlighting()

    def action_scroll_down(self) -> None:
        self._active_container().scroll_down()

    def action_scroll_up(self) -> None:
        self._active_container().scroll_up()

    def _active_container(self) -> ScrollableContainer:
        if self.focused is not None and self.focused.id == "groups-container":
            return self.query_one("#groups-container", ScrollableContainer)
        return self.query_one("#output-container", ScrollableContainer)

    def _scroll_to_match(self, match_index: int) -> None:
        """Scroll so the given match sits in the middle of the viewport."""
        if match_index < 0 or match_index >= len(self.match_positions):
            return

        position = self.match_positions[match_index]
        container = self.query_one("#output-container", ScrollableContainer)
        container_width = container.size.width if container.size.width > 0 else 80

        lines = self.input_content.split('\n')
        gutter_width = len(str(len(lines))) + 1
        inner_width = max(1, container_width - 2)

        # Count wrapped visual lines above the match's logical line
        match_line = self.input_content[:position].count('\n')
        visual_lines_before = 0
        for line in lines[:match_line]:
            visual_lines_before += max(1, math.ceil((len(line) + gutter_width) / inner_width))

        target_y = max(0, visual_lines_before - (container.size.height // 2))
        container.scroll_to(y=target_y, animate=False)

    def _refresh_highlighting(self) -> None:
        """Re-render the output with the current match emphasized."""
        output_widget = self.query_one("#output", Static)
        output_result = self.formatter.create_highlighted_output(
            self._last_matches,
            self.current_match_index
        )
        output_widget.update(self._add_line_numbers_with_highlighting(output_result))

    # ========= Events ==========

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "toggle_view":
            self.action_toggle_view()
        elif event.button.id == "copy_pattern":
            self.action_copy_pattern()

    @on(Input.Changed)
    async def on_input_changed(self, message: Input.Changed) -> None:
        """Re-run the pattern whenever the input changes."""
        # Strip terminal escape sequences such as mouse reports
        clean_value = message.value
        for noise in TERMINAL_NOISE:
            clean_value = noise.sub('', clean_value)

        if clean_value != message.value:
            # Setting the value triggers another Changed event
            message.input.value = clean_value
            return

        self.pattern = clean_value
        self.run_worker(self.update_regex(clean_value), exclusive=True)

    @on(Input.Submitted)
    async def on_input_submitted(self, message: Input.Submitted) -> None:
        self.action_focus_results()

    @on(Select.Changed)
    async def on_select_changed(self, message: Select.Changed) -> None:
        """Switch engine profile."""
        if message.select.id != "profile_select":
            return
        profile = self.profile_manager.get_profile(cast(str, message.value))
        if profile:
            await self._switch_profile(profile)

    async def _switch_profile(self, profile: RegexProfile) -> None:
        self.profile_id = profile.id
        self.regex_provider.set_profile(profile)
        self.query_one("#features_widget", FeaturesWidget).update_from_profile(profile)

        if self.view_mode == 2 and not profile.is_builtin:
            # Features do not apply to the comparison engines
            self.action_toggle_view()
        elif self.view_mode == 1:
            self.query_one("#help", Static).update(self.get_help_content())

        self.run_worker(self.update_regex(self.pattern), exclusive=True)

    # ========= Matching ==========

    def _get_regex_result(self, str_pattern: str):
        """Run matching and formatting synchronously."""
        groups, error = self.regex_provider.get_matches(str_pattern, "finditer")
        if error:
            return None, error, None, [], []
        if not groups:
            return None, None, None, [], []

        groups_result = self.formatter.create_groups_output(groups)
        output_result = self.formatter.create_highlighted_output(groups, 0)
        match_positions = self.formatter.get_match_positions(groups)
        return groups_result, None, output_result, match_positions, groups

    def _reset_output(self) -> None:
        self.query_one("#output", Static).update(self._add_line_numbers(self.input_content))
        self.match_positions = []
        self.current_match_index = -1
        self._last_matches = []

    async def update_regex(self, str_pattern: str) -> None:
        """Update the output panels for the given pattern."""
        output_widget = self.query_one("#output", Static)
        groups_widget = self.query_one("#groups", Static)

        if not str_pattern:
            self._reset_output()
            groups_widget.update("[dim]Enter a regex pattern to see matches[/dim]")
            return

        # Matching can backtrack heavily, keep it off the event loop
        groups_result, error, output_result, match_positions, groups = await asyncio.to_thread(
            self._get_regex_result, str_pattern
        )

        if error:
            groups_widget.update(self.format_error(str_pattern, error))
            self._reset_output()
        elif output_result is not None:
            self.match_positions = match_positions
            self.current_match_index = 0 if match_positions else -1
            self._last_matches = groups

            if groups_result.row_count:
                groups_widget.update(groups_result)
            else:
                groups_widget.update(f"[dim]{len(groups)} matches, no capture groups in pattern[/dim]")
            output_widget.update(self._add_line_numbers_with_highlighting(output_result))

            if match_positions:
                self._scroll_to_match(0)
        else:
            groups_widget.update("[dim]No matches found[/dim]")
            self._reset_output()

    @staticmethod
    def format_error(str_pattern: str, error: str) -> str:
        """Render an error with a caret under the reported position."""
        error_msg = f"[bold red]{escape(error)}[/bold red]"

        pos_match = ERROR_POSITION.search(error)
        if not pos_match:
            return error_msg

        pos = int(pos_match.group(1))
        start = max(0, pos - 20)
        end = min(len(str_pattern), pos + 20)
        prefix = "..." if start > 0 else ""
        suffix = "..." if end < len(str_pattern) else ""

        pattern_line = f"{prefix}[cyan]{escape(str_pattern[start:end])}[/cyan]{suffix}"
        pointer_line = " " * (pos - start + len(prefix)) + "[bold red]^[/bold red]"
        return f"{error_msg}\n\n[dim]Error location:[/dim]\n{pattern_line}\n{pointer_line}"
