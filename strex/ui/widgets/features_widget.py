"""Widget for toggling the syntax features of the teaching engine."""

from typing import Set

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Checkbox, Label

from ...data_providers.profile_manager import RegexProfile

FEATURE_CATEGORIES = {
    "Anchors": [
        ("anchors", "Start/End (^, $)"),
    ],
    "Groups & Alternation": [
        ("groups", "Capturing Groups (...)"),
        ("alternation", "Alternation |"),
    ],
    "Quantifiers": [
        ("quantifiers", "Basic (*, +, ?)"),
        ("bounded_quantifiers", "Bounded {m,n}"),
        ("lazy_quantifiers", "Lazy (*?, +?, ??)"),
    ],
    "Classes": [
        ("classes", "Character Classes [...]"),
        ("escapes", "Escapes \\d, \\w, \\s"),
    ],
}


class FeaturesWidget(VerticalScroll):
    """Checkbox panel editing the current profile's enabled features."""

    class Changed(Message):
        """Posted when features are saved."""
        def __init__(self, enabled_features: Set[str]) -> None:
            self.enabled_features = enabled_features
            super().__init__()

    def __init__(self, current_features: Set[str], id: str | None = None):
        super().__init__(id=id)
        self.current_features = set(current_features)
        self.original_features = set(current_features)
        self.checkboxes: dict[str, Checkbox] = {}

    def compose(self) -> ComposeResult:
        for category, features in FEATURE_CATEGORIES.items():
            with Vertical(classes="feature-category-box"):
                yield Label(category, classes="feature-category-header")
                for feature_id, label in features:
                    is_checked = feature_id in self.current_features
                    checkbox = Checkbox(label, value=is_checked, id=f"feat_{feature_id}")
                    self.checkboxes[feature_id] = checkbox
                    yield checkbox

        with Horizontal(classes="feature-buttons"):
            yield Button("Save", id="save_features", variant="primary")
            yield Button("Cancel", id="cancel_features", variant="error")

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        """Track checkbox changes until Save or Cancel."""
        feature_id = event.checkbox.id.replace("feat_", "")
        if event.value:
            self.current_features.add(feature_id)
        else:
            self.current_features.discard(feature_id)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save_features":
            self.original_features = set(self.current_features)
            self.post_message(self.Changed(set(self.current_features)))
        elif event.button.id == "cancel_features":
            self.current_features = set(self.original_features)
            for feature_id, checkbox in self.checkboxes.items():
                checkbox.value = feature_id in self.original_features
        event.stop()

    def update_from_profile(self, profile: RegexProfile) -> None:
        """Update checkboxes to match the given profile's features."""
        self.current_features = set(profile.enabled_features)
        self.original_features = set(profile.enabled_features)
        for feature_id, checkbox in self.checkboxes.items():
            checkbox.value = feature_id in self.current_features
