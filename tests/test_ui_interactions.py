"""Tests for UI interactions in the strex application."""

import unittest

from strex.ui.views.regex_view import StrexApp


class TestUIInteractions(unittest.IsolatedAsyncioTestCase):
    """Test UI interactions using Textual's pilot."""

    async def test_regex_input_and_match(self):
        """Test that typing a pattern finds matches."""
        content = "Test content with test pattern"
        app = StrexApp(content)

        async with app.run_test() as pilot:
            await pilot.click("#pattern_input")

            for char in "test":
                await pilot.press(char)

            # Wait for update
            await pilot.pause(1.0)

            self.assertEqual(app.pattern, "test")
            self.assertEqual(app.match_positions, [18])
            self.assertEqual(app.current_match_index, 0)

    async def test_navigation(self):
        """Test match navigation with n/N keys."""
        content = "test one\ntest two\ntest three"
        app = StrexApp(content)

        async with app.run_test() as pilot:
            await pilot.click("#pattern_input")
            for char in "test":
                await pilot.press(char)

            await pilot.pause(1.0)
            self.assertEqual(app.match_positions, [0, 9, 18])
            self.assertEqual(app.current_match_index, 0)

            # Leave the input so n/N reach the app bindings
            await pilot.press("enter")
            await pilot.pause(0.1)

            await pilot.press("n")
            await pilot.pause(0.2)
            self.assertEqual(app.current_match_index, 1)

            await pilot.press("N")
            await pilot.press("N")
            await pilot.pause(0.2)
            self.assertEqual(app.current_match_index, 2)

    async def test_error_clears_matches(self):
        content = "abc"
        app = StrexApp(content, initial_pattern="b")

        async with app.run_test() as pilot:
            await pilot.click("#pattern_input")
            await pilot.press("end")
            await pilot.press("(")
            await pilot.pause(1.0)

            self.assertEqual(app.pattern, "b(")
            self.assertEqual(app.match_positions, [])
            self.assertEqual(app.current_match_index, -1)

    async def test_view_toggle(self):
        """Test toggling between Groups, Help, and Features views."""
        content = "Test content"
        app = StrexApp(content)

        async with app.run_test() as pilot:
            self.assertEqual(app.view_mode, 0)

            groups = app.query_one("#groups")
            help_widget = app.query_one("#help")
            features = app.query_one("#features_widget")

            self.assertFalse(help_widget.display)
            self.assertFalse(features.display)

            # Toggle to Help (mode 1)
            await pilot.press("f2")
            await pilot.pause(0.2)
            self.assertEqual(app.view_mode, 1)
            self.assertFalse(groups.display)
            self.assertTrue(help_widget.display)
            self.assertFalse(features.display)

            # Toggle to Features (mode 2)
            await pilot.press("f2")
            await pilot.pause(0.2)
            self.assertEqual(app.view_mode, 2)
            self.assertFalse(groups.display)
            self.assertFalse(help_widget.display)
            self.assertTrue(features.display)

            # Toggle back to Groups (mode 0)
            await pilot.press("f2")
            await pilot.pause(0.2)
            self.assertEqual(app.view_mode, 0)
            self.assertTrue(groups.display)
            self.assertFalse(help_widget.display)
            self.assertFalse(features.display)

    async def test_feature_toggle(self):
        """Test that toggling features updates the profile."""
        content = "Test content"
        app = StrexApp(content)

        async with app.run_test() as pilot:
            # Navigate to Features view
            await pilot.press("f2")  # Help
            await pilot.press("f2")  # Features
            await pilot.pause(0.2)

            profile = app.regex_provider.current_profile
            initial_anchors = "anchors" in profile.enabled_features

            # Anchors sit at the top of the panel, so the checkbox is visible
            checkbox = app.query_one("#feat_anchors")
            initial_value = checkbox.value

            await pilot.click("#feat_anchors")
            await pilot.pause(0.2)

            self.assertNotEqual(checkbox.value, initial_value)

            # Scroll to bottom to ensure Save button is visible
            features_widget = app.query_one("#features_widget")
            features_widget.scroll_end(animate=False)
            await pilot.pause(0.2)

            await pilot.click("#save_features")
            await pilot.pause(0.2)

            updated_anchors = "anchors" in profile.enabled_features
            self.assertNotEqual(initial_anchors, updated_anchors)
            self.assertEqual(checkbox.value, updated_anchors)

    async def test_focus_actions(self):
        """Test focus navigation actions."""
        content = "Test content"
        app = StrexApp(content)

        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause(0.1)
            output_container = app.query_one("#output-container")
            self.assertTrue(output_container.has_focus)

            await pilot.press("g")
            await pilot.pause(0.1)
            groups_container = app.query_one("#groups-container")
            self.assertTrue(groups_container.has_focus)

            await pilot.press("i")
            await pilot.pause(0.1)
            input_widget = app.query_one("#pattern_input")
            self.assertTrue(input_widget.has_focus)

    async def test_scroll_actions(self):
        """Test scroll up/down actions don't crash."""
        content = "Line 1\n" * 100  # Long content
        app = StrexApp(content)

        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause(0.1)

            await pilot.press("j")
            await pilot.pause(0.1)

            await pilot.press("k")
            await pilot.pause(0.1)


if __name__ == "__main__":
    unittest.main()
