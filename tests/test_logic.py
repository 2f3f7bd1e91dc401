import unittest

from strex.data_providers.profile_manager import ProfileManager
from strex.data_providers.regex_provider import GroupMatch, RegexProvider


class TestLogic(unittest.TestCase):

    def test_group_match_equals(self):
        test_cases = [
            (GroupMatch((1, 2), "ab", None, 1), GroupMatch((2, 3), "ab", None, 1), False),  # Different spans
            (GroupMatch((1, 2), "ab", None, 1), GroupMatch((1, 2), "ab", None, 1), True),  # Same content
            (GroupMatch((1, 2), "ab", None, 1), GroupMatch((1, 2), "ab", None, 2), False),  # Different group index
            (GroupMatch((1, 2), "ab", None, 1), object(), False),  # Different object types
        ]

        for group_one, group_two, expected_equals in test_cases:
            with self.subTest(group_one=group_one, group_two=group_two):
                self.assertEqual((group_one == group_two), expected_equals)

    def test_regex_provider_extraction(self):
        """The builtin engine reports the whole match and each captured group."""
        content = "This iS! aTe xt2 F0r T3sT!ng"
        provider = RegexProvider(content)

        matches, error = provider.get_matches(r".*(aTe).*", "match")
        self.assertIsNone(error)
        self.assertEqual(len(matches), 1)
        whole, group = matches[0]
        self.assertEqual(whole, GroupMatch(span=(0, len(content)), value=content, group_index=0))
        self.assertEqual(group, GroupMatch(span=(9, 12), value="aTe", group_index=1))

    def test_finditer_mode_returns_every_match(self):
        provider = RegexProvider("a1 b22 c333")
        matches, error = provider.get_matches(r"\d+")
        self.assertIsNone(error)
        self.assertEqual([m[0].value for m in matches], ["1", "22", "333"])

    def test_unset_groups_are_skipped(self):
        provider = RegexProvider("b")
        matches, _ = provider.get_matches("(a)|(b)")
        self.assertEqual([g.group_index for g in matches[0]], [0, 2])

    def test_empty_pattern_gives_nothing(self):
        self.assertEqual(RegexProvider("abc").get_matches(""), ([], None))

    def test_syntax_error_is_reported(self):
        matches, error = RegexProvider("abc").get_matches("(ab")
        self.assertEqual(matches, [])
        self.assertTrue(error.startswith("Regex Error:"))
        self.assertIn("at position 0", error)

    def test_complexity_error_is_reported(self):
        provider = RegexProvider("a" * 40)
        matches, error = provider.get_matches("(a|a)*c")
        self.assertEqual(matches, [])
        self.assertTrue(error.startswith("Complexity Error:"))

    def test_engines_agree_on_simple_pattern(self):
        manager = ProfileManager()
        content = "tel 555-1234"
        results = []
        for profile_id in ("strex_full", "python_re", "pcre_regex"):
            provider = RegexProvider(content)
            provider.set_profile(manager.get_profile(profile_id))
            matches, error = provider.get_matches(r"(\d+)-(\d+)")
            self.assertIsNone(error)
            results.append(matches)
        self.assertEqual(results[0], results[1])
        self.assertEqual(results[0], results[2])

    def test_library_engine_error_is_reported(self):
        provider = RegexProvider("abc")
        provider.set_profile(ProfileManager().get_profile("python_re"))
        matches, error = provider.get_matches("(ab")
        self.assertEqual(matches, [])
        self.assertTrue(error.startswith("Regex Error:"))

    def test_group_match_creation(self):
        """Test GroupMatch dataclass functionality"""
        group1 = GroupMatch(span=(0, 5), value="hello", name="test", group_index=0)
        group2 = GroupMatch(span=(0, 5), value="hello", name="test", group_index=0)

        # Same content should be equal
        self.assertEqual(group1, group2)

        # Different spans should not be equal
        group3 = GroupMatch(span=(0, 6), value="hello", name="test", group_index=0)
        self.assertNotEqual(group1, group3)


if __name__ == "__main__":
    unittest.main()
