import unittest

from strex.engine import PatternSyntaxError, compile
from strex.engine.nodes import (
    DIGIT,
    Alternation,
    AnchorEnd,
    AnchorStart,
    AnyChar,
    CharClass,
    Concatenation,
    Group,
    Literal,
    Repetition,
)


class TestCompilerTrees(unittest.TestCase):

    def test_literal_sequence(self):
        self.assertEqual(
            compile("ab").root,
            Concatenation((Literal("a"), Literal("b"))),
        )

    def test_single_literal_is_not_wrapped(self):
        self.assertEqual(compile("a").root, Literal("a"))

    def test_empty_pattern(self):
        self.assertEqual(compile("").root, Concatenation(()))

    def test_dot_and_escaped_dot(self):
        self.assertEqual(
            compile(r".\.").root,
            Concatenation((AnyChar(), Literal("."))),
        )

    def test_alternation_has_lowest_precedence(self):
        self.assertEqual(
            compile("ab|cd").root,
            Alternation(
                Concatenation((Literal("a"), Literal("b"))),
                Concatenation((Literal("c"), Literal("d"))),
            ),
        )

    def test_repetition_binds_to_preceding_atom(self):
        self.assertEqual(
            compile("ab*").root,
            Concatenation((Literal("a"), Repetition(Literal("b"), 0, None))),
        )

    def test_quantifier_forms(self):
        test_cases = [
            ("a*", 0, None),
            ("a+", 1, None),
            ("a?", 0, 1),
            ("a{3}", 3, 3),
            ("a{2,}", 2, None),
            ("a{2,5}", 2, 5),
        ]
        for pattern, minimum, maximum in test_cases:
            with self.subTest(pattern=pattern):
                node = compile(pattern).root
                self.assertEqual(node, Repetition(Literal("a"), minimum, maximum))

    def test_lazy_quantifier(self):
        self.assertEqual(compile("a+?").root, Repetition(Literal("a"), 1, None, greedy=False))

    def test_groups_numbered_by_opening_parenthesis(self):
        pattern = compile("((a)(b))")
        self.assertEqual(pattern.group_count, 3)
        self.assertEqual(
            pattern.root,
            Group(1, Concatenation((Group(2, Literal("a")), Group(3, Literal("b"))))),
        )

    def test_empty_group(self):
        self.assertEqual(compile("()").root, Group(1, Concatenation(())))

    def test_escape_class(self):
        self.assertEqual(compile(r"\d").root, DIGIT)

    def test_bracket_class_with_range_and_negation(self):
        self.assertEqual(compile("[a-c_]").root, CharClass((("a", "c"), "_")))
        self.assertEqual(compile("[^b]").root, CharClass(("b",), negated=True))

    def test_caret_inside_class_after_first_is_literal(self):
        self.assertEqual(compile("[a^]").root, CharClass(("a", "^")))

    def test_special_characters_inside_class(self):
        node = compile("[]$.-]").root
        self.assertEqual(node, CharClass(("]", "$", ".", "-")))

    def test_escape_class_inside_brackets(self):
        node = compile(r"[\d.]").root
        self.assertTrue(node.contains("7"))
        self.assertTrue(node.contains("."))
        self.assertFalse(node.contains("a"))

    def test_anchors(self):
        self.assertEqual(
            compile("^a$").root,
            Concatenation((AnchorStart(), Literal("a"), AnchorEnd())),
        )

    def test_anchors_in_each_alternative(self):
        node = compile("^a|b$").root
        self.assertIsInstance(node, Alternation)

    def test_closing_brace_and_bracket_are_literals(self):
        self.assertEqual(compile("}]").root, Concatenation((Literal("}"), Literal("]"))))

    def test_control_escapes(self):
        self.assertEqual(compile(r"\t").root, Literal("\t"))

    def test_braced_quantifiers_count_as_bounded(self):
        for pattern in ["a{0,}", "a{1,}", "a{0,1}"]:
            with self.subTest(pattern=pattern):
                self.assertEqual(compile(pattern).features, {"bounded_quantifiers"})
        for pattern in ["a*", "a+", "a?"]:
            with self.subTest(pattern=pattern):
                self.assertEqual(compile(pattern).features, {"quantifiers"})

    def test_features(self):
        self.assertEqual(compile("a").features, set())
        self.assertEqual(
            compile(r"^(a|[bc])\d{2}x*?$").features,
            {"anchors", "groups", "alternation", "classes", "escapes",
             "bounded_quantifiers", "quantifiers", "lazy_quantifiers"},
        )


class TestCompilerErrors(unittest.TestCase):

    def assert_syntax_error(self, pattern, pos, fragment):
        with self.assertRaises(PatternSyntaxError) as ctx:
            compile(pattern)
        self.assertEqual(ctx.exception.pos, pos)
        self.assertEqual(ctx.exception.pattern, pattern)
        self.assertIn(fragment, str(ctx.exception))
        self.assertIn(f"at position {pos}", str(ctx.exception))

    def test_unbalanced_parentheses(self):
        self.assert_syntax_error("(ab", 0, "missing )")
        self.assert_syntax_error("ab)", 2, "unbalanced parenthesis")

    def test_unterminated_class(self):
        self.assert_syntax_error("a[bc", 1, "unterminated character set")

    def test_dangling_repetition(self):
        self.assert_syntax_error("*a", 0, "nothing to repeat")
        self.assert_syntax_error("a|+", 2, "nothing to repeat")
        self.assert_syntax_error("a**", 2, "multiple repeat")

    def test_repeated_anchor(self):
        self.assert_syntax_error("^*", 1, "nothing to repeat")

    def test_invalid_class_range(self):
        self.assert_syntax_error("[z-a]", 1, "bad character range")

    def test_invalid_bounds(self):
        self.assert_syntax_error("a{3,1}", 1, "min repeat greater than max repeat")
        self.assert_syntax_error("a{,2}", 2, "expected a number")
        self.assert_syntax_error("a{2", 1, "missing '}'")

    def test_unknown_escape(self):
        self.assert_syntax_error(r"\q", 0, "bad escape")
        self.assert_syntax_error("a\\", 1, "bad escape (end of pattern)")

    def test_misplaced_anchors(self):
        self.assert_syntax_error("a^b", 1, "'^'")
        self.assert_syntax_error("a$b", 1, "'$'")

    def test_repetition_count_limit(self):
        self.assertEqual(compile("a{1000}").root, Repetition(Literal("a"), 1000, 1000))
        self.assert_syntax_error("a{1001}", 1, "repetition count exceeds 1000")
        self.assert_syntax_error("a{2,1001}", 1, "repetition count exceeds 1000")

    def test_nested_bounded_repetition_is_rejected_before_lowering(self):
        self.assert_syntax_error("((a{1000}){1000}){1000}", 10, "expands to 1002000 instructions")

    def test_long_pattern_expansion_is_rejected(self):
        self.assert_syntax_error("a{1000}" * 101, 0, "pattern expands to")

    def test_nesting_limit(self):
        self.assertEqual(compile("(" * 100 + "a" + ")" * 100).group_count, 100)
        self.assert_syntax_error("(" * 101 + "a" + ")" * 101, 100, "too deeply nested")
        self.assert_syntax_error("(" * 1000 + "a" + ")" * 1000, 100, "too deeply nested")

    def test_non_string_pattern(self):
        with self.assertRaises(TypeError):
            compile(None)


if __name__ == "__main__":
    unittest.main()
