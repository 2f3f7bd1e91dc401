"""Regex help patterns and descriptions."""

# Each category lists the profile feature it depends on (None: always available).
REGEX_HELP = {
    "Basic Patterns": (None, {
        "a": "Literal character",
        ".": "Any character",
        "\\.": "Escaped metacharacter, matches '.' literally",
        "\\n \\t": "Newline, tab",
    }),
    "Escape Classes": ("escapes", {
        "\\d": "Digit [0-9]",
        "\\D": "Non-digit",
        "\\w": "Word character [a-zA-Z0-9_]",
        "\\W": "Non-word character",
        "\\s": "Whitespace",
        "\\S": "Non-whitespace",
    }),
    "Character Classes": ("classes", {
        "[abc]": "Any of a, b, or c",
        "[a-z]": "Any lowercase letter",
        "[^abc]": "Not a, b, or c",
    }),
    "Quantifiers": ("quantifiers", {
        "*": "0 or more",
        "+": "1 or more",
        "?": "0 or 1",
    }),
    "Bounded Quantifiers": ("bounded_quantifiers", {
        "{n}": "Exactly n times",
        "{n,}": "n or more times",
        "{n,m}": "Between n and m times",
    }),
    "Lazy Quantifiers": ("lazy_quantifiers", {
        "*? +? ??": "Fewest repetitions first",
        "{n,m}?": "Between n and m, fewest first",
    }),
    "Anchors": ("anchors", {
        "^": "Start of string",
        "$": "End of string",
    }),
    "Groups": ("groups", {
        "(...)": "Capturing group, numbered left to right",
    }),
    "Alternation": ("alternation", {
        "a|b": "Match a or b, left side first",
    }),
}

STRING_HELP = {
    "substring(s, start, end)": "Characters start..end, 1-based, negatives from the end",
    "to_upper / to_lower": "Change case",
    "trim(s)": "Strip spaces, tabs and line breaks",
    "concat(a, b, sep)": "Join two strings",
    "detect(s, p)": "Does p match anywhere in s?",
    "count(s, p)": "Number of matches",
    "extract(s, p)": "First match (or nothing)",
    "extract_all(s, p)": "Every match",
    "replace(s, p, r)": "Replace the first match",
    "replace_all(s, p, r)": "Replace every match",
    "split(s, p)": "Pieces between matches",
    "subset / which": "Filter a list of strings by p",
}


def help_sections(enabled_features=None):
    """Yield (category, entries) for every category the features allow.

    With ``enabled_features`` of None every category is included.
    """
    for category, (feature, entries) in REGEX_HELP.items():
        if feature is None or enabled_features is None or feature in enabled_features:
            yield category, entries
