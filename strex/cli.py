"""Command line interface for strex."""

import logging
import os
import sys
from typing import Any, Callable, List, Optional

import typer
from rich.console import Console
from typing_extensions import Annotated

from . import __version__, strings
from .engine import Pattern, PatternComplexityError, PatternError, compile as compile_pattern
from .logging_utils import setup_logging
from .presentation.formatter import RegexFormatter
from .ui.views.regex_view import StrexApp

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="Teaching regex engine and string helpers.")
console = Console()
err_console = Console(stderr=True)

PatternArg = Annotated[str, typer.Argument(help="Regex pattern")]
TextsArg = Annotated[
    Optional[List[str]],
    typer.Argument(help="Subjects to process (default: lines of --input or stdin)"),
]
InputOpt = Annotated[
    Optional[str],
    typer.Option("--input", "-i", help="Input file path"),
]


def is_stdin_a_tty() -> bool:
    """Check if stdin is a TTY."""
    return sys.stdin.isatty()


def read_input_file(input_file: str) -> str:
    try:
        with open(input_file, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File '{input_file}' not found.")
        raise typer.Exit(code=1)


def read_subjects(texts: Optional[List[str]], input_file: Optional[str]) -> List[str]:
    """Subjects come from arguments, then the input file, then piped stdin."""
    if texts:
        return list(texts)
    if input_file:
        return read_input_file(input_file).splitlines()
    if not is_stdin_a_tty():
        return sys.stdin.read().splitlines()
    err_console.print("[red]Error:[/red] No input provided. Pass subjects, pipe text or use --input file.")
    raise typer.Exit(code=1)


def compile_or_exit(pattern: str) -> Pattern:
    try:
        return compile_pattern(pattern)
    except PatternError as e:
        err_console.print(StrexApp.format_error(pattern, f"Regex Error: {e}"))
        raise typer.Exit(code=1)


def run_vectorized(title: str, func: Callable[..., Any], subjects: List[str], *args: Any) -> None:
    """Apply a vectorized helper to every subject and print a results table."""
    try:
        results = func(subjects, *args)
    except PatternComplexityError as e:
        err_console.print(f"[red]Complexity Error:[/red] {e}")
        raise typer.Exit(code=1)
    logger.debug("%s over %d subjects", title, len(subjects))
    console.print(RegexFormatter.create_results_table(title, zip(subjects, results)))


@app.callback()
def main(
    debug: Annotated[bool, typer.Option("--debug", help="Enable debug logging")] = False,
) -> None:
    """Teaching regex engine and string helpers."""
    setup_logging(__version__, debug=debug)


@app.command()
def tui(
    initial_pattern: Annotated[
        Optional[str],
        typer.Option("--pattern", "-p", help="Initial regex pattern"),
    ] = None,
    input_file: InputOpt = None,
    profile: Annotated[
        Optional[str],
        typer.Option("--profile", help="Engine profile id"),
    ] = None,
) -> None:
    """Run the interactive pattern tester."""
    if input_file:
        input_content = read_input_file(input_file)
    elif not is_stdin_a_tty():
        input_content = sys.stdin.read()

        # Reopen stdin as tty for Textual
        if sys.platform != "win32":
            tty = open("/dev/tty", "r")
            os.dup2(tty.fileno(), 0)
            sys.stdin = os.fdopen(0, "r")
    else:
        err_console.print("[red]Error:[/red] No input provided. Pipe text to strex or use --input file.")
        raise typer.Exit(code=1)

    StrexApp(input_content, initial_pattern=initial_pattern, profile_id=profile).run()


@app.command()
def detect(pattern: PatternArg, texts: TextsArg = None, input_file: InputOpt = None) -> None:
    """Does the pattern match each subject?"""
    run_vectorized("detect", strings.detect, read_subjects(texts, input_file), compile_or_exit(pattern))


@app.command()
def count(pattern: PatternArg, texts: TextsArg = None, input_file: InputOpt = None) -> None:
    """Count the matches in each subject."""
    run_vectorized("count", strings.count, read_subjects(texts, input_file), compile_or_exit(pattern))


@app.command()
def extract(
    pattern: PatternArg,
    texts: TextsArg = None,
    input_file: InputOpt = None,
    all_matches: Annotated[bool, typer.Option("--all", "-a", help="Extract every match")] = False,
) -> None:
    """Extract the first (or every) match from each subject."""
    func = strings.extract_all if all_matches else strings.extract
    run_vectorized(func.__name__, func, read_subjects(texts, input_file), compile_or_exit(pattern))


@app.command()
def locate(
    pattern: PatternArg,
    texts: TextsArg = None,
    input_file: InputOpt = None,
    all_matches: Annotated[bool, typer.Option("--all", "-a", help="Locate every match")] = False,
) -> None:
    """1-based start and end positions of the first (or every) match."""
    func = strings.locate_all if all_matches else strings.locate
    run_vectorized(func.__name__, func, read_subjects(texts, input_file), compile_or_exit(pattern))


@app.command()
def replace(
    pattern: PatternArg,
    replacement: Annotated[str, typer.Option("--with", "-w", help="Replacement text")],
    texts: TextsArg = None,
    input_file: InputOpt = None,
    all_matches: Annotated[bool, typer.Option("--all", "-a", help="Replace every match")] = False,
) -> None:
    """Replace the first (or every) match in each subject."""
    func = strings.replace_all if all_matches else strings.replace
    run_vectorized(func.__name__, func, read_subjects(texts, input_file), compile_or_exit(pattern), replacement)


@app.command()
def split(pattern: PatternArg, texts: TextsArg = None, input_file: InputOpt = None) -> None:
    """Split each subject on the pattern."""
    run_vectorized("split", strings.split, read_subjects(texts, input_file), compile_or_exit(pattern))


@app.command()
def explain(pattern: PatternArg) -> None:
    """Show the syntax tree of a pattern."""
    compiled = compile_or_exit(pattern)
    console.print(RegexFormatter.create_pattern_tree(compiled))


if __name__ == "__main__":
    app()
