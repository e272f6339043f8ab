"""
Command line interface.

    symcse print "a*x^2 + b*x^2 + c"
    symcse print "a*x^2 + b" "c*x^2 + d" --name y
    symcse demo
"""

import logging
from typing import List, Optional

import typer

from .config import CseOptions
from .driver import transform
from .engine import SympyEngine
from .errors import CseError
from .model import CseResult

app = typer.Typer(add_completion=False, help="Common subexpression elimination to MATLAB and C code.")

DEMO_EQUATION = "a*x^3 + b*x^2 + c*x + d == 0"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def format_report(source: str, result: CseResult) -> str:
    """The text printed for one transform: input, MATLAB and C listings."""
    return "\n".join(
        [
            "--- Input ---",
            source,
            "--- MATLAB code with CSE ---",
            result.scripting_code,
            "",
            "--- C code with CSE ---",
            result.lowlevel_code,
        ]
    )


@app.command("print")
def print_code(
    exprs: List[str] = typer.Argument(..., help="Formulas, several are stacked into a column"),
    prefix: str = typer.Option("tmp", "--prefix", "-p", help="Prefix of temporaries"),
    ncse: int = typer.Option(10, "--ncse", "-n", help="Maximum extraction passes"),
    max_power: int = typer.Option(10, "--max-power", "-P", help="Highest power chained"),
    name: Optional[str] = typer.Option(None, "--name", help="Result variable name (default r)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every definition"),
):
    """Print MATLAB and C code for FORMULAS."""
    _configure_logging(verbose)
    try:
        options = CseOptions(
            name_prefix=prefix, max_cse_iterations=ncse, max_power=max_power, result_name=name
        )
        result = transform(exprs if len(exprs) > 1 else exprs[0], options)
    except CseError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(format_report("\n".join(exprs), result))


@app.command()
def demo(
    ncse: int = typer.Option(4, "--ncse", "-n", help="Maximum extraction passes"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every definition"),
):
    """Solve a general cubic and print its roots with CSE applied."""
    _configure_logging(verbose)
    engine = SympyEngine()
    try:
        roots = engine.solve(DEMO_EQUATION, "x")
        result = transform(roots, engine=engine, max_cse_iterations=ncse)
    except CseError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    source = "\n".join(engine.render_script(root) for root in roots)
    typer.echo(format_report(f"{DEMO_EQUATION}\n{source}", result))


def main():
    app(prog_name="symcse")


if __name__ == "__main__":
    main()
