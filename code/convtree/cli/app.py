from __future__ import annotations

from collections.abc import Sequence

import typer
from typer.main import get_command

from convtree.build import cli_build
from convtree.density import cli_density

app = typer.Typer(add_completion=False, no_args_is_help=True, rich_markup_mode="rich")
app.command("build")(cli_build)
app.command("density")(cli_density)


def run(argv: Sequence[str] | None = None, *, prog_name: str | None = None) -> None:
    cmd = get_command(app)
    cmd.main(args=None if argv is None else list(argv), prog_name=prog_name)


def main(argv: list[str] | None = None) -> None:
    run(argv, prog_name="convtree")


if __name__ == "__main__":
    main()
