import typer

from trellis.common import bus, trellis_needle as needle
from trellis.needle import L
from .rendering import CliRenderer

from .commands.build import build_command, plan_command

app = typer.Typer(
    name="trellis",
    help=needle.get(L.cli.app.description),
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=needle.get(L.cli.option.verbose.help)
    ),
):
    # The CLI is the composition root. It decides *which* renderer to use.
    ctx.obj = {"verbose": verbose}
    bus.set_renderer(CliRenderer(verbose=verbose))


app.command(name="build", help=needle.get(L.cli.command.build.help))(build_command)
app.command(name="plan", help=needle.get(L.cli.command.plan.help))(plan_command)


if __name__ == "__main__":
    app()
