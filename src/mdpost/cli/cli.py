"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdpost.cli.commands import check_cmd, export_cmd, fmt_cmd, outline_cmd, show_cmd


app = typer.Typer(name="mdpost", no_args_is_help=True, help="Parse, validate and export blog post content records")

app.command(name="check")(check_cmd)
app.command(name="show")(show_cmd)
app.command(name="outline")(outline_cmd)
app.command(name="export")(export_cmd)
app.command(name="fmt")(fmt_cmd)
