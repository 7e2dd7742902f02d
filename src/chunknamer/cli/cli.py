"""CLI entrypoint: Typer app definition and command registration"""

import typer

from chunknamer.cli.commands import clean_cmd, list_cmd, names_cmd


app = typer.Typer(name="chunknamer", no_args_is_help=True, help="Code chunk labeling for R Markdown books")

app.command(name="names")(names_cmd)
app.command(name="list")(list_cmd)
app.command(name="clean")(clean_cmd)
