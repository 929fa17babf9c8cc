"""CLI entrypoint: Typer app definition and command registration"""

import typer

from lunor.cli.commands import (
    ast_cmd,
    check_cmd,
    compile_cmd,
    components_cmd,
    main_callback,
    symbols_cmd,
)


app = typer.Typer(name="lunor", no_args_is_help=True, help="Lunor view-markup to React compiler")

app.callback()(main_callback)
app.command(name="compile")(compile_cmd)
app.command(name="check")(check_cmd)
app.command(name="ast")(ast_cmd)
app.command(name="symbols")(symbols_cmd)
app.command(name="components")(components_cmd)
