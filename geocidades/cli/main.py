"""Main CLI application using Cyclopts."""

import cyclopts

from geocidades.cli.commands import db, server

app = cyclopts.App(
    name="geocidades",
    help="GeoCidades - municipal survey administration",
)

app.command(server.app, name="server")
app.command(db.app, name="db")
