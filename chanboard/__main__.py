from chanboard.cli.commands import app

app()
