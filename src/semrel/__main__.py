from semrel.cli.main import app

app()
