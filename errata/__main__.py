from errata.cli.main import app

app(prog_name="errata")
