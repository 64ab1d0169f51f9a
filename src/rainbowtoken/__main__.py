"""Main entry point for rainbowtoken."""

from rainbowtoken.cli.main import cli

if __name__ == "__main__":
    cli()
