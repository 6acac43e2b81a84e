"""Entry point for `python -m vaultmatter`."""

from vaultmatter.interfaces.cli.app import app

if __name__ == "__main__":
    app()
