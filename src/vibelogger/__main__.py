"""Allow ``python -m vibelogger``."""

from vibelogger.cli.main import app

if __name__ == "__main__":
    app()
