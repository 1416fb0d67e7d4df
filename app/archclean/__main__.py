"""Allow running archclean as ``python -m archclean``."""

from archclean.cli.main import app

if __name__ == "__main__":
    app()
