"""fourleaf CLI entry point."""

from fourleaf.cli import app

if __name__ == "__main__":
    app()
