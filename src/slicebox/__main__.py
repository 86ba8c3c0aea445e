"""slicebox CLI bootstrap."""

from slicebox.cli import app

if __name__ == "__main__":
    app()
