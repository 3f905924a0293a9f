"""``python -m warp_runner`` entry point."""

from warp_runner.cli.app import app

if __name__ == "__main__":
    app()
