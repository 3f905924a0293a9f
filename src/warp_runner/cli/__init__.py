"""
CLI layer for warp-runner.

Terminal transport only: argument parsing and coloured output. All launch
logic lives in ``warp_runner.execution``.

Entry point::

    warp-runner --help
"""

from warp_runner.cli.app import app

__all__ = ["app"]
