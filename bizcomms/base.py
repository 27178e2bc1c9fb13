"""
BaseScript — abstract base class for bizcomms command-line scripts.

Provides:
  - Rotating file logger + stdout handler, scoped to <BC_LOGS_DIR>/<script>.log
  - Abstract run() method that must return a JSON-serialisable dict
  - main() classmethod: parses --debug flag, runs the script, prints JSON to stdout
  - Automatic elapsed-time logging

Subclass usage:
    class MyScript(BaseScript):
        def run(self) -> dict:
            self.logger.info("doing work...")
            return {"result": "done"}

    if __name__ == "__main__":
        MyScript.main()
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import time
from abc import ABC, abstractmethod
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

DEFAULT_LOGS_DIR = "~/.bizcomms/logs"


def logs_dir() -> Path:
    return Path(os.environ.get("BC_LOGS_DIR", DEFAULT_LOGS_DIR)).expanduser()


class BaseScript(ABC):
    """Abstract base for all bizcomms scripts."""

    def __init__(self, log_level: int = logging.INFO) -> None:
        # Derive script name from the concrete class name (lowercased)
        self.script_name: str = type(self).__name__.lower()
        self.logger: logging.Logger = self._setup_logger(log_level)

    # ── Logging ───────────────────────────────────────────────────────────────

    def _setup_logger(self, log_level: int) -> logging.Logger:
        """
        Configure the bizcomms logger hierarchy and this script's logger to write to:
          - <logs dir>/<script_name>.log  (rotating, max 2 MB × 5 backups)
          - stdout
        """
        directory = logs_dir()
        directory.mkdir(parents=True, exist_ok=True)

        logger = logging.getLogger(self.script_name)
        logger.setLevel(log_level)

        # Avoid adding duplicate handlers if the script is instantiated twice
        if logger.handlers:
            return logger

        fmt = logging.Formatter(
            "%(asctime)s [%(levelname)-8s] %(name)s — %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        file_handler = RotatingFileHandler(
            directory / f"{self.script_name}.log",
            maxBytes=2_000_000,   # 2 MB per file
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(fmt)

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(fmt)

        # Library modules log under "bizcomms.*" and "google_auth"
        for name in (self.script_name, "bizcomms", "google_auth"):
            target = logging.getLogger(name)
            target.setLevel(log_level)
            if not target.handlers:
                target.addHandler(file_handler)
                target.addHandler(stream_handler)
        return logger

    # ── Abstract interface ────────────────────────────────────────────────────

    @abstractmethod
    def run(self) -> dict[str, Any]:
        """
        Execute the script.

        Must return a JSON-serialisable dict; it is printed to stdout.
        datetime objects are serialised via default=str.
        """

    # ── CLI entrypoint ────────────────────────────────────────────────────────

    @classmethod
    def build_parser(cls) -> argparse.ArgumentParser:
        doc = (cls.__doc__ or cls.__name__).strip().splitlines()[0]
        parser = argparse.ArgumentParser(description=doc)
        parser.add_argument(
            "--debug", action="store_true", help="Enable DEBUG-level logging"
        )
        return parser

    @classmethod
    def from_args(cls, args: argparse.Namespace, log_level: int) -> BaseScript:
        return cls(log_level=log_level)

    @classmethod
    def main(cls, argv: Optional[list[str]] = None) -> None:
        """
        Standard CLI entrypoint. Wire up as:
            if __name__ == "__main__":
                MyScript.main()

        Parses arguments, instantiates the script, calls run(), prints JSON.
        """
        args = cls.build_parser().parse_args(argv)

        log_level = logging.DEBUG if args.debug else logging.INFO
        script = cls.from_args(args, log_level)

        t0 = time.monotonic()
        try:
            result = script.run()
            elapsed = time.monotonic() - t0
            script.logger.info("Completed in %.2fs", elapsed)
            print(json.dumps(result, indent=2, default=str))
        except Exception:
            elapsed = time.monotonic() - t0
            script.logger.exception("Script failed after %.2fs", elapsed)
            raise
