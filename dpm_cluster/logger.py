# dpm_cluster/logger.py
from __future__ import annotations
import contextlib
import datetime as _dt
import io
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "[%(levelname)s %(asctime)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _Tee(io.TextIOBase):
    """Write to multiple text streams (e.g., console + file)."""
    def __init__(self, *streams: io.TextIOBase):
        self._streams = streams

    def write(self, s: str) -> int:
        for st in self._streams:
            st.write(s)
            st.flush()
        return len(s)

    def flush(self) -> None:
        for st in self._streams:
            st.flush()


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def make_base_path(save_path: Optional[str]) -> str:
    """Return base path without extension. If empty/None, make dpm_<timestamp>."""
    if not save_path:
        return f"dpm_{_timestamp()}"
    base, _ext = os.path.splitext(save_path)
    return base


class RunLogger(contextlib.AbstractContextManager):
    """
    Context manager for one sampling run: mirrors everything printed to the
    console (stdout & stderr) into <base>.log and attaches a FileHandler so
    the sampler's `logging` records (per-iteration progress, captured
    samples) land in the same file.
    """
    def __init__(self, base_path: str, level: int = logging.INFO):
        self.base_path = base_path
        self.log_path = f"{base_path}.log"
        self.level = level
        self._log_file = None
        self._old_stdout = None
        self._old_stderr = None
        self._package_logger = None
        self._old_level = None
        self._file_handler = None

    def __enter__(self):
        # truncate, then open line-buffered in append mode: the FileHandler
        # below appends to the same file
        open(self.log_path, "w", encoding="utf-8").close()
        self._log_file = open(self.log_path, "a", buffering=1, encoding="utf-8")

        # tee stdout & stderr
        self._old_stdout, self._old_stderr = sys.stdout, sys.stderr
        tee = _Tee(self._old_stdout, self._log_file)
        sys.stdout = tee
        sys.stderr = tee

        # route the package's records into the same file
        self._package_logger = logging.getLogger("dpm_cluster")
        self._old_level = self._package_logger.level
        self._package_logger.setLevel(self.level)
        self._file_handler = logging.FileHandler(self.log_path, encoding="utf-8")
        self._file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        self._package_logger.addHandler(self._file_handler)

        return self

    def __exit__(self, exc_type, exc, tb):
        # remove logging handler
        if self._package_logger and self._file_handler:
            self._package_logger.removeHandler(self._file_handler)
            self._package_logger.setLevel(self._old_level)
            self._file_handler.close()
            self._file_handler = None

        # restore std streams
        if self._old_stdout is not None:
            sys.stdout = self._old_stdout
        if self._old_stderr is not None:
            sys.stderr = self._old_stderr

        # close file
        if self._log_file:
            self._log_file.close()
            self._log_file = None

        # don't suppress exceptions
        return False
