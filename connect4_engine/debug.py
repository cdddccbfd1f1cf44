"""
debug.py - Logging for the Connect Four engine

Every module logs through the shared `debug` manager with a component tag
("board", "placement", "win", "search", "game", "env", "cli"). The level and
the component filter are set once, usually from the command line, and the
manager also keeps named timers for the benchmark command.
"""

import logging
import sys
import time
from enum import Enum
from typing import Dict, Iterable, Optional, Set


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# TRACE has no stdlib level, so it goes out as DEBUG with a prefix
LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 10,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,
}

LOGGER_NAME = "connect4_engine"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Level- and component-filtered logging plus named performance timers."""

    def __init__(self):
        self._level = DebugLevel.WARNING
        self._components: Set[str] = set()  # empty means every component
        self._timers: Dict[str, float] = {}
        self._logger = logging.getLogger(LOGGER_NAME)
        self._logger.setLevel(LEVEL_MAP[self._level])

        # Reloading this module must not stack console handlers
        if not any(getattr(h, "_connect4_console", False) for h in self._logger.handlers):
            console = logging.StreamHandler(sys.stdout)
            console._connect4_console = True
            console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
            self._logger.addHandler(console)

    @property
    def level(self) -> DebugLevel:
        return self._level

    def configure(self, level: Optional[DebugLevel] = None,
                  log_file: Optional[str] = None,
                  components: Optional[Iterable[str]] = None):
        """
        Change the logging settings. Arguments left as None keep their value.

        Args:
            level: Most verbose level that is emitted
            log_file: Also append log records to this path; an empty string
                removes the file output
            components: Component tags to emit; empty to emit every component
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if log_file is not None:
            for handler in self._logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    self._logger.removeHandler(handler)
                    handler.close()
            if log_file:
                file_handler = logging.FileHandler(log_file)
                file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)

        if components is not None:
            self._components = set(components)

    def _enabled_for(self, level: DebugLevel, component: Optional[str]) -> bool:
        if self._level == DebugLevel.NONE or level.value > self._level.value:
            return False
        return not (component and self._components and component not in self._components)

    def log(self, level: DebugLevel, message: str, component: str = None):
        if not self._enabled_for(level, component):
            return
        if component:
            message = f"[{component}] {message}"
        if level == DebugLevel.TRACE:
            message = f"TRACE: {message}"
        self._logger.log(LEVEL_MAP[level], message)

    def error(self, message: str, component: str = None):
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: str = None):
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: str = None):
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: str = None):
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: str = None):
        """Per-node detail from the search and placement hot paths."""
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, name: str):
        self._timers[name] = time.perf_counter()

    def end_timer(self, name: str, component: str = None) -> Optional[float]:
        """
        Stop a timer started with start_timer and log the elapsed time.

        Returns:
            Elapsed seconds, or None if no timer with that name is running
        """
        started = self._timers.pop(name, None)
        if started is None:
            self.warning(f"Timer '{name}' not started", "debug")
            return None

        elapsed = time.perf_counter() - started
        self.debug(f"Performance [{name}]: {elapsed:.6f} seconds", component)
        return elapsed

    def set_from_string(self, name: str):
        """Set the level from a command-line name such as "info" or "trace"."""
        try:
            level = DebugLevel[name.upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {name}")
            return
        self.configure(level=level)
        self.info(f"Debug level set to {level.name}")


debug = DebugManager()
