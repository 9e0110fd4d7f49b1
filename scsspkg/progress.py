"""
Progress reporting utilities for scsspkg.

Provides consistent status reporting on stderr that respects piping and
redirection, keeping stdout clean for command output.
"""

import sys
import os
from typing import List, Optional, Tuple
from contextlib import contextmanager
import time
import signal
import threading
from enum import Enum


class LogLevel(Enum):
    """Log levels for progress messages."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    SUCCESS = 4


class ProgressReporter:
    """Handles progress reporting to stderr while keeping stdout clean for data."""

    def __init__(self, enabled: Optional[bool] = None, force_tty: bool = False,
                 use_unicode: Optional[bool] = None, use_colors: Optional[bool] = None,
                 stream=None):
        """
        Initialize progress reporter.

        Args:
            enabled: Explicitly enable/disable progress. None = auto-detect
            force_tty: Treat the stream as TTY even if it's not (for testing)
            use_unicode: Use Unicode characters for spinners and symbols
            use_colors: Use ANSI colors in output
            stream: Output stream (default: sys.stderr)
        """
        self._stream = stream
        self.is_tty = force_tty or self.stream.isatty()

        if enabled is None:
            # Auto-detect: show progress if stderr is a terminal
            self.enabled = self.is_tty
        else:
            self.enabled = enabled

        if use_unicode is None:
            encoding = getattr(self.stream, 'encoding', None) or ''
            self.use_unicode = encoding.lower() in ['utf-8', 'utf8']
        else:
            self.use_unicode = use_unicode

        if use_colors is None:
            self.use_colors = self.is_tty and os.environ.get('NO_COLOR') is None
        else:
            self.use_colors = use_colors

        # Setup signal handler for graceful interruption
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGINT, self._handle_interrupt)

        self.spinners = {
            'dots': ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏'],
            'simple': ['-', '\\', '|', '/']
        }
        self.spinner_style = 'dots' if self.use_unicode else 'simple'

        if self.use_unicode:
            self.symbols = {
                LogLevel.SUCCESS: '✓',
                LogLevel.WARNING: '⚠',
                LogLevel.ERROR: '✗',
                LogLevel.INFO: 'ℹ',
            }
        else:
            self.symbols = {
                LogLevel.SUCCESS: '+',
                LogLevel.WARNING: '!',
                LogLevel.ERROR: 'x',
                LogLevel.INFO: 'i',
            }

        self.colors = {
            'reset': '\033[0m',
            'dim': '\033[2m',
            'red': '\033[31m',
            'green': '\033[32m',
            'yellow': '\033[33m',
            'blue': '\033[34m',
            'cyan': '\033[36m',
        }

    @property
    def stream(self):
        return self._stream if self._stream is not None else sys.stderr

    def _handle_interrupt(self, signum, frame):
        """Handle Ctrl+C gracefully."""
        if self.enabled:
            print("\n\nInterrupted by user", file=self.stream, flush=True)
        sys.exit(130)  # Standard exit code for SIGINT

    def _colorize(self, text: str, color: str) -> str:
        """Add color to text if colors are enabled."""
        if self.use_colors and color in self.colors:
            return f"{self.colors[color]}{text}{self.colors['reset']}"
        return text

    def _write(self, line: str):
        print(line, file=self.stream, flush=True)

    def __call__(self, message: str, force: bool = False, level: LogLevel = LogLevel.INFO):
        """
        Output progress message to stderr if enabled.

        Args:
            message: Progress message to display
            force: Force output even if disabled
            level: Log level for the message
        """
        if not (force or self.enabled):
            return
        if level == LogLevel.ERROR:
            message = self._colorize(f"{self.symbols[LogLevel.ERROR]} {message}", 'red')
        elif level == LogLevel.WARNING:
            message = self._colorize(f"{self.symbols[LogLevel.WARNING]} {message}", 'yellow')
        elif level == LogLevel.SUCCESS:
            message = self._colorize(f"{self.symbols[LogLevel.SUCCESS]} {message}", 'green')
        elif level == LogLevel.DEBUG:
            message = self._colorize(f"  {message}", 'dim')
        self._write(message)

    def error(self, message: str):
        """Always output errors to stderr."""
        self._write(self._colorize(f"ERROR: {message}", 'red'))

    def warning(self, message: str):
        """Output warnings to stderr if enabled."""
        if self.enabled:
            self._write(self._colorize(f"WARNING: {message}", 'yellow'))

    @contextmanager
    def task(self, title: str):
        """
        Context manager wrapping one pipeline stage in a status line.

        The yielded Task can be updated and finished explicitly. If the block
        raises, the task fails with the exception message; if it ends without
        an outcome, the task succeeds.

        Example:
            with progress.task("Cloning the upstream repository") as status:
                status.update("Deleting old clone")
                ...
        """
        task = Task(self, title)
        task.start()
        try:
            yield task
        except BaseException as e:
            if task.active:
                task.fail(str(e) or None)
                if isinstance(e, Exception):
                    e.reported = True
            raise
        if task.active:
            task.succeed()


class Task:
    """
    Status handle for one pipeline stage.

    Mirrors a terminal spinner: a title, a mutable suffix message and one
    final outcome (succeed, warn, info or fail).
    """

    def __init__(self, reporter: ProgressReporter, title: str):
        self.reporter = reporter
        self.title = title
        self.suffix = ""
        self.outcome: Optional[LogLevel] = None
        self.messages: List[Tuple[LogLevel, str]] = []
        self.active = False
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def text(self) -> str:
        if self.suffix:
            return f"{self.title} - {self.suffix}"
        return self.title

    def start(self) -> 'Task':
        """Start the spinner (TTY) or print the title (non-TTY)."""
        self.active = True
        if self.reporter.enabled and self.reporter.is_tty:
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        elif self.reporter.enabled:
            self.reporter(f"{self.title}...")
        return self

    def update(self, message: str):
        """Replace the suffix text shown after the title."""
        with self._lock:
            self.suffix = message
        self.messages.append((LogLevel.DEBUG, message))
        if self.reporter.enabled and not self.reporter.is_tty:
            self.reporter(message, level=LogLevel.DEBUG)

    def succeed(self, message: Optional[str] = None):
        self._finish(LogLevel.SUCCESS, message, 'green')

    def warn(self, message: str):
        self._finish(LogLevel.WARNING, message, 'yellow')

    def info(self, message: str):
        self._finish(LogLevel.INFO, message, 'blue')

    def fail(self, message: Optional[str] = None):
        self._finish(LogLevel.ERROR, message, 'red')

    def _finish(self, level: LogLevel, message: Optional[str], color: str):
        self._stop()
        self.outcome = level
        text = message or self.text
        self.messages.append((level, text))
        # Failures are always shown, like ProgressReporter.error
        if self.reporter.enabled or level == LogLevel.ERROR:
            symbol = self.reporter.symbols[level]
            self.reporter._write(self.reporter._colorize(f"{symbol} {text}", color))

    def _stop(self):
        self.active = False
        if self._thread:
            self._thread.join()
            self._thread = None
            # Clear the spinner line
            print('\r\033[K', end='', file=self.reporter.stream, flush=True)

    def _spin(self):
        """Spin animation loop."""
        frames = self.reporter.spinners[self.reporter.spinner_style]
        while self.active:
            for char in frames:
                if not self.active:
                    break
                with self._lock:
                    text = self.text
                frame = self.reporter._colorize(char, 'cyan') + f" {text}"
                print(f"\r\033[K{frame}", end='', file=self.reporter.stream, flush=True)
                time.sleep(0.08)


# Global progress reporter instance
_progress = None


def get_progress(enabled: Optional[bool] = None) -> ProgressReporter:
    """
    Get the global progress reporter.

    Args:
        enabled: Override auto-detection of progress display

    Returns:
        ProgressReporter instance
    """
    global _progress
    if _progress is None or enabled is not None:
        _progress = ProgressReporter(enabled)
    return _progress


# Environment variable override
if os.environ.get('SCSSPKG_PROGRESS') == '0':
    _progress = ProgressReporter(enabled=False)
elif os.environ.get('SCSSPKG_PROGRESS') == '1':
    _progress = ProgressReporter(enabled=True)
