"""
Watch mode - Live reload and background bundling during development.

A WatchSession owns two supervised processes (the application under live
reload and the bundler in watch mode) and two polling file watchers:
- built artifacts (bundle, index.html, compiled CSS) -> reload the app
- LESS sources -> recompile styles, then reload
"""

import logging
import subprocess
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .actions.bundle import watch_command
from .actions.styles import StylesResult, compile_styles
from .config import KilnConfig
from .environment import BuildContext, BuildEnvironment
from .errors import KilnError, ToolInvocationError
from .freshness import expand_globs
from .tools import format_command

logger = logging.getLogger(__name__)


class BackgroundProcess:
    """Supervised handle around a long-running external process."""

    def __init__(self, command: Sequence[str], cwd: Path | None = None, name: str | None = None):
        self.command = list(command)
        self.cwd = cwd
        self.name = name or self.command[0]
        self.process: subprocess.Popen | None = None

    @property
    def running(self) -> bool:
        return self.process is not None and self.process.poll() is None

    def start(self) -> None:
        """Start the process if it is not already running."""
        if self.running:
            return
        logger.debug(f"Starting {self.name}: {format_command(self.command)}")
        try:
            self.process = subprocess.Popen(self.command, cwd=self.cwd)
        except OSError as e:
            raise ToolInvocationError(self.command, None, str(e)) from e

    def stop(self, timeout: float = 5.0) -> None:
        """Terminate the process, killing it if it does not exit in time."""
        if self.process is None:
            return
        if self.process.poll() is None:
            self.process.terminate()
            try:
                self.process.wait(timeout=timeout)
            except subprocess.TimeoutExpired:
                self.process.kill()
                self.process.wait()
        self.process = None


class LiveReloadServer:
    """Runs the application and restarts it on reload."""

    def __init__(self, command: Sequence[str], cwd: Path | None = None):
        self.app = BackgroundProcess(command, cwd=cwd, name="app")
        self.reload_count = 0

    def start(self) -> None:
        self.app.start()

    def reload(self) -> None:
        logger.info("Reloading application")
        self.app.stop()
        self.app.start()
        self.reload_count += 1

    def stop(self) -> None:
        self.app.stop()


class FileWatcher:
    """Polls modification times of files matched by glob patterns."""

    def __init__(self, root: Path, patterns: Iterable[str]):
        self.root = root
        self.patterns = list(patterns)
        self._snapshot = self._scan()

    def _scan(self) -> dict[Path, float]:
        snapshot = {}
        for path in expand_globs(self.root, self.patterns):
            try:
                snapshot[path] = path.stat().st_mtime
            except FileNotFoundError:
                continue
        return snapshot

    def poll(self) -> list[Path]:
        """Return files added, modified or removed since the last poll."""
        current = self._scan()
        changed = [p for p, mtime in current.items() if self._snapshot.get(p) != mtime]
        changed.extend(p for p in self._snapshot if p not in current)
        self._snapshot = current
        return sorted(changed)


@dataclass
class WatchEvents:
    """What one polling pass reacted to."""

    reloaded: list[Path] = field(default_factory=list)
    styles_changed: list[Path] = field(default_factory=list)
    styles_result: StylesResult | None = None
    error: str | None = None

    @property
    def idle(self) -> bool:
        return not self.reloaded and not self.styles_changed


class WatchSession:
    """
    Development watch loop.

    The session never stops on its own; run_forever() returns only when
    interrupted, and stop() tears down both background processes.
    """

    def __init__(
        self,
        config: KilnConfig,
        reload_server: LiveReloadServer | None = None,
        bundler: BackgroundProcess | None = None,
        compile_fn: Callable[[BuildContext], StylesResult] = compile_styles,
    ):
        self.config = config
        self.ctx = BuildContext(environment=BuildEnvironment.DEVELOPMENT, config=config)
        self.reload_server = reload_server or LiveReloadServer([config.tools.electron, "."], cwd=config.root)
        self.bundler = bundler or BackgroundProcess(watch_command(self.ctx), cwd=config.root, name="bundler")
        self.compile_fn = compile_fn
        self.reload_watcher = FileWatcher(config.root, config.watch.reload_globs)
        self.style_watcher = FileWatcher(config.root, config.watch.style_globs)
        self.started = False

    def start(self) -> None:
        """Start live reload and the background bundler."""
        self.reload_server.start()
        self.bundler.start()
        self.started = True

    def stop(self) -> None:
        self.bundler.stop()
        self.reload_server.stop()
        self.started = False

    def poll_once(self) -> WatchEvents:
        """Check both watchers once and react to any changes."""
        events = WatchEvents()

        events.styles_changed = self.style_watcher.poll()
        if events.styles_changed:
            logger.info(f"Styles changed: {', '.join(p.name for p in events.styles_changed)}")
            try:
                events.styles_result = self.compile_fn(self.ctx)
            except KilnError as e:
                events.error = str(e)
                logger.error(f"Style rebuild failed: {e}")

        events.reloaded = self.reload_watcher.poll()
        if events.reloaded or (events.styles_result is not None and events.styles_result.compiled):
            self.reload_server.reload()

        return events

    def run_forever(self, on_events: Callable[[WatchEvents], None] | None = None) -> None:
        """Poll until interrupted (KeyboardInterrupt propagates after cleanup)."""
        try:
            if not self.started:
                self.start()
            while True:
                events = self.poll_once()
                if on_events and not events.idle:
                    on_events(events)
                time.sleep(self.config.watch.poll_interval)
        finally:
            self.stop()
