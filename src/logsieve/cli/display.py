"""Live progress display for the CLI."""

import logging
from typing import Optional

from rich.console import Console, RenderableType
from rich.live import Live
from rich.logging import RichHandler
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from ..models import DEFAULT_LOCALE, DEFAULT_REFRESH_INTERVAL
from ..orchestration.progress import ProgressAggregator
from ..summary import format_bytes, format_count, resolve_locale


def format_eta(seconds: Optional[float]) -> str:
    if seconds is None:
        return "--:--:--"
    total = int(round(seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def find_log_console() -> Optional[Console]:
    """Return the console of a RichHandler on the root logger, if any."""
    for handler in logging.getLogger().handlers:
        if isinstance(handler, RichHandler):
            return handler.console
    return None


class ProgressView:
    """
    Renderable that reads a fresh snapshot every time it is drawn.

    rich's Live refresh thread calls ``__rich__`` on a fixed interval, so the
    display polls the aggregator instead of being pushed to by workers.
    """

    def __init__(self, aggregator: ProgressAggregator, locale: str = DEFAULT_LOCALE, bar_width: int = 40):
        self.aggregator = aggregator
        self.locale = resolve_locale(locale)
        self.bar_width = bar_width

    def _format_throughput(self, throughput: Optional[float]) -> str:
        if throughput is None:
            return "--/s"
        return f"{format_bytes(throughput, self.locale)}/s"

    def __rich__(self) -> RenderableType:
        snap = self.aggregator.snapshot()

        grid = Table.grid(padding=(0, 1))
        grid.add_row(
            ProgressBar(
                total=max(snap.files_total, 1),
                completed=snap.files_completed if snap.files_total else 1,
                width=self.bar_width,
            ),
            Text(
                f"{format_count(snap.files_completed, self.locale)}/"
                f"{format_count(snap.files_total, self.locale)} files",
                style="cyan",
            ),
            Text(f"{format_count(snap.lines_removed, self.locale)} lines removed", style="green"),
            Text(
                f"{format_bytes(snap.bytes_processed, self.locale)}/"
                f"{format_bytes(snap.bytes_total, self.locale)}",
            ),
            Text(self._format_throughput(snap.throughput), style="blue"),
            Text(f"ETA {format_eta(snap.eta)}", style="magenta"),
        )
        if snap.files_failed:
            grid.add_row(Text(f"{format_count(snap.files_failed, self.locale)} failed", style="red"))
        return grid


class LiveProgressDisplay:
    """Context manager showing a ProgressView while the run is active."""

    def __init__(
        self,
        aggregator: ProgressAggregator,
        console: Optional[Console] = None,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        locale: str = DEFAULT_LOCALE,
    ):
        self.view = ProgressView(aggregator, locale=locale)
        self.console = console or find_log_console() or Console()
        self.refresh_interval = refresh_interval
        self._live: Optional[Live] = None

    def __enter__(self) -> "LiveProgressDisplay":
        self._live = Live(
            self.view,
            console=self.console,
            refresh_per_second=1.0 / self.refresh_interval,
            redirect_stdout=False,
            redirect_stderr=False,
        )
        self._live.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if self._live is not None:
            # final frame shows the completed counters
            self._live.refresh()
            self._live.stop()
            self._live = None
        return False
