"""Real-time CLI dashboard for relay monitoring."""

from datetime import datetime
from threading import Lock
from typing import Any

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log, write_incoming_log

console = Console()

PROVIDERS = ("Travclan", "Tripjack", "TBO")


class RequestInfo:
    """Info about a single relayed request."""

    def __init__(self, provider: str, summary: str, timestamp: datetime):
        self.provider = provider
        self.summary = summary[:60] + "..." if len(summary) > 60 else summary
        self.status: int | None = None
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing per-provider traffic and recent errors."""

    def __init__(self, config: Config):
        self.config = config
        self._log_root = config.logging.directory
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 8
        self._request_count = {name: 0 for name in PROVIDERS}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_incoming(
        self,
        provider: str,
        method: str,
        path: str,
        headers: dict[str, str],
        body: Any,
    ) -> None:
        """Persist the inbound request (credentials masked)."""
        if self.config.logging.request_logs:
            write_incoming_log(provider, method, path, headers, body, log_root=self._log_root)

    def log_request(self, provider: str, summary: str) -> None:
        """Log an outbound request about to be sent."""
        with self._lock:
            self._request_count[provider] = self._request_count.get(provider, 0) + 1
            self._recent.insert(0, RequestInfo(provider, summary, datetime.now()))
            self._recent = self._recent[: self._max_recent]
            write_cli_log(provider.upper(), summary, log_root=self._log_root)
            self._refresh()

    def log_response(self, provider: str, status: int, detail: str = "") -> None:
        """Log the upstream status for the newest request of a provider."""
        with self._lock:
            for info in self._recent:
                if info.provider == provider and info.status is None:
                    info.status = status
                    break
            write_cli_log(
                provider.upper(),
                f"response received {detail}".strip(),
                log_root=self._log_root,
                status=status,
            )
            self._refresh()

    def log_event(self, provider: str, message: str) -> None:
        """Diagnostic line for the log file only."""
        write_cli_log(provider.upper(), message, log_root=self._log_root)

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], log_root=self._log_root, route=route, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Flight Search Relay", style="bold cyan")
        for name in PROVIDERS:
            stats.append("  |  ")
            stats.append(f"{name}: {self._request_count.get(name, 0)}", style="blue")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Provider", width=10)
            table.add_column("Status", width=6)
            table.add_column("Request", ratio=2)

            for info in self._recent:
                status = str(info.status) if info.status is not None else "..."
                style = "green" if info.status == 200 else "yellow"
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.provider,
                    f"[{style}]{status}[/{style}]",
                    info.summary,
                )
            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent Requests[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"Open http://localhost:{self.config.proxy.port}/flight-search.html",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
