"""CLI entry point for flight-relay."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, Config, load_config
from core.exceptions import ConfigurationError
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

    try:
        config = load_config()
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        sys.exit(1)

    clear_logs(config.logging.directory)
    _print_banner(config)
    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Relay started", log_root=config.logging.directory, port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Relay stopped", log_root=config.logging.directory, duration=str(duration))
        dashboard.stop()
        console.print("[dim]Shutting down proxy server...[/dim]")


def _print_banner(config: Config) -> None:
    """Print the startup banner with endpoint URLs."""
    base = f"http://localhost:{config.proxy.port}"
    console.rule("[bold cyan]Multi-Portal Flight Search Proxy Server[/bold cyan]")
    console.print(f"[green]Server running at:[/green] {base}")
    console.print(f"Static files served from: {config.proxy.static_dir.resolve()}")
    console.print(f"Open your HTML at: {base}/flight-search.html")
    console.print("[bold]API Endpoints:[/bold]")
    console.print(f"   - Travclan: {base}/api/travclan/flights")
    console.print(f"   - Tripjack: {base}/api/tripjack/flights")
    console.print(f"   - TBO:      {base}/api/tbo/flights")
    console.rule()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Flight Search Relay[/bold cyan]

Forwards browser flight searches to Travclan, Tripjack and TBO.

[bold]Usage:[/bold]
    flight-relay              Start with live dashboard
    flight-relay --config     Show config location
    flight-relay --help       Show this help

[bold]Credentials:[/bold]
    Travclan / Tripjack: send the bearer token in the Authorization header
    TBO: copy the session cookies from the browser into the X-TBO-Cookie header
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
