"""Server commands."""

import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.panel import Panel

console = Console()

# Exit status uvicorn itself uses when the application fails to start
STARTUP_FAILURE = 3


def serve(
    host: str | None = typer.Option(None, help="Host to bind to (default: app.host)"),
    port: int | None = typer.Option(None, help="Port to bind to (default: app.port)"),
) -> None:
    """
    🚀 Run the Books API server.

    Stops on Ctrl+C. In-flight requests get ``app.shutdown_grace_seconds`` to
    finish; if any has to be cancelled the command exits with status 1.
    """
    from src.books_api.api.http.app import app as api_app
    from src.books_api.runtime.context import get_config

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port
    grace = config.app.shutdown_grace_seconds

    console.print(
        Panel.fit(
            f"[bold green]Starting Books API on {bind_host}:{bind_port}[/bold green]",
            border_style="green",
        )
    )

    server = uvicorn.Server(
        uvicorn.Config(
            api_app,
            host=bind_host,
            port=bind_port,
            access_log=False,  # request logging middleware covers this
            log_config=None,  # keep the loguru interception installed by the app
            timeout_graceful_shutdown=grace,
        )
    )
    server.run()

    if not server.started:
        logger.critical("Server startup failed")
        raise typer.Exit(code=STARTUP_FAILURE)

    aborted = api_app.state.request_tracker.aborted
    if aborted:
        logger.critical(
            "Server shutdown failed: {} request(s) cancelled after the {}s grace period",
            aborted,
            grace,
        )
        raise typer.Exit(code=1)
