"""Run the HTTP API."""

import cyclopts
import uvicorn

from geocidades.config import Config

app = cyclopts.App(name="server", help="Run the GeoCidades API server")


@app.default
def serve(host: str | None = None, port: int | None = None, reload: bool = False) -> None:
    """Start the API server in the foreground.

    Args:
        host: Host to bind to. Defaults to the configured server host.
        port: Port to listen on. Defaults to the configured server port.
        reload: Restart on code changes (development only).
    """
    config = Config()  # type: ignore[call-arg]
    uvicorn.run(
        "geocidades.application.api.rest.app:create_app",
        factory=True,
        host=host or config.server.host,
        port=port or config.server.port,
        reload=reload,
        log_config=None,  # configure_logging owns the root logger
    )
