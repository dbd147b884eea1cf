import sys

import typer
import uvicorn

from kuberly_app.config import get_settings
from kuberly_app.selftest import SelfTest
from kuberly_app.utils.logging import configure_logging

app = typer.Typer(help="KubeRLy Test App CLI.")


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes (development)."),
) -> None:
    """
    Run the HTTP server on HOST:PORT.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    uvicorn.run(
        "kuberly_app.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=reload,
        log_config=None,
    )


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    for name, value in settings.masked().items():
        typer.echo(f"{name}={value}")


@app.command()
def selftest(
    skip_app: bool = typer.Option(
        False,
        "--skip-app",
        help="Only check PostgreSQL and Redis, not the HTTP API.",
    ),
) -> None:
    """
    Run integration checks against PostgreSQL, Redis and the running app.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    harness = SelfTest.create(settings, include_app=not skip_app)
    try:
        report = harness.run()
    finally:
        harness.close()

    typer.echo(report.summary())
    if not report.passed:
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
