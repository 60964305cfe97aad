"""
Nuki Exporter - FastAPI application and process entry point
Serves the metrics in the background and polls the bridge in the foreground
"""

import argparse
import sys
import threading
import time
from typing import List, Optional, Tuple

import structlog
import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from nuki_exporter import __version__
from nuki_exporter.api.routes import landing, metrics
from nuki_exporter.collectors.bridge_client import BridgeClient
from nuki_exporter.collectors.bridge_collector import BridgeCollector
from nuki_exporter.collectors.liveness import LivenessProber
from nuki_exporter.core.config import LOG_LEVELS, Settings
from nuki_exporter.core.credentials import resolve_credentials
from nuki_exporter.core.exceptions import ConfigError, ExporterError
from nuki_exporter.core.logging_config import configure_logging
from nuki_exporter.core.supervisor import Supervisor
from nuki_exporter.metrics.registry import MetricRegistry

logger = structlog.get_logger(__name__)


def create_app(settings: Settings, registry: MetricRegistry) -> FastAPI:
    """Build the exporter web application around a registry"""
    app = FastAPI(
        title="Nuki Exporter",
        description="Report metrics of the Nuki bridge API",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.registry = registry

    app.include_router(landing.router)
    app.include_router(metrics.build_router(settings.metrics_path))
    return app


def serve_in_background(app: FastAPI, settings: Settings) -> Tuple[uvicorn.Server, threading.Thread]:
    """Start uvicorn on a daemon thread"""
    host, port = settings.bind_address
    uvicorn_level = "warning" if settings.log_level == "WARN" else settings.log_level.lower()
    server = uvicorn.Server(uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=uvicorn_level,
        access_log=False,
    ))
    thread = threading.Thread(target=server.run, name="http-server", daemon=True)
    thread.start()
    return server, thread


def wait_until_listening(server: uvicorn.Server, thread: threading.Thread, timeout: float) -> None:
    """
    Block until uvicorn reports it is accepting connections.

    Raises:
        ExporterError: If the server thread died or did not start in time
    """
    deadline = time.monotonic() + timeout
    while not server.started:
        if not thread.is_alive():
            raise ExporterError("HTTP server failed to start")
        if time.monotonic() > deadline:
            raise ExporterError(f"HTTP server not listening after {timeout}s")
        time.sleep(0.05)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="nuki-exporter", description="report metrics of nuki api")
    p.add_argument(
        "-c", "--credentials_file",
        help="file containing credentials for nuki api. Credentials file is in YAML format and "
             "contains token field. Alternatively give token directly, it wins over credentials file. "
             "[$CREDENTIALS_FILE]",
    )
    p.add_argument("-b", "--bridge_host", help="fqdn or ip address of bridge [$BRIDGE]")
    p.add_argument("-t", "--token", help="token, wins over credentials file [$TOKEN]")
    p.add_argument(
        "-l", "--listen_address",
        help="[optional] address to listen on, either :port or address:port (default :9314) [$LISTEN_ADDRESS]",
    )
    p.add_argument(
        "-m", "--metrics_path",
        help="[optional] URL path where metrics are exposed (default /metrics) [$METRICS_PATH]",
    )
    p.add_argument(
        "-v", "--log_level", type=str.upper, choices=LOG_LEVELS,
        help="[optional] log level, choose from DEBUG, INFO, WARN, ERROR (default ERROR) [$LOG_LEVEL]",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def load_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with every given flag taking precedence"""
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ConfigError(f"Invalid settings: {problems}") from e
    if not settings.token and not settings.credentials_file:
        raise ConfigError("Either credentials_file or token need to be set!")
    if not settings.bridge_host:
        raise ConfigError("bridge_host needs to be set!")
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the nuki-exporter console script"""
    configure_logging()
    try:
        settings = load_settings(parse_args(argv))
        configure_logging(settings.log_level)
        logger.debug("Configuration", listen_address=settings.listen_address,
                     credentials_file=settings.credentials_file, metrics_path=settings.metrics_path)
        credentials = resolve_credentials(settings)
    except ConfigError as e:
        logger.error("Invalid configuration", error=str(e))
        return 2

    registry = MetricRegistry(prefix=settings.metric_prefix)
    app = create_app(settings, registry)
    server, thread = serve_in_background(app, settings)
    try:
        wait_until_listening(server, thread, settings.startup_timeout)
    except ExporterError as e:
        logger.error("Couldn't start HTTP server", error=str(e), listen_address=settings.listen_address)
        return 2

    supervisor = Supervisor()
    supervisor.ready()

    collector = BridgeCollector(
        client=BridgeClient(settings, credentials),
        registry=registry,
        interval=settings.poll_interval,
        prober=LivenessProber(settings.self_metrics_url, supervisor, timeout=settings.probe_timeout),
        server_thread=thread,
    )
    try:
        collector.start()
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
    except ExporterError as e:
        logger.error("Exporter stopped", error=str(e))
        return 2
    finally:
        collector.stop()
        server.should_exit = True
    return 0


if __name__ == "__main__":
    sys.exit(main())
