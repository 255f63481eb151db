"""DocChat launcher.

Integrated mode serves the API and the NiceGUI pages from one uvicorn server.
Separate mode starts the API and the UI as two processes on their own ports.
In both modes the pages reach the API over HTTP at ``API_BASE_URL``, which is
derived from HOST and PORT unless set explicitly.
"""

import logging
import os
import subprocess
import sys
import time
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Bind-all addresses are not reachable as a destination
_WILDCARD_HOSTS = {"", "0.0.0.0", "::"}


class ServerConfig(BaseModel):
    """Process layout and listening addresses.

    Attributes:
        mode: ``integrated`` (one server) or ``separate`` (API and UI processes).
        host: Interface the servers bind to.
        port: API port; also serves the pages in integrated mode.
        ui_port: NiceGUI port in separate mode.
        api_base_url: Explicit API location for the pages; derived when empty.
        storage_secret: Secret signing NiceGUI browser storage.
        log_level: Root logging level.
    """

    mode: Literal["integrated", "separate"] = Field(
        default_factory=lambda: os.getenv("RUN_MODE", "integrated").strip().lower()
    )
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "8000")), gt=0, lt=65536)
    ui_port: int = Field(
        default_factory=lambda: int(os.getenv("UI_PORT", "8080")), gt=0, lt=65536
    )
    api_base_url: str = Field(default_factory=lambda: os.getenv("API_BASE_URL", ""))
    storage_secret: str = Field(
        default_factory=lambda: os.getenv("NICEGUI_STORAGE_SECRET", "docchat-secret")
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def api_url(self) -> str:
        """Where the pages send API requests."""
        if self.api_base_url:
            return self.api_base_url
        host = "127.0.0.1" if self.host in _WILDCARD_HOSTS else self.host
        return f"http://{host}:{self.port}"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def run_integrated(config: ServerConfig) -> None:
    """Run FastAPI with NiceGUI mounted on the same server."""
    import uvicorn
    from nicegui import ui

    from docchat.api.app import create_app
    from docchat.ui import auth_pages, chat_page  # noqa: F401 - Registers the pages

    # The pages call the API on this same server
    os.environ["API_BASE_URL"] = config.api_url

    app = create_app()
    ui.run_with(
        app,
        title="DocChat",
        favicon="💬",
        storage_secret=config.storage_secret,
    )

    logger.info(f"Starting integrated server on {config.api_url}")
    logger.info(f"API docs available at {config.api_url}/docs")

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


def run_separate(config: ServerConfig) -> None:
    """Run the API and the UI as child processes until either exits."""
    env = {
        **os.environ,
        "API_BASE_URL": config.api_url,
        "UI_PORT": str(config.ui_port),
        "NICEGUI_STORAGE_SECRET": config.storage_secret,
    }
    api_cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "docchat.api.app:app",
        "--host",
        config.host,
        "--port",
        str(config.port),
    ]
    ui_cmd = [sys.executable, "-m", "docchat.ui.chat_page"]

    logger.info(f"Starting API on {config.api_url}")
    logger.info(f"Starting UI on port {config.ui_port}")
    procs = [subprocess.Popen(api_cmd, env=env), subprocess.Popen(ui_cmd, env=env)]

    try:
        while all(proc.poll() is None for proc in procs):
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in procs:
            proc.terminate()
        for proc in procs:
            proc.wait()


def main() -> None:
    """Application entry point; RUN_MODE selects the process layout."""
    config = ServerConfig()
    configure_logging(config.log_level)
    logger.info(f"Starting DocChat in {config.mode} mode")

    if config.mode == "separate":
        run_separate(config)
    else:
        run_integrated(config)


if __name__ in {"__main__", "__mp_main__"}:
    main()
