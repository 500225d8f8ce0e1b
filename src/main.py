"""Main application entry point.

Two run modes, chosen by RUN_MODE:

    integrated  FastAPI and the NiceGUI views on one server (PORT, default 8000)
    separate    FastAPI (API_PORT, default 8000) and NiceGUI (UI_PORT, default 8080)
                as two processes

Either way the UI reaches the chat API over HTTP at API_BASE_URL, which is
pointed at the API server unless set explicitly. Environment variables are
loaded from .env file.
"""

import logging
import os
import subprocess
import sys
import time

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

DEFAULT_API_PORT = 8000
DEFAULT_UI_PORT = 8080


def local_api_url(port: int) -> str:
    return f"http://localhost:{port}"


def api_command(host: str, port: int) -> list[str]:
    """uvicorn command line for the standalone API server."""
    return [
        sys.executable,
        "-m",
        "uvicorn",
        "src.api.app:app",
        "--host",
        host,
        "--port",
        str(port),
    ]


def ui_command() -> list[str]:
    return [sys.executable, "-c", "from src.ui.chat_page import main; main()"]


def ui_environment(
    api_port: int, ui_port: int, base: dict[str, str] | None = None
) -> dict[str, str]:
    """Environment for the UI process.

    The UI port is always set. API_BASE_URL is only filled in when the
    caller has not chosen one.
    """
    env = dict(os.environ if base is None else base)
    env.setdefault("API_BASE_URL", local_api_url(api_port))
    env["UI_PORT"] = str(ui_port)
    return env


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server."""
    port = int(os.getenv("PORT", str(DEFAULT_API_PORT)))
    # Must be set before the UI modules are imported
    os.environ.setdefault("API_BASE_URL", local_api_url(port))

    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="Chat AI",
        favicon="💬",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "chat-ai-secret"),
    )

    logger.info(f"Starting integrated server on {local_api_url(port)}")
    logger.info(f"API docs available at {local_api_url(port)}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run the API and the UI as two child processes.

    Stops both as soon as either exits or on Ctrl+C.
    """
    api_port = int(os.getenv("API_PORT", str(DEFAULT_API_PORT)))
    ui_port = int(os.getenv("UI_PORT", str(DEFAULT_UI_PORT)))
    ui_env = ui_environment(api_port, ui_port)

    logger.info(f"Starting chat API on {local_api_url(api_port)}")
    logger.info(f"Starting chat UI on {local_api_url(ui_port)}, using {ui_env['API_BASE_URL']}")

    processes = [
        subprocess.Popen(api_command(os.getenv("HOST", "0.0.0.0"), api_port)),
        subprocess.Popen(ui_command(), env=ui_env),
    ]
    try:
        while all(proc.poll() is None for proc in processes):
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in processes:
            proc.terminate()
        for proc in processes:
            proc.wait()


def main() -> None:
    """Application entry point."""
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Chat AI in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
