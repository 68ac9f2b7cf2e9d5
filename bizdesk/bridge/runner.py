"""
Runner script for the bizdesk bridge.

Serves the request/response boundary over stdio: one JSON request per line
on stdin, one JSON response per line on stdout. The startup push is written
before the first request is read. Logs go to the log file and stderr so
stdout carries only responses.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from bizdesk.config import LOG_FILE, LOG_FORMAT, ensure_directories, get_log_level
from bizdesk.errors import ValidationError

from .client import create_bridge
from .protocol import Request, Response

logger = logging.getLogger(__name__)


def configure_logging():
    ensure_directories()
    logging.basicConfig(
        level=get_log_level(),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(LOG_FILE),
            logging.StreamHandler(sys.stderr),
        ],
    )


def write_response(response: Response, stream=None):
    stream = stream or sys.stdout
    stream.write(json.dumps(response.to_dict(), default=str) + "\n")
    stream.flush()


def parse_line(line: str) -> Request:
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Malformed request: {e.msg}")
    return Request.from_dict(data)


async def serve(bridge, stdin=None, stdout=None):
    """
    Answer requests until stdin is closed.

    Each request is dispatched as its own task, so a slow operation (a
    restore, a chart) does not hold up the ones read after it. Responses are
    written from the event loop thread one whole line at a time, in
    completion order; callers match them up by request_id.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    push = bridge.startup_push()
    if push is not None:
        write_response(push, stdout)

    async def answer(request: Request):
        response = await bridge.dispatch(request)
        write_response(response, stdout)

    pending: set[asyncio.Task] = set()
    while True:
        line = await asyncio.to_thread(stdin.readline)
        if not line:
            logger.info("Input closed, shutting down")
            break
        if not line.strip():
            continue

        try:
            request = parse_line(line)
        except ValidationError as e:
            logger.warning(f"Rejected request line: {e}")
            write_response(
                Response.failure(Request(operation=""), "error", str(e), "invalid_request"),
                stdout,
            )
            continue

        task = asyncio.create_task(answer(request))
        pending.add(task)
        task.add_done_callback(pending.discard)

    if pending:
        logger.info(f"Waiting for {len(pending)} in-flight requests")
        await asyncio.gather(*pending)


def run():
    """Run the stdio bridge with error handling."""
    configure_logging()
    try:
        env_path = Path(__file__).parent.parent.parent / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            logger.info(f"Loaded environment from {env_path}")
        else:
            logger.debug(f".env file not found at {env_path}")

        logger.info("Starting bizdesk bridge...")
        try:
            bridge = create_bridge()
        except Exception as e:
            logger.error(f"Failed to create bridge: {e}", exc_info=True)
            sys.exit(1)

        try:
            asyncio.run(serve(bridge))
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt, shutting down...")
        finally:
            bridge.repository.close()
    except Exception as e:
        logger.critical(f"Critical error in run(): {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
