from __future__ import annotations

"""
Simple TCP server exposing the session operations.

Protocol: JSON per line over TCP.
- Request:  {"cmd": "create"}
            {"cmd": "eval", "session": "<id>", "code": "(+ 1 2)"}
            {"cmd": "vars", "session": "<id>", "prefix": "x"}   (prefix optional)
            {"cmd": "get",  "session": "<id>", "name": "x"}
            {"cmd": "end",  "session": "<id>"}
- Response: {"ok": true, "result": <value>} or
            {"ok": false, "category": "bad-input" | "not-found" | ..., "error": <kind>,
             "message": <text>, ...detail}

All clients share one SessionManager; any client may address any session id.
"""

import json
import logging
import socket
import threading
from typing import Any, Callable, Tuple

from lispcore.errors import INTERNAL, LispError
from lispcore.sessions.manager import SessionManager

logger = logging.getLogger(__name__)

HOST = "127.0.0.1"
PORT = 8765

INVALID_REQUEST = "invalid-request"


class InvalidRequest(Exception):
    """Malformed request envelope (not JSON, unknown cmd, missing field)."""


def _field(req: dict, name: str) -> str:
    value = req.get(name)
    if not isinstance(value, str):
        raise InvalidRequest(f"Missing or non-string field: {name}")
    return value


def _optional_field(req: dict, name: str) -> str | None:
    value = req.get(name)
    if value is not None and not isinstance(value, str):
        raise InvalidRequest(f"Non-string field: {name}")
    return value


class ReplServer:
    def __init__(self, manager: SessionManager | None = None, host: str = HOST, port: int = PORT):
        self.host = host
        self.port = port
        # One manager shared by every client connection
        self.manager = manager if manager is not None else SessionManager()
        self._commands: dict[str, Callable[[dict], Any]] = {
            "create": lambda req: self.manager.create_session(),
            "eval": lambda req: self.manager.evaluate(_field(req, "session"), _field(req, "code")),
            "vars": lambda req: self.manager.list_variables(_field(req, "session"), _optional_field(req, "prefix")),
            "get": lambda req: self.manager.get_variable(_field(req, "session"), _field(req, "name")),
            "end": lambda req: self.manager.end_session(_field(req, "session")),
        }

    def handle_request(self, req: Any) -> dict:
        """Dispatch one decoded request to the session manager."""
        try:
            if not isinstance(req, dict):
                raise InvalidRequest("Request must be a JSON object")
            cmd = req.get("cmd")
            handler = self._commands.get(cmd) if isinstance(cmd, str) else None
            if handler is None:
                raise InvalidRequest(f"Unknown cmd: {cmd}")
            return {"ok": True, "result": handler(req)}
        except LispError as ex:
            return {"ok": False, **ex.to_dict()}
        except InvalidRequest as ex:
            return {"ok": False, "category": INVALID_REQUEST, "message": str(ex)}

    def handle_line(self, line: bytes) -> bytes:
        try:
            req = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as ex:
            resp = {"ok": False, "category": INVALID_REQUEST, "message": f"Invalid request: {ex}"}
        else:
            try:
                return self._encode(self.handle_request(req))
            except Exception:
                logger.exception("Failed to handle request: %r", line[:200])
                resp = {"ok": False, "category": INTERNAL, "message": "Internal server error"}
        return self._encode(resp)

    @staticmethod
    def _encode(resp: dict) -> bytes:
        # Strict JSON: NaN and Infinity are not valid tokens
        return (json.dumps(resp, allow_nan=False) + "\n").encode("utf-8")

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("Listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.debug("Client connected: %s:%d", *addr)
        with conn:
            buf = b""
            try:
                while True:
                    data = conn.recv(4096)
                    if not data:
                        break
                    buf += data
                    while b"\n" in buf:
                        line, buf = buf.split(b"\n", 1)
                        line = line.strip()
                        if not line:
                            continue
                        conn.sendall(self.handle_line(line))
            except OSError:
                logger.exception("Connection error with %s:%d", *addr)
        logger.debug("Client disconnected: %s:%d", *addr)


if __name__ == "__main__":
    ReplServer().serve_forever()
