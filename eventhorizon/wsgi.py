"""WSGI applications for posting commands and querying read repositories."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any, Callable, Iterable

StartResponse = Callable[..., Any]


def _status(code: HTTPStatus) -> str:
    return f"{code.value} {code.phrase}"


def _error(start_response: StartResponse, code: HTTPStatus, message: str) -> list[bytes]:
    body = (message + "\n").encode("utf-8")
    start_response(
        _status(code),
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("X-Content-Type-Options", "nosniff"),
            ("Content-Length", str(len(body))),
        ],
    )
    return [body]


def _read_body(environ: dict) -> bytes:
    length = environ.get("CONTENT_LENGTH") or ""
    stream = environ["wsgi.input"]
    return stream.read(int(length)) if length.strip() else stream.read()


def _to_jsonable(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


def command_app(handler: Callable[[Any], None], command_factory: Callable[[Any], Any]):
    """Return a WSGI app that decodes a POSTed JSON body into a command and handles it."""

    def app(environ: dict, start_response: StartResponse) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET")
        if method != "POST":
            return _error(
                start_response, HTTPStatus.METHOD_NOT_ALLOWED, "unsuported method: " + method
            )
        try:
            raw = _read_body(environ)
        except Exception as exc:
            return _error(start_response, HTTPStatus.BAD_REQUEST, f"could not read command: {exc}")
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            return _error(
                start_response, HTTPStatus.BAD_REQUEST, f"could not decode command: {exc}"
            )
        try:
            command = command_factory(payload)
        except Exception as exc:
            return _error(
                start_response, HTTPStatus.BAD_REQUEST, f"could not create command: {exc}"
            )
        try:
            handler(command)
        except Exception as exc:
            return _error(
                start_response, HTTPStatus.BAD_REQUEST, f"could not handle command: {exc}"
            )
        start_response(_status(HTTPStatus.OK), [("Content-Length", "0")])
        return [b""]

    return app


def query_app(repo: Any):
    """Return a WSGI app serving all items for a path ending in /, else the item named last.

    The repository's ``find`` raises LookupError when an item does not exist.
    """

    def app(environ: dict, start_response: StartResponse) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET")
        if method != "GET":
            return _error(
                start_response, HTTPStatus.METHOD_NOT_ALLOWED, "unsuported method: " + method
            )
        path = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
        item_id = path.rpartition("/")[2]
        if not item_id:
            try:
                data = repo.find_all()
            except Exception as exc:
                return _error(
                    start_response,
                    HTTPStatus.INTERNAL_SERVER_ERROR,
                    f"could not find items: {exc}",
                )
        else:
            try:
                data = repo.find(item_id)
            except LookupError:
                return _error(start_response, HTTPStatus.NOT_FOUND, "could not find item")
            except Exception as exc:
                return _error(
                    start_response,
                    HTTPStatus.INTERNAL_SERVER_ERROR,
                    f"could not find item: {exc}",
                )
        try:
            body = json.dumps(data, default=_to_jsonable, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            return _error(
                start_response,
                HTTPStatus.INTERNAL_SERVER_ERROR,
                f"could not encode result: {exc}",
            )
        start_response(
            _status(HTTPStatus.OK),
            [("Content-Type", "application/json"), ("Content-Length", str(len(body)))],
        )
        return [body]

    return app