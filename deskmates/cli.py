"""Command-line control of a running manager through its local HTTP API."""

from __future__ import annotations

import io
import json
import random
import re
import sys
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence, TextIO

from deskmates.args import ArgType, Argument, ArgumentList, UsageError

PROG = "deskmates"
DEFAULT_URL = "http://127.0.0.1:32456"
API_ROOT = "/shijima/api/v1"
MASCOTS_PATH = API_ROOT + "/mascots"
LOADED_MASCOTS_PATH = API_ROOT + "/loadedMascots"
PING_PATH = API_ROOT + "/ping"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

NOT_RUNNING = "Request failed. Is Shijima-Qt running?"
COMMANDS = ("list", "list-loaded", "spawn", "alter", "dismiss", "dismiss-all")

_INT_TEXT = re.compile(r"\s*[+-]?[0-9]+\s*")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class ApiError(Exception):
    """The API answered, but not with what was asked for.

    ``payload`` holds the decoded response object when there was one.
    """

    def __init__(self, message: str, payload: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.payload = payload

    @property
    def reported_by_server(self) -> bool:
        return self.payload is not None and "error" in self.payload


class ApiClient:
    """A minimal client for the manager's HTTP API.

    Each method returns the response body as text, whatever the status.
    Failing to reach the server raises ConnectionError.
    """

    def __init__(self, base_url: str = DEFAULT_URL, timeout: float = 5.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        params: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> str:
        url = self.base_url + path
        if params:
            url += "?" + urllib.parse.urlencode(dict(params))
        headers = {}
        data = None
        if body is not None:
            data = body.encode("utf-8")
            headers["Content-Type"] = "application/json"
        request = urllib.request.Request(url, data=data, headers=headers, method=method)
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                return response.read().decode("utf-8", "replace")
        except urllib.error.HTTPError as ex:
            try:
                return ex.read().decode("utf-8", "replace")
            finally:
                ex.close()
        except OSError as ex:
            raise ConnectionError(f"request to {url} failed: {ex}") from ex

    def get(self, path: str, params: Mapping[str, str] | None = None) -> str:
        return self._request("GET", path, params=params)

    def post(self, path: str, body: str) -> str:
        return self._request("POST", path, body=body)

    def put(self, path: str, body: str) -> str:
        return self._request("PUT", path, body=body)

    def delete(self, path: str, body: str | None = None) -> str:
        return self._request("DELETE", path, body=body)


def parse_api_result(body: str | bytes) -> dict[str, Any]:
    """Decode a response; raise ApiError unless it is an object without ``error``."""
    try:
        doc = json.loads(body)
    except ValueError as ex:
        raise ApiError(f"Failed to parse response: {ex}") from None
    if not isinstance(doc, dict):
        raise ApiError("Response JSON does not contain an object")
    if "error" in doc:
        reason = doc["error"]
        text = reason if isinstance(reason, str) else "Unknown error"
        raise ApiError(f"API request failed: {text}", payload=doc)
    return doc


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_int(value: Any) -> int:
    if not _is_number(value):
        return 0
    if isinstance(value, float):
        if not value.is_integer():
            return 0
        value = int(value)
    return value if _INT_MIN <= value <= _INT_MAX else 0


def _to_float(value: Any) -> float:
    return float(value) if _is_number(value) else 0.0


def _to_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _format_double(value: float) -> str:
    return format(value, "g")


def format_mascot(obj: Mapping[str, Any]) -> str:
    """Describe one mascot from the API in the listing's text form."""
    anchor = obj.get("anchor")
    if not isinstance(anchor, dict):
        anchor = {}
    return (
        f"[{_to_int(obj.get('id'))}] {_to_str(obj.get('name'))}\n"
        f"  Data ID: {_to_int(obj.get('data_id'))}\n"
        f"  Active behavior: {_to_str(obj.get('active_behavior'))}\n"
        f"  Anchor: {{{_format_double(_to_float(anchor.get('x')))}, "
        f"{_format_double(_to_float(anchor.get('y')))}}}\n"
    )


def mascot_id_at_index(mascots: Sequence[Any], index: int) -> int | None:
    """The id of the mascot at ``index``, or None if there is no usable one."""
    if index < 0 or len(mascots) <= index:
        return None
    entry = mascots[index]
    if not isinstance(entry, dict):
        return None
    value = entry.get("id")
    if not _is_number(value):
        return None
    return int(value)


_AUTO_IDS: dict[str, Callable[[Sequence[Any]], int | None]] = {
    "newest": lambda mascots: mascot_id_at_index(mascots, len(mascots) - 1),
    "oldest": lambda mascots: mascot_id_at_index(mascots, 0),
    "random": lambda mascots: mascot_id_at_index(mascots, random.randrange(len(mascots))),
}


def _parse_numeric_id(text: str) -> int | None:
    if not _INT_TEXT.fullmatch(text):
        return None
    value = int(text.strip())
    return value if _INT_MIN <= value <= _INT_MAX else None


def resolve_mascot_id(
    client: ApiClient,
    value: int | str,
    selectors: Sequence[str] | str | None = None,
) -> int:
    """Turn a numeric id or one of ``oldest``, ``newest``, ``random`` into an id.

    Automatic ids are looked up among the mascots each selector matches, in
    turn, until one yields an id.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str):
        raise TypeError("mascot id must be an int or a string")

    if selectors is None:
        selector_list = [""]
    elif isinstance(selectors, str):
        selector_list = [selectors]
    else:
        selector_list = list(selectors) or [""]

    numeric = _parse_numeric_id(value)
    if numeric is not None:
        if selector_list[0] != "":
            raise UsageError(
                "You can't specify a numeric ID and a selector at the same time"
            )
        if numeric < 0:
            raise UsageError("ID must be greater than or equal to 0")
        return numeric

    pick = _AUTO_IDS.get(value)
    if pick is None:
        raise UsageError("Invalid auto ID, expected: " + ", ".join(_AUTO_IDS))

    for selector in selector_list:
        params = {"selector": selector} if selector else {}
        obj = parse_api_result(client.get(MASCOTS_PATH, params))
        mascots = obj.get("mascots")
        if not isinstance(mascots, list):
            raise ApiError("Malformed response")
        if mascots:
            found = pick(mascots)
            if found is not None:
                return found
    raise ApiError("Failed to determine ID (are any mascots spawned?)")


def shimeji_attributes(
    behaviors: Sequence[str] | None,
    x: float | None,
    y: float | None,
) -> dict[str, Any]:
    """Build the optional anchor and behavior fields of a spawn or alter request."""
    if (x is None) != (y is None):
        raise UsageError("X and Y must be specified together")
    attributes: dict[str, Any] = {}
    if x is not None:
        attributes["anchor"] = {"x": float(x), "y": float(y)}
    if behaviors:
        attributes["behavior"] = random.choice(list(behaviors))
    return attributes


def _encode(obj: Mapping[str, Any]) -> str:
    return json.dumps(obj, separators=(",", ":"), sort_keys=True)


@dataclass
class _Context:
    client: ApiClient
    out: TextIO
    err: TextIO
    prog: str
    command: str
    arguments: ArgumentList

    def print_body(self, body: str) -> None:
        self.out.write(body + "\n")


def _parse_listing(ctx: _Context, body: str, print_json: bool) -> dict[str, Any] | None:
    """Parse a listing response, printing the body for --json; None means done."""
    try:
        obj = parse_api_result(body)
    except ApiError as ex:
        if print_json and ex.reported_by_server:
            ctx.print_body(body)
        raise
    if print_json:
        ctx.print_body(body)
        return None
    return obj


def _cmd_list(opts: dict[str, Any], ctx: _Context) -> int:
    params = {"selector": opts["selector"]} if opts["selector"] is not None else {}
    obj = _parse_listing(ctx, ctx.client.get(MASCOTS_PATH, params), opts["json"])
    if obj is None:
        return EXIT_SUCCESS
    mascots = obj.get("mascots")
    if not isinstance(mascots, list):
        raise ApiError("Malformed response")
    for mascot in mascots:
        if isinstance(mascot, dict):
            ctx.out.write(format_mascot(mascot))
    return EXIT_SUCCESS


def _cmd_list_loaded(opts: dict[str, Any], ctx: _Context) -> int:
    if opts["json"] and opts["sort-by-id"]:
        raise UsageError("--json and --sort-by-id cannot be used together.")
    obj = _parse_listing(ctx, ctx.client.get(LOADED_MASCOTS_PATH), opts["json"])
    if obj is None:
        return EXIT_SUCCESS
    loaded = obj.get("loaded_mascots")
    if not isinstance(loaded, list):
        raise ApiError("Malformed response")
    entries = [
        (_to_int(item.get("id")), _to_str(item.get("name")))
        for item in loaded
        if isinstance(item, dict)
    ]
    if opts["sort-by-id"]:
        entries.sort(key=lambda entry: entry[0])
    for mascot_id, name in entries:
        ctx.out.write(f"[{mascot_id}] {name}\n")
    return EXIT_SUCCESS


def _print_mascot_response(ctx: _Context, body: str, print_json: bool) -> int:
    try:
        obj = parse_api_result(body)
        if not print_json:
            mascot = obj.get("mascot")
            if not isinstance(mascot, dict):
                raise ApiError("Malformed response")
            ctx.out.write(format_mascot(mascot))
    finally:
        if print_json:
            ctx.print_body(body)
    return EXIT_SUCCESS


def _cmd_spawn(opts: dict[str, Any], ctx: _Context) -> int:
    if (opts["data-id"] is None) == (opts["name"] is None):
        ctx.err.write("ERROR: You must specify one of name or data-id.\n")
        ctx.err.write(ctx.arguments.usage(ctx.prog, ctx.command))
        return EXIT_FAILURE
    request: dict[str, Any] = {}
    if opts["data-id"] is not None:
        request["data_id"] = opts["data-id"]
    else:
        request["name"] = opts["name"]
    request.update(shimeji_attributes(opts["behavior"], opts["x"], opts["y"]))
    body = ctx.client.post(MASCOTS_PATH, _encode(request))
    return _print_mascot_response(ctx, body, opts["json"])


def _cmd_alter(opts: dict[str, Any], ctx: _Context) -> int:
    mascot_id = resolve_mascot_id(ctx.client, opts["id"], opts["selector"])
    request = shimeji_attributes(opts["behavior"], opts["x"], opts["y"])
    body = ctx.client.put(f"{MASCOTS_PATH}/{mascot_id}", _encode(request))
    return _print_mascot_response(ctx, body, opts["json"])


def _cmd_dismiss(opts: dict[str, Any], ctx: _Context) -> int:
    mascot_id = resolve_mascot_id(ctx.client, opts["id"], opts["selector"])
    parse_api_result(ctx.client.delete(f"{MASCOTS_PATH}/{mascot_id}"))
    return EXIT_SUCCESS


def _cmd_dismiss_all(opts: dict[str, Any], ctx: _Context) -> int:
    request = {"selector": opts["selector"]} if opts["selector"] is not None else {}
    parse_api_result(ctx.client.delete(MASCOTS_PATH, _encode(request)))
    return EXIT_SUCCESS


_JSON_OPT = Argument("json", "Print the API response as JSON", ArgType.BOOL)
_SELECTOR_OPT = Argument("selector", "JavaScript code for filtering shimeji", ArgType.STRING)

_COMMAND_TABLE: dict[str, tuple[Callable[[], ArgumentList], Callable[[dict[str, Any], _Context], int]]] = {
    "list": (
        lambda: ArgumentList([_JSON_OPT, _SELECTOR_OPT]),
        _cmd_list,
    ),
    "list-loaded": (
        lambda: ArgumentList([
            _JSON_OPT,
            Argument("sort-by-id", "Sort results by ID", ArgType.BOOL),
        ]),
        _cmd_list_loaded,
    ),
    "spawn": (
        lambda: ArgumentList([
            Argument("data-id", "Data ID of the shimeji to spawn", ArgType.INT),
            Argument("name", "Name of the shimeji to spawn", ArgType.STRING),
            Argument("behavior", "Initial behavior for the shimeji", ArgType.STRING_LIST),
            Argument("x", "Initial X position for the shimeji", ArgType.DOUBLE),
            Argument("y", "Initial Y position for the shimeji", ArgType.DOUBLE),
            _JSON_OPT,
        ]),
        _cmd_spawn,
    ),
    "alter": (
        lambda: ArgumentList([
            Argument("id", "ID of the shimeji to alter", ArgType.STRING, required=True),
            Argument("selector", "JavaScript code for filtering shimeji", ArgType.STRING_LIST),
            Argument("behavior", "New behavior for the shimeji", ArgType.STRING_LIST),
            Argument("x", "New X position for the shimeji", ArgType.DOUBLE),
            Argument("y", "New Y position for the shimeji", ArgType.DOUBLE),
            _JSON_OPT,
        ]),
        _cmd_alter,
    ),
    "dismiss": (
        lambda: ArgumentList([
            Argument("id", "ID of the shimeji to dismiss", ArgType.STRING, required=True),
            _SELECTOR_OPT,
        ]),
        _cmd_dismiss,
    ),
    "dismiss-all": (
        lambda: ArgumentList([_SELECTOR_OPT]),
        _cmd_dismiss_all,
    ),
}


def _general_usage(prog: str) -> str:
    return (
        f"Usage: {prog} [--quiet] <command> [options...]\n"
        f"   Possible commands are: {', '.join(COMMANDS)}\n"
    )


def run_cli(
    argv: Sequence[str],
    client: ApiClient | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Run one subcommand; ``argv[0]`` is the program name. Returns the exit code."""
    words = list(argv)
    prog = words[0] if words else PROG
    if len(words) > 2 and words[1] == "--quiet":
        words = [prog] + words[2:]
        out = err = io.StringIO()
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err

    entry = _COMMAND_TABLE.get(words[1]) if len(words) > 1 else None
    if entry is None:
        err.write(_general_usage(prog))
        return EXIT_FAILURE

    command = words[1]
    make_arguments, handler = entry
    arguments = make_arguments()
    try:
        opts = arguments.parse(words[2:])
    except UsageError:
        err.write(arguments.usage(prog, command))
        return EXIT_FAILURE

    ctx = _Context(client or ApiClient(), out, err, prog, command, arguments)
    try:
        return handler(opts, ctx)
    except ConnectionError:
        err.write(NOT_RUNNING + "\n")
    except (ApiError, UsageError) as ex:
        err.write(f"ERROR: {ex}\n")
    return EXIT_FAILURE


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the command; ``argv`` excludes the program name."""
    args = sys.argv[1:] if argv is None else list(argv)
    return run_cli([PROG, *args])