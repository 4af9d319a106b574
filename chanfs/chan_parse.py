"""Fetching and parsing of imageboard catalog and thread JSON."""

from __future__ import annotations

import json
import urllib.request
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

USER_AGENT = "libcurl-agent/1.0"

_STRING_FIELDS = ("sub", "com", "name", "tim", "filename", "ext", "trip", "email")

Fetcher = Callable[[str], Any]


class ParseError(ValueError):
    """Raised when fetched JSON does not have the expected shape."""


@dataclass
class Post:
    """A single post: a thread's opening post or one of its replies."""

    no: int
    timestamp: int
    sub: str | None = None
    com: str | None = None
    name: str | None = None
    tim: str | None = None
    filename: str | None = None
    ext: str | None = None
    trip: str | None = None
    email: str | None = None


@dataclass
class Board:
    """The opening posts of every thread in a board's catalog."""

    threads: list[Post] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.threads)

    def __iter__(self) -> Iterator[Post]:
        return iter(self.threads)


@dataclass
class Thread:
    """All posts of a thread, the opening post first."""

    posts: list[Post] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self.posts)


def catalog_url(chan_url: str, board: str) -> str:
    """Return the URL of a board's catalog JSON."""
    return f"{chan_url}/{board}/catalog.json"


def thread_url(chan_url: str, board: str, thread_op_no: int) -> str:
    """Return the URL of a thread's JSON."""
    return f"{chan_url}/{board}/res/{int(thread_op_no)}.json"


def fetch_json(url: str) -> Any:
    """Download ``url`` and decode its body as JSON."""
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    with urllib.request.urlopen(request) as response:
        body = response.read()
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(f"invalid JSON from {url}: {exc}") from exc


def _require_int(obj: dict, key: str) -> int:
    value = obj.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"post is missing numeric field {key!r}")
    return int(value)


def parse_post(obj: Any) -> Post:
    """Build a Post from one post object of the JSON API."""
    if not isinstance(obj, dict):
        raise ParseError("post is not a JSON object")
    strings = {
        key: obj[key] for key in _STRING_FIELDS if isinstance(obj.get(key), str)
    }
    return Post(
        no=_require_int(obj, "no"),
        timestamp=_require_int(obj, "time"),
        **strings,
    )


def _members(value: Any) -> Iterable[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return value.values()
    raise ParseError("catalog is not a JSON array or object")


def parse_catalog(catalog: Any) -> Board:
    """Collect the opening posts from every page of a catalog."""
    threads: list[Post] = []
    for page in _members(catalog):
        thread_list = page.get("threads") if isinstance(page, dict) else None
        if not isinstance(thread_list, list):
            raise ParseError("could not find thread array")
        threads.extend(parse_post(op) for op in thread_list)
    return Board(threads)


def parse_thread_json(thread: Any) -> Thread:
    """Parse the posts of a thread document."""
    posts = thread.get("posts") if isinstance(thread, dict) else None
    if not isinstance(posts, list):
        raise ParseError("could not find post array")
    return Thread([parse_post(post) for post in posts])


def parse_board(board: str, chan_url: str, fetch: Fetcher = fetch_json) -> Board:
    """Fetch and parse the catalog of ``board``."""
    return parse_catalog(fetch(catalog_url(chan_url, board)))


def parse_thread(
    board: str, thread_op_no: int, chan_url: str, fetch: Fetcher = fetch_json
) -> Thread:
    """Fetch and parse thread ``thread_op_no`` of ``board``."""
    return parse_thread_json(fetch(thread_url(chan_url, board, thread_op_no)))