import json

import pytest

from chanfs.chan_parse import (
    Board,
    ParseError,
    Post,
    Thread,
    catalog_url,
    fetch_json,
    parse_board,
    parse_catalog,
    parse_post,
    parse_thread,
    parse_thread_json,
    thread_url,
)

CHAN = "https://chan.example.com"


def _post(no, **extra):
    obj = {"no": no, "time": 1000 + no}
    obj.update(extra)
    return obj


def test_catalog_url():
    assert catalog_url(CHAN, "lit") == "https://chan.example.com/lit/catalog.json"


def test_thread_url():
    assert thread_url(CHAN, "lit", 42) == "https://chan.example.com/lit/res/42.json"


def test_parse_post_all_fields():
    obj = _post(
        7,
        sub="subject",
        com="comment",
        name="Anonymous",
        tim="1234",
        filename="pic",
        ext=".png",
        trip="!trip",
        email="anon@example.com",
    )
    post = parse_post(obj)
    assert post == Post(
        no=7,
        timestamp=1007,
        sub="subject",
        com="comment",
        name="Anonymous",
        tim="1234",
        filename="pic",
        ext=".png",
        trip="!trip",
        email="anon@example.com",
    )


def test_parse_post_missing_and_non_string_fields_are_none():
    post = parse_post(_post(3, sub=None, tim=1234, com=["x"]))
    assert post.sub is None
    assert post.tim is None
    assert post.com is None
    assert post.no == 3


@pytest.mark.parametrize("missing", ["no", "time"])
def test_parse_post_requires_numbers(missing):
    obj = _post(1)
    del obj[missing]
    with pytest.raises(ParseError):
        parse_post(obj)


def test_parse_post_rejects_non_object():
    with pytest.raises(ParseError):
        parse_post([1, 2])


def test_parse_catalog_flattens_pages():
    catalog = [
        {"page": 0, "threads": [_post(1), _post(2)]},
        {"page": 1, "threads": [_post(3)]},
    ]
    board = parse_catalog(catalog)
    assert isinstance(board, Board)
    assert [p.no for p in board] == [1, 2, 3]
    assert len(board) == 3


def test_parse_catalog_empty():
    assert parse_catalog([]).threads == []


def test_parse_catalog_missing_threads():
    with pytest.raises(ParseError):
        parse_catalog([{"page": 0}])


def test_parse_catalog_not_a_container():
    with pytest.raises(ParseError):
        parse_catalog("nope")


def test_parse_thread_json_keeps_order():
    thread = parse_thread_json({"posts": [_post(10), _post(11), _post(12)]})
    assert isinstance(thread, Thread)
    assert [p.no for p in thread.posts] == [10, 11, 12]
    assert len(thread) == 3


def test_parse_thread_json_missing_posts():
    with pytest.raises(ParseError):
        parse_thread_json({"replies": []})


def test_parse_board_uses_catalog_url():
    seen = []

    def fetch(url):
        seen.append(url)
        return [{"threads": [_post(5, sub="hello")]}]

    board = parse_board("lit", CHAN, fetch)
    assert seen == [catalog_url(CHAN, "lit")]
    assert board.threads[0].sub == "hello"


def test_parse_thread_uses_thread_url():
    seen = []

    def fetch(url):
        seen.append(url)
        return {"posts": [_post(9), _post(10, com="reply")]}

    thread = parse_thread("lit", 9, CHAN, fetch)
    assert seen == [thread_url(CHAN, "lit", 9)]
    assert thread.posts[1].com == "reply"


def test_fetch_json_reads_file(tmp_path):
    data = {"posts": [_post(1)]}
    path = tmp_path / "thread.json"
    path.write_text(json.dumps(data))
    assert fetch_json(path.as_uri()) == data


def test_fetch_json_invalid(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(ParseError):
        fetch_json(path.as_uri())