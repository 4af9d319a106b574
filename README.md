# chanfs

chanfs builds an in-memory directory tree from an imageboard board. It reads
the board's JSON catalog (`<chan_url>/<board>/catalog.json`) and the JSON of
each thread (`<chan_url>/<board>/res/<number>.json`). You can then browse the
tree with filesystem-style operations: `getattr`, `readdir` and `read`.

## Layout of the tree

```
/
├── <thread subject, at most 20 characters, "/" replaced by "#">/
│   ├── Thread.txt
│   ├── File
│   ├── <reply number>/
│   │   └── Post.txt
│   └── <tim><ext>          (one per reply that has both tim and ext)
└── ...
```

A thread without a subject gets a directory named after the start of its
comment. A thread with neither a subject nor a comment gets a directory named
`No Subject`. The opening post of each thread is not listed as a reply.

Every directory has mode `S_IFDIR | 0o777` and a link count of 2. Every file
has mode `S_IFREG | 0o777` and a link count of 1. Owner and group are those of
the current process (0 where the platform has no uid or gid). Times come from
the post timestamps. The root directory takes the time at which it was built.

## Usage

```python
from chanfs.tree import generate_fs
from chanfs.operations import ChanFS

root = generate_fs("lit", "https://imageboard.example")
fs = ChanFS(root)

print(fs.readdir("/"))          # ['.', '..', 'Some thread', ...]
print(fs.getattr("/"))          # {'st_mode': ..., 'st_nlink': 2, ...}
data = fs.read("/Some thread/Thread.txt", 4096, 0)
```

`ChanFS` provides the following:

* `traverse(path)` returns the `ChanDir` or `ChanFile` node at a slash-separated path.
* `getattr(path)` returns a dict with `st_mode`, `st_nlink`, `st_uid`, `st_gid`, `st_atime`, `st_mtime` and `st_size`.
* `readdir(path)` returns `"."`, `".."` and then the children in the order they were added.
* `read(path, size, offset)` returns at most `size` bytes starting at `offset`. It stops early at a NUL byte.

### Building from local data

`parse_catalog` and `parse_thread_json` in `chanfs.chan_parse` take JSON that has
already been decoded. `chanfs.tree.build_tree` takes the opening posts of the
threads and a callable that returns the full `Thread` for a post number. With
these you can build a tree without network access:

```python
from chanfs.chan_parse import parse_catalog, parse_thread_json
from chanfs.tree import build_tree

board = parse_catalog(catalog_json)
root = build_tree(board.threads, lambda no: parse_thread_json(threads_json[no]))
```

`parse_board(board, chan_url, fetch)` and `parse_thread(board, thread_op_no,
chan_url, fetch)` take an optional `fetch` callable. It receives a URL and
returns decoded JSON. By default they use `fetch_json`, which downloads the URL
with `urllib` and decodes the body.

### Errors

* Malformed catalog or thread JSON raises `ParseError`, a subclass of `ValueError`. This covers a missing thread or post array, a post that is not an object, and a missing numeric `no` or `time`.
* A path that does not exist raises `FileNotFoundError`. So does a path that passes through a file.
* `readdir` on a file raises `NotADirectoryError`.
* `read` on a directory raises `IsADirectoryError`.
* `read` with an offset past the end of a file raises `OSError` with `errno.EINVAL`.
* Network failures in `fetch_json` are passed on as raised by `urllib`.

## What it does not do

* It has no command-line program.
* It does not mount the tree in the operating system. `ChanFS` only answers calls made from Python.
* Files in the tree carry no content yet. Each file has size 0 and empty contents, so `read` returns `b""`.
* The tree is built once. It does not refresh when the board changes.

## Tests

```
pip install .[test]
pytest
```