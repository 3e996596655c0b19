from __future__ import annotations
import argparse, json, sys
from typing import List

from . import config as CFG
from .engine import Engine, default_index_path
from .errors import LineIndexError


def _decode(b: bytes) -> str:
    # display only; the index itself never decodes
    return b.decode("utf-8", errors="replace")


def _parse_sep(raw: str) -> bytes:
    if raw in ("\\t", "tab"):
        return b"\t"
    return raw.encode("utf-8")


def _rows(eng: Engine, ids: List[int], sep: bytes | None) -> list[dict]:
    rows = []
    for i in ids:
        off, ln = eng.record(i)
        row = {"line": i, "offset": off, "length": ln}
        if sep is not None:
            row["fields"] = [_decode(f) for f in eng.fields(i, sep)]
        else:
            row["text"] = _decode(eng.line(i))
        rows.append(row)
    return rows


def _print_table(rows: list[dict]) -> None:
    if not rows:
        print("(no lines)"); return
    print("#        Offset      Length   Line")
    for r in rows:
        body = " | ".join(r["fields"]) if "fields" in r else r["text"]
        print(f"{r['line']:<8} {r['offset']:<11} {r['length']:<8} {body}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="csvigo", description="Build or load a line index and print lines")
    p.add_argument("path", help="File to index")
    p.add_argument("--index", default=None, help=f"Lookup table path (default: FILE{CFG.LOOKUP_SUFFIX})")
    g = p.add_mutually_exclusive_group()
    g.add_argument("--save", action="store_true", help="Persist the table after building")
    g.add_argument("--load", action="store_true", help="Reuse a persisted table instead of scanning")
    p.add_argument("--line", type=int, nargs="+", default=None, help="Line numbers to print (0-based)")
    p.add_argument("--head", type=int, default=CFG.TOP_LINES, help="Print the first K lines")
    p.add_argument("--fields", action="store_true", help="Split lines on --sep")
    p.add_argument("--sep", default=",", help="Field separator for --fields")
    p.add_argument("--workers", type=int, default=None, help="Threads for the counting pass")
    p.add_argument("--no-mmap", action="store_true", help="Read the file instead of mapping it")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if args.workers is not None and args.workers < 1:
        p.error("--workers must be >= 1")
    use_mmap = False if args.no_mmap else None
    sep = _parse_sep(args.sep) if args.fields else None

    eng = Engine()
    try:
        if args.load:
            eng.load(args.path, index=args.index, use_mmap=use_mmap, verbose=args.verbose)
        else:
            index_out = (args.index or default_index_path(args.path)) if args.save else None
            eng.build(args.path, index_out=index_out, workers=args.workers,
                      use_mmap=use_mmap, verbose=args.verbose)

        n = len(eng)
        if args.line is not None:
            ids = args.line
        else:
            ids = list(range(min(max(0, args.head), n)))

        rows = _rows(eng, ids, sep)
        if args.json:
            print(json.dumps({"lines": n, "rows": rows}, ensure_ascii=False, indent=2))
        else:
            print(f"{eng.stats()['path']}: {n:,} lines")
            _print_table(rows)
        return 0
    except (LineIndexError, FileNotFoundError, IndexError) as exc:
        print(f"csvigo: error: {exc}", file=sys.stderr)
        return 1
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
