from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from csvigo.engine import Engine
from csvigo import config as CFG

app = Flask(__name__)
_engine: Engine | None = None

MAX_PAGE = 1000


def _text(b: bytes) -> str:
    return b.decode("utf-8", errors="replace")


def _error(msg: str, status: int):
    return jsonify({"error": msg}), status


def _row(i: int, *, fields: bool = False, sep: bytes = b","):
    off, ln = _engine.record(i)  # type: ignore
    row = {"line": i, "offset": off, "length": ln}
    if fields:
        row["fields"] = [_text(f) for f in _engine.fields(i, sep)]  # type: ignore
    else:
        row["text"] = _text(_engine.line(i))  # type: ignore
    return row

# ---------- API ----------
@app.get("/api/health")
def api_health():
    ready = _engine is not None and _engine.table is not None
    return jsonify({"ok": ready}), (200 if ready else 503)

@app.get("/api/stats")
def api_stats():
    if _engine is None or _engine.table is None:
        return _error("no file indexed", 503)
    return jsonify(_engine.stats())

@app.get("/api/line")
def api_line():
    if _engine is None or _engine.table is None:
        return _error("no file indexed", 503)
    i = request.args.get("i", type=int)
    if i is None:
        return _error("query parameter 'i' (integer) is required", 400)
    fields = request.args.get("fields", "0") in ("1", "true", "yes")
    sep = request.args.get("sep", ",", type=str)
    if not sep:
        return _error("separator must be non-empty", 400)
    try:
        return jsonify(_row(i, fields=fields, sep=sep.encode("utf-8")))
    except IndexError as exc:
        return _error(str(exc), 404)

@app.get("/api/lines")
def api_lines():
    if _engine is None or _engine.table is None:
        return _error("no file indexed", 503)
    start = request.args.get("start", 0, type=int)
    count = request.args.get("count", CFG.TOP_LINES, type=int)
    if start < 0 or count < 0:
        return _error("start and count must be non-negative", 400)
    n = len(_engine)
    stop = min(n, start + min(count, MAX_PAGE))
    return jsonify({"lines": n, "start": start, "rows": [_row(i) for i in range(start, stop)]})

# ---------- UI ----------
@app.get("/")
def home():
    # Minimal pager over /api/lines, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>csvigo • line viewer</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --border:#1c2530; --accent:#6ee7ff; }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink); font:15px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Arial; }
.container{ max-width:1080px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
h1{ font-size:20px; margin:0 0 8px 0 }
.controls{ display:flex; gap:10px; align-items:center; margin:10px 0; }
input{ width:110px; padding:8px 10px; border-radius:10px; border:1px solid var(--border); background:#0b1117; color:var(--ink); }
.btn{ padding:8px 12px; border-radius:10px; border:1px solid var(--border); background:#0b1117; color:var(--ink); cursor:pointer; }
.btn:hover{ border-color:var(--accent) }
.meta{ color:var(--muted); font-size:13px }
.row{ display:grid; grid-template-columns:6rem 7rem 5rem 1fr; gap:10px; padding:6px 10px; border-top:1px solid var(--border); }
.head{ color:var(--muted); font-weight:600 }
.mono{ font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace; white-space:pre; overflow:hidden; text-overflow:ellipsis }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>csvigo</h1>
      <div id="stats" class="meta">Loading…</div>
      <div class="controls">
        <span class="meta">Start</span><input id="start" type="number" min="0" value="0" />
        <span class="meta">Count</span><input id="count" type="number" min="1" max="1000" value="50" />
        <button id="prev" class="btn">Prev</button>
        <button id="next" class="btn">Next</button>
      </div>
      <div class="row head"><div>#</div><div>Offset</div><div>Length</div><div>Line</div></div>
      <div id="out"></div>
    </div>
  </div>
<script>
const $ = (s) => document.querySelector(s);
const esc = (s) => s.replace(/[&<>"]/g, (c) => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c]));
async function page(){
  const start = Math.max(0, parseInt($("#start").value || "0", 10));
  const count = Math.max(1, Math.min(1000, parseInt($("#count").value || "50", 10)));
  const resp = await fetch(`/api/lines?start=${start}&count=${count}`);
  const data = await resp.json();
  if(!resp.ok){ $("#out").textContent = data.error || `HTTP ${resp.status}`; return; }
  $("#stats").textContent = `${data.lines.toLocaleString()} lines`;
  $("#out").innerHTML = data.rows.map((r) => `
    <div class="row"><div class="mono">${r.line}</div><div class="mono">${r.offset}</div>
    <div class="mono">${r.length}</div><div class="mono">${esc(r.text)}</div></div>`).join("");
}
$("#prev").addEventListener("click", () => {
  $("#start").value = Math.max(0, parseInt($("#start").value, 10) - parseInt($("#count").value, 10)); page();
});
$("#next").addEventListener("click", () => {
  $("#start").value = parseInt($("#start").value, 10) + parseInt($("#count").value, 10); page();
});
$("#start").addEventListener("change", page);
$("#count").addEventListener("change", page);
page();
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask line viewer on top of Engine")
    ap.add_argument("path", help="File to index")
    ap.add_argument("--index", default=None, help="Persisted lookup table (.lix)")
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("--save", action="store_true", help="Persist the table after building")
    mode.add_argument("--load", action="store_true", help="Reuse a persisted table")
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    if args.load:
        _engine.load(args.path, index=args.index, verbose=args.verbose)
    else:
        index_out = None
        if args.save:
            index_out = args.index or f"{args.path}{CFG.LOOKUP_SUFFIX}"
        _engine.build(args.path, index_out=index_out, workers=args.workers, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
