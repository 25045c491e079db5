from __future__ import annotations
import argparse
import logging
from flask import Flask, request, jsonify, Response
from fuzzycomplete.engine import SearchEngine
from fuzzycomplete.loader import load_terms
from fuzzycomplete.DB.api import make_store
from fuzzycomplete import config as CFG

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: SearchEngine | None = None


def _require_engine() -> SearchEngine:
    if _engine is None:
        raise RuntimeError("No engine attached. Set fuzzycomplete_web.web._engine or run main().")
    return _engine


def _text_from_body():
    body = request.get_json(silent=True) or {}
    text = body.get("text")
    if not isinstance(text, str) or not text:
        return None
    return text


# ---------- API ----------
@app.get("/health")
def health():
    eng = _engine
    return jsonify({"ok": eng is not None, "candidates": len(eng) if eng else 0})


@app.get("/api/search")
def api_search():
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", CFG.TOP_K, type=int)
    rows = _require_engine().search_scored(q, k)
    return jsonify([
        {"text": r.text, "score": r.score, "key": None if r.key is None else str(r.key)}
        for r in rows
    ])


@app.post("/api/select")
def api_select():
    text = _text_from_body()
    if text is None:
        return jsonify({"error": "missing 'text'"}), 400
    u = _require_engine().record_selection(text)
    return jsonify({"text": text, "use_count": u.use_count, "session_count": u.session_count})


@app.post("/api/favorite")
def api_favorite():
    text = _text_from_body()
    if text is None:
        return jsonify({"error": "missing 'text'"}), 400
    u = _require_engine().toggle_favorite(text)
    return jsonify({"text": text, "favorited": u.favorited})


@app.post("/api/save")
def api_save():
    n = _require_engine().save_usage()
    return jsonify({"saved": n})


# ---------- UI ----------
_PAGE = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Fuzzy Autocomplete</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff; --border:#1c2530; }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink); font:16px/1.45 system-ui,sans-serif; }
.container{ max-width:760px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
h1{ font-size:20px; margin:0 0 12px 0; }
input{ width:100%; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); font-size:16px; outline:none; }
input:focus{ border-color:var(--accent) }
ul{ list-style:none; margin:14px 0 0 0; padding:0; }
li{ display:flex; gap:12px; align-items:center; padding:10px 12px; border-top:1px solid var(--border); cursor:pointer; }
li:hover{ background:#0d131a }
.score{ color:var(--muted); width:4rem; font-variant-numeric:tabular-nums }
.fav{ margin-left:auto; color:var(--muted); background:none; border:none; cursor:pointer; font-size:18px }
.meta{ color:var(--muted); font-size:13px; margin-top:6px }
</style>
</head>
<body>
<div class="container"><div class="card">
  <h1>Fuzzy Autocomplete</h1>
  <input id="q" type="text" placeholder="Type to search..." autocomplete="off" autofocus />
  <div id="stats" class="meta">Click a result to record a selection, the star toggles a favorite.</div>
  <ul id="out"></ul>
</div></div>
<script>
const q = document.querySelector("#q"), out = document.querySelector("#out"), stats = document.querySelector("#stats");
let t;
async function post(path, text){
  await fetch(path, {method:"POST", headers:{"Content-Type":"application/json"}, body:JSON.stringify({text})});
}
async function search(){
  const resp = await fetch(`/api/search?q=${encodeURIComponent(q.value)}&k=10`);
  const rows = await resp.json();
  stats.textContent = `Results: ${rows.length}`;
  out.innerHTML = "";
  for(const r of rows){
    const li = document.createElement("li");
    li.innerHTML = `<span class="score">${r.score}</span><span></span><button class="fav">&#9733;</button>`;
    li.children[1].textContent = r.text;
    li.addEventListener("click", async ()=>{ await post("/api/select", r.text); search(); });
    li.children[2].addEventListener("click", async (ev)=>{ ev.stopPropagation(); await post("/api/favorite", r.text); search(); });
    out.appendChild(li);
  }
}
q.addEventListener("input", ()=>{ clearTimeout(t); t = setTimeout(search, 150); });
</script>
</body>
</html>
"""


@app.get("/")
def home():
    return Response(_PAGE, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of SearchEngine")
    ap.add_argument("--roots", nargs="+", default=[])
    ap.add_argument("--db", dest="db", default=CFG.DEFAULT_STORE_DSN)  # DSN: "sqlite:///path" or "memory://"
    ap.add_argument("--with-source", action="store_true")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if not args.roots:
        ap.error("--roots is required")
    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    global _engine
    _engine = SearchEngine(make_store(args.db))
    _engine.load(load_terms(args.roots, with_source=args.with_source))
    log.info("Serving %d candidates on %s:%d", len(_engine), args.host, args.port)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.save_usage()
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
