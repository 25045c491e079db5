from __future__ import annotations
import argparse, json, logging, os, sys
from .engine import SearchEngine
from .loader import load_terms
from .normalize import normalize
from .DB.api import make_store
from . import config as CFG

def _supports_color() -> bool:
    return sys.stdout.isatty() and os.environ.get("NO_COLOR", "") == ""

CSI = "\033["
def _c(text: str, code: str) -> str:
    if not _supports_color(): return text
    return f"{CSI}{code}m{text}{CSI}0m"

def _print_table(rows) -> None:
    if not rows:
        print(_c("(no matches)", "2;37")); return
    print(_c("#  Score  Key                        Text", "1;37"))
    for i, r in enumerate(rows, 1):
        key = "" if r.key is None else str(r.key)
        key = (key[:24] + "..") if len(key) > 26 else key
        print(f"{i:<2} {r.score:<6} {key:<26} {r.text}")

def _handle_command(eng: SearchEngine, cmd: str, arg: str) -> bool:
    """REPL ':' commands. Returns False for an unknown command."""
    if cmd == ":select" and arg:
        u = eng.record_selection(arg)
        print(_c(f"(selected {u.normalized_name!r}: uses={u.use_count})", "2;36"))
    elif cmd == ":fav" and arg:
        u = eng.toggle_favorite(arg)
        print(_c(f"(favorite {u.normalized_name!r}: {u.favorited})", "2;36"))
    elif cmd == ":save":
        n = eng.save_usage()
        print(_c(f"(saved {n} usage records)", "2;36"))
    else:
        return False
    return True

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Fuzzy autocomplete CLI")
    p.add_argument("--roots", nargs="+", default=[], help="Files/folders with one candidate per line (.txt)")
    p.add_argument("--terms", nargs="+", default=[], help="Inline candidates")
    p.add_argument("--db", default=CFG.DEFAULT_STORE_DSN, help='Usage store DSN: "memory://" or "sqlite:///path"')
    p.add_argument("-k", type=int, default=CFG.TOP_K, help="Max results")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--repl", action="store_true", help="Interactive loop after loading")
    p.add_argument("--with-source", action="store_true", help="Use file:line as candidate key")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--echo", action="store_true", help="Echo normalized query as [query] '...'")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    if not args.roots and not args.terms:
        p.error("at least one of --roots or --terms is required")
    if args.q is None and not args.repl:
        p.error("nothing to do: pass --q and/or --repl")

    try:
        store = make_store(args.db)
    except ValueError as exc:
        p.error(str(exc))

    eng = SearchEngine(store)
    try:
        items = load_terms(args.roots, with_source=args.with_source) if args.roots else []
        eng.load(items + list(args.terms))

        def run_query(q: str) -> None:
            if args.echo:
                print(f"[query] {normalize(q)!r}")
            rows = eng.search_scored(q, args.k)
            if args.json:
                print(json.dumps([{"text": r.text, "score": r.score, "key": r.key} for r in rows],
                                 ensure_ascii=False, indent=2, default=str))
            else:
                _print_table(rows)

        if args.q is not None:
            run_query(args.q)

        if args.repl:
            print("Type a query and press Enter (empty line to exit).")
            print(_c("Commands: :select <text>, :fav <text>, :save", "2;37"))
            while True:
                try:
                    raw = input("> ")
                except (EOFError, KeyboardInterrupt):
                    print(); break
                if not raw.strip():
                    break
                if raw.startswith(":"):
                    cmd, _, arg = raw.strip().partition(" ")
                    if not _handle_command(eng, cmd.lower(), arg.strip()):
                        print(_c(f"(unknown command {cmd})", "2;31"))
                    continue
                run_query(raw)
        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
