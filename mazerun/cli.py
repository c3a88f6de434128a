# mazerun/cli.py
from __future__ import annotations
import argparse, csv, logging, os, os.path, sys
from typing import List, Optional, Tuple

from .engine import STRATEGIES
from .errors import ConfigurationError
from .grid import Grid
from .planners import RunStats, run_all, solve
from .viz import draw_grid_png


def format_stats(name: str, s: RunStats) -> str:
    return (f"{name:8s} | found={s.found!s:5s} | steps={s.steps:6d} | "
            f"route={s.path_length:5d} | visited={len(s.visited):6d} | "
            f"time={s.elapsed_sec*1000:7.1f} ms")


def _save_png(grid: Grid, stats: RunStats, out_dir: str, tag: str) -> None:
    draw_grid_png(grid, stats.path, stats.visited, os.path.join(out_dir, f"{tag}_{stats.strategy}.png"))


def run_all_algs(grid: Grid, out_dir: Optional[str] = None, base_tag: str = "run",
                 tie_break: str = "larger_g") -> List[Tuple[str, RunStats]]:
    results = run_all(grid, tie_break=tie_break)
    if out_dir:
        for _, stats in results:
            _save_png(grid, stats, out_dir, base_tag)
    return results

# -------- subcommands --------

def cmd_gen(args: argparse.Namespace) -> None:
    os.makedirs(args.out, exist_ok=True)
    for i in range(args.count):
        grid = Grid.random(rows=args.size, p_blocked=args.p, teleport_pairs=args.teleports,
                           seed=(args.seed + i) if args.seed is not None else None)
        path = os.path.join(args.out, f"maze_{i:03d}.txt")
        grid.save(path)
        print("wrote", path)


def cmd_solve(args: argparse.Namespace) -> None:
    grid = Grid.load(args.maze)
    names = STRATEGIES if args.algo == "all" else (args.algo,)
    tag = os.path.splitext(os.path.basename(args.maze))[0]
    for name in names:
        stats = solve(grid, name, tie_break=args.tie_break)
        print(format_stats(name, stats))
        if args.show_route and stats.found:
            print("  route:", " -> ".join(f"{r},{c}" for r, c in stats.path))
        if args.out:
            _save_png(grid, stats, args.out, tag)


def cmd_bench(args: argparse.Namespace) -> None:
    mazes = sorted(p for p in os.listdir(args.mazedir) if p.endswith(".txt"))
    rows = []
    for fname in mazes:
        grid = Grid.load(os.path.join(args.mazedir, fname))
        base = os.path.splitext(fname)[0]
        results = run_all_algs(grid, out_dir=args.out or None, base_tag=base, tie_break=args.tie_break)
        for name, st in results:
            print(f"{fname} :: {format_stats(name, st)}")
            rows.append({
                "maze": fname,
                "alg": name,
                "found": st.found,
                "steps": st.steps,
                "route": st.path_length,
                "visited": len(st.visited),
                "time_sec": round(st.elapsed_sec, 6),
            })
    if args.csv and rows:
        with open(args.csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
        print("wrote CSV:", args.csv)


def cmd_view(args: argparse.Namespace) -> None:
    from .pygame_viewer import launch  # needs a display

    env_files = []
    if os.path.isdir(args.mazedir):
        env_files = sorted(f for f in os.listdir(args.mazedir) if f.endswith(".txt"))
    env_index = -1
    if args.maze:
        grid = Grid.load(args.maze)
    elif env_files:
        env_index = 0
        grid = Grid.load(os.path.join(args.mazedir, env_files[0]))
    else:
        grid = Grid.random(rows=args.size, p_blocked=args.p, teleport_pairs=args.teleports)
    launch(grid, cell_size=args.cell, fps=args.fps, delay_ms=args.delay,
           fullscreen=args.fullscreen, env_dir=args.mazedir, env_index=env_index)


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Grid maze search (DFS, BFS, A*, Greedy) with teleports")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("gen", help="generate random mazes")
    g.add_argument("--count", type=int, default=10)
    g.add_argument("--size", type=int, default=31)
    g.add_argument("--p", type=float, default=0.30)
    g.add_argument("--teleports", type=int, default=0, help="number of teleport pairs")
    g.add_argument("--out", type=str, default="mazes")
    g.add_argument("--seed", type=int, default=None)
    g.set_defaults(func=cmd_gen)

    s = sub.add_parser("solve", help="run one or all strategies on a maze")
    s.add_argument("--maze", type=str, required=True)
    s.add_argument("--algo", choices=STRATEGIES + ("all",), default="all")
    s.add_argument("--tie-break", choices=("larger_g", "smaller_g"), default="larger_g")
    s.add_argument("--show-route", action="store_true")
    s.add_argument("--out", type=str, default="", help="directory for PNG renders")
    s.set_defaults(func=cmd_solve)

    b = sub.add_parser("bench", help="run all strategies on every .txt in a folder")
    b.add_argument("--mazedir", type=str, required=True)
    b.add_argument("--tie-break", choices=("larger_g", "smaller_g"), default="larger_g")
    b.add_argument("--out", type=str, default="")
    b.add_argument("--csv", type=str, default="")
    b.set_defaults(func=cmd_bench)

    w = sub.add_parser("view", help="animate searches in a pygame window")
    w.add_argument("--maze", type=str, default=None)
    w.add_argument("--mazedir", type=str, default="mazes", help="mazes to cycle through with [ and ]")
    w.add_argument("--size", type=int, default=31, help="grid size when generating a random maze")
    w.add_argument("--p", type=float, default=0.30)
    w.add_argument("--teleports", type=int, default=2)
    w.add_argument("--cell", type=int, default=24, help="cell size in pixels")
    w.add_argument("--fps", type=int, default=60)
    w.add_argument("--delay", type=int, default=30, help="milliseconds between search steps")
    w.add_argument("--fullscreen", action="store_true")
    w.set_defaults(func=cmd_view)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
