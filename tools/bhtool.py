#!/usr/bin/env python3
import argparse, csv, random
from bonehunt.config import config_from_env, load_config
from bonehunt.mapgen.generator import generate_level
from bonehunt.mapgen.levels import level_config
from bonehunt.tiles import GLYPHS

def write_tsv(rows, path):
    with open(path, 'w', newline='') as f:
        w = csv.writer(f, delimiter='\t')
        for r in rows:
            w.writerow([GLYPHS[t] for t in r])

def _config(args):
    return load_config(args.config) if args.config else config_from_env()

def cmd_emit(args):
    rows = generate_level(args.level, _config(args), random.Random(args.seed)).rows
    write_tsv(rows, args.out)
    print(f"Wrote {args.out}")

def cmd_table(args):
    cfg = _config(args)
    last = args.last or cfg.max_level
    print("level\tsize\tbones\tmud\ttime")
    for lvl in range(1, last + 1):
        lc = level_config(lvl, cfg)
        print(f"{lvl}\t{lc.width}x{lc.height}\t{lc.bone_count}\t{lc.mud_count}\t{lc.time_budget_seconds}")

def main():
    p = argparse.ArgumentParser()
    p.add_argument('--config', type=str, default=None)
    sub = p.add_subparsers(dest='cmd', required=True)
    p1 = sub.add_parser('emit')
    p1.add_argument('--level', type=int, required=True)
    p1.add_argument('--seed', type=int, default=None)
    p1.add_argument('--out', type=str, required=True)
    p1.set_defaults(func=cmd_emit)
    p2 = sub.add_parser('table')
    p2.add_argument('--last', type=int, default=None)
    p2.set_defaults(func=cmd_table)
    args = p.parse_args()
    args.func(args)

if __name__ == '__main__':
    main()
