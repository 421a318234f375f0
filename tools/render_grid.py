#!/usr/bin/env python3
# Render generated levels (or TSV dumps from bhtool.py) to PNGs using Pillow.
# Works with tile images named "bone.png", "mud.png", ... under assets/images.

import argparse, os, random
from PIL import Image, ImageDraw, ImageFont

from bonehunt.config import config_from_env
from bonehunt.mapgen.generator import generate_level
from bonehunt.tiles import GLYPHS, Tile

ASSET_DIR = os.path.join("assets", "images")

GLYPH_TO_TILE = {g: t for t, g in GLYPHS.items()}

def read_tsv(path):
    rows = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.rstrip("\n")
            if not line:
                continue
            rows.append([GLYPH_TO_TILE[c] for c in line.split("\t")])
    if not rows or any(len(r) != len(rows[0]) for r in rows):
        raise SystemExit(f"{path}: expected a rectangular grid.")
    return rows

def _fallback_color(tile):
    if tile == Tile.BONE:
        return (250, 245, 225, 255)
    if tile == Tile.MUD:
        return (110, 80, 40, 255)
    return (255, 255, 255, 255)

def tile_image(tile, tile_size):
    name = Tile(tile).name.lower()
    for p in (os.path.join(ASSET_DIR, "tiles", f"{name}.png"), os.path.join(ASSET_DIR, f"{name}.png")):
        if os.path.exists(p):
            img = Image.open(p).convert("RGBA")
            if img.size != (tile_size, tile_size):
                img = img.resize((tile_size, tile_size), Image.NEAREST)
            return img
    # Fallback: coloured tile with its glyph
    img = Image.new("RGBA", (tile_size, tile_size), color=_fallback_color(tile))
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, tile_size - 1, tile_size - 1), outline=(120, 90, 60, 255))
    font = ImageFont.load_default()
    text = GLYPHS[Tile(tile)]
    tw, th = draw.textlength(text, font=font), 8
    draw.text(((tile_size - tw) / 2, (tile_size - th) / 2), text, fill=(0, 0, 0, 255), font=font)
    return img

def render_rows(rows, out_png, tile_size=24, margin=0):
    h, w = len(rows), len(rows[0])
    canvas = Image.new("RGBA", (w * tile_size + 2*margin, h * tile_size + 2*margin), (0, 0, 0, 0))
    for y in range(h):
        for x in range(w):
            img = tile_image(rows[y][x], tile_size)
            x0 = margin + x * tile_size
            y0 = margin + y * tile_size
            canvas.paste(img, (x0, y0, x0 + tile_size, y0 + tile_size), img)
    out_dir = os.path.dirname(out_png)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    canvas.save(out_png)

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--levels", type=str, default="1-10", help="Level range, e.g. 1-10 or 7")
    ap.add_argument("--seed", type=int, default=None, help="Seed for reproducible layouts")
    ap.add_argument("--tsv", type=str, default=None, help="Render this TSV instead of generating")
    ap.add_argument("--outdir", type=str, default="out/png", help="Where to write PNGs")
    ap.add_argument("--tile", type=int, default=24, help="Tile size in pixels")
    args = ap.parse_args()

    if args.tsv:
        png = os.path.join(args.outdir, os.path.splitext(os.path.basename(args.tsv))[0] + ".png")
        render_rows(read_tsv(args.tsv), png, tile_size=args.tile)
        print(f"Wrote {png}")
        return

    config = config_from_env()
    lo, _, hi = args.levels.partition("-")
    rng = random.Random(args.seed)
    for lvl in range(int(lo), int(hi or lo) + 1):
        grid = generate_level(lvl, config, rng)
        render_rows(grid.rows, os.path.join(args.outdir, f"{lvl:02d}.png"), tile_size=args.tile)
    print(f"Wrote PNGs to {args.outdir}")

if __name__ == "__main__":
    main()
