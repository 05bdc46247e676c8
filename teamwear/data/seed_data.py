#!/usr/bin/env python3
"""
seed_data.py

Generates a small, realistic team-apparel dataset as CSVs under a local folder
(default: the configured data_dir), in the layout CsvDataAccess reads.

Entities:
- products, fabrics, pricing_tiers, bundles, designs
- teams, player_submissions, orders, order_items, contributions
- design_requests, design_request_apparel, roster_members

Run:
  python -m teamwear.data.seed_data --teams 3 --seed 42
"""

from __future__ import annotations

import argparse
import csv
import os
import random
import sys
from typing import Dict, List, Optional

from teamwear.config import get_config

# -----------------------------
# Catalogue
# -----------------------------

PRODUCTS = [
    # product_id, name, base price (CLP), type slug
    (1, "Camiseta Pro", 35000, "jersey"),
    (2, "Short Pro", 18000, "shorts"),
    (3, "Medias Pro", 6000, "socks"),
    (4, "Polerón Equipo", 42000, "jacket"),
]

# Products with their own tier rows; the rest fall back to discount bands
PRODUCT_TIERS = {
    1: [(1, 9, 35000), (10, 49, 28000), (50, None, 24000)],
    2: [(1, 9, 18000), (10, 49, 15000), (50, None, 12500)],
}

FABRICS = [
    ("deserve", "Deserve", 0, "100% poliéster", 140, 0),
    ("dryfit", "Dry-Fit Premium", 2500, "88% poliéster, 12% elastano", 160, 1),
    ("eco", "Eco Reciclado", 1500, "100% poliéster reciclado", 150, 2),
]

BUNDLES = [
    (1, "B1", "Kit Básico", "1:jersey;1:shorts;1:socks", 5),
    (5, "B5", "Kit Doble Camiseta", "2:jersey;1:shorts", 8),
]

SPORTS = ["futbol", "rugby", "basquetbol", "voleibol", "hockey"]
DESIGN_NAMES = ["Relámpago", "Cordillera", "Marea", "Fénix", "Volcán", "Aurora"]

FIRST_NAMES = ["Sofía", "Mateo", "Valentina", "Benjamín", "Isidora", "Agustín",
               "Florencia", "Tomás", "Emilia", "Vicente", "Josefa", "Martín"]
LAST_NAMES = ["González", "Muñoz", "Rojas", "Díaz", "Pérez", "Soto", "Contreras", "Silva"]
SIZES = ["XS", "S", "M", "M", "L", "L", "XL", "XXL"]
POSITIONS = ["arquero", "defensa", "mediocampo", "delantero"]
CONTRIBUTION_STATUSES = ["completed", "approved", "pending", "rejected"]
JERSEY_STYLES = ["player_name", "team_name", "none"]

# -----------------------------
# Generators
# -----------------------------

def gen_catalogue(rng: random.Random) -> Dict[str, List[Dict]]:
    products = [
        {"product_id": pid, "name": name, "base_price_cents": price,
         "product_type_slug": slug, "is_bundle": "false", "images": f"/img/{slug}.png"}
        for pid, name, price, slug in PRODUCTS
    ]
    tiers = [
        {"product_id": pid, "min_quantity": low, "max_quantity": "" if high is None else high,
         "price_per_unit_cents": price}
        for pid, rows in PRODUCT_TIERS.items()
        for low, high, price in rows
    ]
    fabrics = [
        {"fabric_id": fid, "name": name, "price_modifier_cents": modifier,
         "composition": composition, "gsm": gsm, "sort_order": order}
        for fid, name, modifier, composition, gsm, order in FABRICS
    ]
    bundles = [
        {"bundle_id": bid, "code": code, "name": name, "components": components, "discount_pct": pct}
        for bid, code, name, components, pct in BUNDLES
    ]
    designs = []
    for i, name in enumerate(DESIGN_NAMES, start=1):
        designs.append({
            "design_id": f"d{i:03d}",
            "name": name,
            "slug": name.lower(),
            "active": "true" if rng.random() > 0.2 else "false",
            "featured": "true" if rng.random() > 0.6 else "false",
            "sports": ";".join(rng.sample(SPORTS, rng.randint(0, 2))),
            "mockup_count": rng.choice(["", 1, 2, 4]),
        })
    return {"products": products, "pricing_tiers": tiers, "fabrics": fabrics,
            "bundles": bundles, "designs": designs}


def gen_team_data(rng: random.Random, n_teams: int) -> Dict[str, List[Dict]]:
    out: Dict[str, List[Dict]] = {k: [] for k in (
        "teams", "player_submissions", "orders", "order_items", "contributions",
        "design_requests", "design_request_apparel", "roster_members")}
    item_seq = 1
    contribution_seq = 1

    for t in range(1, n_teams + 1):
        team_id = f"team-{t}"
        team_name = f"Club Deportivo {rng.choice(LAST_NAMES)}"
        style = rng.choice(JERSEY_STYLES)
        out["teams"].append({
            "team_id": team_id, "name": team_name, "slug": f"club-{t}",
            "jersey_name_style": style,
            "jersey_team_name": team_name.upper() if style == "team_name" else "",
        })

        players = []
        for p in range(1, rng.randint(8, 14) + 1):
            players.append({
                "user_id": f"u-{t}-{p}",
                "player_name": f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
                "jersey_number": rng.randint(1, 99),
                # Roughly one in eight players has not submitted a size
                "size": "" if rng.random() < 0.125 else rng.choice(SIZES),
                "position": rng.choice(POSITIONS),
            })
        for player in players:
            out["player_submissions"].append({**player, "team_id": team_id})

        # Team order: one jersey and one pair of shorts per player
        order_id = f"ord-{t}"
        total = 0
        for pid, name, price, _ in PRODUCTS[:2]:
            for player in players:
                out["order_items"].append({
                    "item_id": f"it-{item_seq}", "order_id": order_id, "product_id": pid,
                    "product_name": name, "quantity": 1, "unit_price_cents": price,
                    "player_id": player["user_id"],
                    # Items usually carry no player details; submissions fill them in
                    "player_name": "", "jersey_number": "", "size": "", "position": "",
                    "images": f"/img/{pid}.png",
                })
                item_seq += 1
                total += price
        out["orders"].append({
            "order_id": order_id, "team_id": team_id, "order_number": f"ORD-{t:04d}",
            "status": "pending", "total_amount_cents": total,
        })
        for player in players:
            if rng.random() < 0.7:
                out["contributions"].append({
                    "contribution_id": f"c-{contribution_seq}", "order_id": order_id,
                    "user_id": player["user_id"], "amount_cents": total // len(players),
                    "status": rng.choice(CONTRIBUTION_STATUSES),
                })
                contribution_seq += 1

        # Design request: roster of members, some without an account
        out["design_requests"].append({
            "design_request_id": t, "team_id": team_id, "status": "pending",
            "jersey_name_style": "", "jersey_team_name": "",
        })
        for pid, name, price, _ in rng.sample(PRODUCTS, 2):
            out["design_request_apparel"].append({
                "design_request_id": t, "product_id": pid, "product_name": name,
                "unit_price_cents": price, "images": f"/img/{pid}.png",
            })
        for m, player in enumerate(players, start=1):
            out["roster_members"].append({
                "design_request_id": t, "member_id": f"m-{t}-{m}",
                "user_id": player["user_id"] if rng.random() < 0.6 else "",
                "player_name": player["player_name"], "jersey_number": player["jersey_number"],
                "size": player["size"], "position": player["position"],
                "payment_paid": rng.choice(["true", "false", ""]),
            })
    return out


# -----------------------------
# CSV writer
# -----------------------------

def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        for r in rows:
            w.writerow(r)


HEADERS = {
    "products": ["product_id", "name", "base_price_cents", "product_type_slug", "is_bundle", "images"],
    "pricing_tiers": ["product_id", "min_quantity", "max_quantity", "price_per_unit_cents"],
    "fabrics": ["fabric_id", "name", "price_modifier_cents", "composition", "gsm", "sort_order"],
    "bundles": ["bundle_id", "code", "name", "components", "discount_pct"],
    "designs": ["design_id", "name", "slug", "active", "featured", "sports", "mockup_count"],
    "teams": ["team_id", "name", "slug", "jersey_name_style", "jersey_team_name"],
    "player_submissions": ["user_id", "team_id", "player_name", "jersey_number", "size", "position"],
    "orders": ["order_id", "team_id", "order_number", "status", "total_amount_cents"],
    "order_items": ["item_id", "order_id", "product_id", "product_name", "quantity", "unit_price_cents",
                    "player_id", "player_name", "jersey_number", "size", "position", "images"],
    "contributions": ["contribution_id", "order_id", "user_id", "amount_cents", "status"],
    "design_requests": ["design_request_id", "team_id", "status", "jersey_name_style", "jersey_team_name"],
    "design_request_apparel": ["design_request_id", "product_id", "product_name", "unit_price_cents", "images"],
    "roster_members": ["design_request_id", "member_id", "user_id", "player_name", "jersey_number",
                       "size", "position", "payment_paid"],
}


def generate(output_dir: str, teams: int, seed: int) -> Dict[str, int]:
    """Write every table to `output_dir` and return row counts per table."""
    rng = random.Random(seed)
    os.makedirs(output_dir, exist_ok=True)

    tables = {**gen_catalogue(rng), **gen_team_data(rng, teams)}
    for name, rows in tables.items():
        write_csv(os.path.join(output_dir, f"{name}.csv"), rows, HEADERS[name])
    return {name: len(rows) for name, rows in tables.items()}


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate sample team-apparel data to CSVs.")
    parser.add_argument("--teams", type=int, default=config.default_seed_teams, help="Number of teams.")
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if CSVs already exist.")
    args = parser.parse_args(argv)

    if args.no_overwrite:
        for name in HEADERS:
            path = os.path.join(args.output_dir, f"{name}.csv")
            if os.path.exists(path):
                print(f"Refusing to overwrite existing file: {path}", file=sys.stderr)
                return 2

    counts = generate(args.output_dir, args.teams, args.seed)

    # simple summary
    print(f"Generated data in {args.output_dir}")
    print(" | ".join(f"{name}: {count}" for name, count in counts.items()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
