from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from ..interface import DataAccess
from ..models import (
    ApparelSelection, Bundle, BundleComponent, Design, DesignRequest, DesignRequestRosterRow,
    FabricOption, OrderHeader, OrderLineItem, PaymentContribution, PlayerInfoSubmission,
    PricingTier, Product, Team,
)
from ...config import get_config
from ...logging import get_logger

logger = get_logger(__name__)

REQUIRED_FILES = ["products.csv", "fabrics.csv"]
OPTIONAL_FILES = {
    "pricing_tiers": "pricing_tiers.csv",
    "bundles": "bundles.csv",
    "designs": "designs.csv",
    "orders": "orders.csv",
    "order_items": "order_items.csv",
    "contributions": "contributions.csv",
    "teams": "teams.csv",
    "player_submissions": "player_submissions.csv",
    "design_requests": "design_requests.csv",
    "design_request_apparel": "design_request_apparel.csv",
    "roster_members": "roster_members.csv",
}


@dataclass
class _Tables:
    products: pd.DataFrame
    fabrics: pd.DataFrame
    pricing_tiers: pd.DataFrame
    bundles: pd.DataFrame
    designs: pd.DataFrame
    orders: pd.DataFrame
    order_items: pd.DataFrame
    contributions: pd.DataFrame
    teams: pd.DataFrame
    player_submissions: pd.DataFrame
    design_requests: pd.DataFrame
    design_request_apparel: pd.DataFrame
    roster_members: pd.DataFrame


def _split_list(value: Optional[str]) -> List[str]:
    """';'-separated cell -> list of non-blank items."""
    if not value:
        return []
    return [part.strip() for part in value.split(";") if part.strip()]


def _parse_components(value: Optional[str]) -> List[BundleComponent]:
    """'2:jersey;1:shorts' -> [BundleComponent(2, jersey), BundleComponent(1, shorts)]"""
    components = []
    for part in _split_list(value):
        qty, _, type_slug = part.partition(":")
        components.append(BundleComponent(quantity=int(qty), type_slug=type_slug.strip()))
    return components


def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """DataFrame rows as dicts, with empty cells as None."""
    if df.empty:
        return []
    return [
        {k: (None if v == "" else v) for k, v in row.items()}
        for row in df.to_dict(orient="records")
    ]


class CsvDataAccess(DataAccess):
    """
    CSV-backed implementation.
    - Loads CSVs from `data_dir` once at construction, every column as text
      (so jersey numbers like "07" and the "N/A" size survive untouched).
    - Every method call performs a fresh filter pass over the loaded frames
      and returns new model instances.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            config = get_config()
            data_dir = config.data_dir

        self.data_dir = Path(data_dir)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            if repo_root:
                self.data_dir = repo_root / self.data_dir
            else:
                self.data_dir = current / self.data_dir

        self._tables = self._load_tables(self.data_dir)

    # ---------- loading helpers ----------

    @staticmethod
    def _read(path: Path) -> pd.DataFrame:
        return pd.read_csv(path, dtype=str, keep_default_na=False)

    @staticmethod
    def _load_tables(data_dir: Path) -> _Tables:
        if not data_dir.exists():
            raise FileNotFoundError(
                f"Data directory not found: {data_dir}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m teamwear.data.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )

        missing_files = [f for f in REQUIRED_FILES if not (data_dir / f).exists()]
        if missing_files:
            raise FileNotFoundError(
                f"Required CSV files missing in {data_dir}:\n"
                f"  Missing: {', '.join(missing_files)}\n"
                f"  Expected files: {', '.join(REQUIRED_FILES)}\n\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m teamwear.data.seed_data\n"
                f"  2. Ensure your data directory contains all required CSV files"
            )

        try:
            frames = {
                "products": CsvDataAccess._read(data_dir / "products.csv"),
                "fabrics": CsvDataAccess._read(data_dir / "fabrics.csv"),
            }
            # Optional tables load as empty frames when absent
            for key, filename in OPTIONAL_FILES.items():
                path = data_dir / filename
                frames[key] = CsvDataAccess._read(path) if path.exists() else pd.DataFrame()
        except Exception as e:
            raise RuntimeError(
                f"Error reading CSV files from {data_dir}: {e}\n"
                f"Please check that the CSV files are valid and readable."
            ) from e

        logger.info(f"Loaded {len(frames)} tables from {data_dir}")
        return _Tables(**frames)

    @staticmethod
    def _where(df: pd.DataFrame, column: str, value: Any) -> pd.DataFrame:
        if df.empty or column not in df.columns:
            return df.iloc[0:0]
        return df[df[column] == str(value)]

    # ---------- catalogue and pricing ----------

    @staticmethod
    def _product(row: Dict[str, Any]) -> Product:
        row["images"] = _split_list(row.get("images"))
        row["is_bundle"] = row.get("is_bundle") or False
        return Product(**row)

    def get_product(self, product_id: int) -> Optional[Product]:
        rows = _records(self._where(self._tables.products, "product_id", product_id))
        return self._product(rows[0]) if rows else None

    def list_products(self) -> List[Product]:
        return [self._product(row) for row in _records(self._tables.products)]

    def list_fabrics(self) -> List[FabricOption]:
        rows = _records(self._tables.fabrics)
        fabrics = [
            FabricOption(**{**row, "price_modifier_cents": row.get("price_modifier_cents") or 0,
                            "sort_order": row.get("sort_order") or 0})
            for row in rows
        ]
        return sorted(fabrics, key=lambda f: (f.sort_order, f.name))

    def list_pricing_tiers(self, product_id: int) -> List[PricingTier]:
        rows = _records(self._where(self._tables.pricing_tiers, "product_id", product_id))
        return [
            PricingTier(
                min_quantity=row["min_quantity"],
                max_quantity=row.get("max_quantity"),
                price_per_unit_cents=row["price_per_unit_cents"],
            )
            for row in rows
        ]

    def list_bundles(self) -> List[Bundle]:
        bundles = []
        for row in _records(self._tables.bundles):
            row["components"] = _parse_components(row.get("components"))
            row["discount_pct"] = row.get("discount_pct") or 0
            bundles.append(Bundle(**row))
        return bundles

    def list_designs(self) -> List[Design]:
        designs = []
        for row in _records(self._tables.designs):
            row["sports"] = _split_list(row.get("sports"))
            row["active"] = row.get("active") or False
            row["featured"] = row.get("featured") or False
            designs.append(Design(**row))
        return designs

    # ---------- orders and payments ----------

    def get_order(self, order_id: str) -> Optional[OrderHeader]:
        rows = _records(self._where(self._tables.orders, "order_id", order_id))
        if not rows:
            return None
        row = rows[0]
        row["status"] = row.get("status") or "pending"
        row["total_amount_cents"] = row.get("total_amount_cents") or 0
        return OrderHeader(**row)

    def list_order_items(self, order_id: str) -> List[OrderLineItem]:
        items = []
        for row in _records(self._where(self._tables.order_items, "order_id", order_id)):
            customization = {}
            for key in ("size", "position"):
                if row.get(key) is not None:
                    customization[key] = row.pop(key)
                else:
                    row.pop(key, None)
            row["customization"] = customization
            row["images"] = _split_list(row.get("images"))
            row["product_name"] = row.get("product_name") or ""
            row["unit_price_cents"] = row.get("unit_price_cents") or 0
            items.append(OrderLineItem(**row))
        return items

    def list_contributions(self, order_id: str) -> List[PaymentContribution]:
        contributions = []
        for row in _records(self._where(self._tables.contributions, "order_id", order_id)):
            row["amount_cents"] = row.get("amount_cents") or 0
            row["status"] = row.get("status") or "pending"
            contributions.append(PaymentContribution(**row))
        return contributions

    # ---------- teams, rosters and design requests ----------

    def get_team(self, team_id: str) -> Optional[Team]:
        rows = _records(self._where(self._tables.teams, "team_id", team_id))
        return Team(**rows[0]) if rows else None

    def list_player_submissions(self, team_id: str) -> List[PlayerInfoSubmission]:
        rows = _records(self._where(self._tables.player_submissions, "team_id", team_id))
        return [PlayerInfoSubmission(**row) for row in rows]

    def get_design_request(self, design_request_id: int) -> Optional[DesignRequest]:
        rows = _records(self._where(self._tables.design_requests, "design_request_id", design_request_id))
        if not rows:
            return None
        row = rows[0]
        row["status"] = row.get("status") or "pending"
        apparel = []
        for item in _records(self._where(self._tables.design_request_apparel, "design_request_id", design_request_id)):
            apparel.append(ApparelSelection(
                product_id=item["product_id"],
                product_name=item.get("product_name") or "",
                unit_price_cents=item.get("unit_price_cents") or 0,
                images=_split_list(item.get("images")),
            ))
        row["selected_apparel"] = apparel
        return DesignRequest(**row)

    def list_roster_members(self, design_request_id: int) -> List[DesignRequestRosterRow]:
        rows = _records(self._where(self._tables.roster_members, "design_request_id", design_request_id))
        return [DesignRequestRosterRow(**row) for row in rows]
