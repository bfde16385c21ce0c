#!/usr/bin/env python3
"""Generate a messy driver registration workbook for demos and manual testing.

The generated file mimics what the town hall actually receives:
- an empty auxiliary sheet first
- a title line and a blank line above the header
- accented / misspelled titles and three "Téléphone" columns
- blank rows between drivers

Usage:
    python scripts/gen_sample_sheet.py --rows 50 --out data/sample_drivers.xlsx
"""
from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

import pandas as pd

HEADER = [
    "N° NPC", "Nom", "Prénom(s)", "Téléphone", "Personne à contacter", "Téléphone",
    "Propriétaire", "Téléphone", "Residance", "Caractéristiques Moto", "Arrondissement",
]

SURNAMES = ["AHOUANDJINOU", "HOUNGBEDJI", "ZINSOU", "AGBANGLA", "SODJI", "KOFFI", "DOSSOU"]
FIRST_NAMES = ["Pierre Marie", "Jeanne", "Emmanuel", "Félicité", "André", "Ama", "Rodrigue"]
DISTRICTS = ["Akpakpa", "Cadjèhoun", "Fidjrossè", "Godomey", "Agla", "Zogbo"]
BIKES = ["Bajaj Boxer rouge", "Haojue noire", "TVS Star bleue", "Honda CG 125"]


def _phone(rng: random.Random) -> str:
    return f"{rng.choice([90, 94, 95, 96, 97])} {rng.randint(0, 99):02d} {rng.randint(0, 99):02d} {rng.randint(0, 99):02d}"


def generate_rows(rows: int, seed: int = 42) -> list[list[object]]:
    rng = random.Random(seed)
    out: list[list[object]] = [["Registre des conducteurs de taxi-moto"], [], HEADER]
    for i in range(1, rows + 1):
        out.append([
            f"NPC-2024-{i:03d}",
            rng.choice(SURNAMES),
            rng.choice(FIRST_NAMES),
            _phone(rng),
            f"{rng.choice(SURNAMES)} {rng.choice(FIRST_NAMES)}",
            _phone(rng),
            rng.choice(SURNAMES),
            # owner phone sometimes missing
            _phone(rng) if rng.random() > 0.2 else None,
            rng.choice(DISTRICTS),
            rng.choice(BIKES),
            rng.choice(DISTRICTS),
        ])
        if i % 10 == 0:
            out.append([None] * len(HEADER))
    return out


def create_workbook(path: Path, rows: int, seed: int = 42) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame([["notes"]]).to_excel(writer, sheet_name="Notes", header=False, index=False)
        pd.DataFrame(generate_rows(rows, seed)).to_excel(writer, sheet_name="Conducteurs", header=False, index=False)
    return path


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a sample driver registration workbook")
    parser.add_argument("--rows", type=int, default=25, help="Number of drivers (default: 25)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--out", type=Path, default=Path("data/sample_drivers.xlsx"), help="Output .xlsx path")
    args = parser.parse_args()
    if args.rows < 1:
        print("ERROR --rows must be positive", file=sys.stderr)
        return 1
    path = create_workbook(args.out, args.rows, args.seed)
    print(f"INFO wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
