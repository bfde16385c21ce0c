# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from driver_cards.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("DRIVER_CARDS_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """storage_path: ./data/cards.json
logs_dir: ./logs
required_fields: [residence]
aliases:
  residence: [quartier de residence, lieu d'habitation]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "cards.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def fresh_logging():
    reset_logging()
    yield
    reset_logging()


def _make_excel(directory: Path, name: str, sheets: dict[str, list[list[object]]]) -> Path:
    """Write a real .xlsx (openpyxl) with the given raw rows, no pandas header."""
    p = directory / name
    with pd.ExcelWriter(p, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return p


B2_HEADER = [
    "N° NPC", "Nom", "Prénoms", "Téléphone", "Personne à contacter", "Téléphone",
    "Propriétaire", "Téléphone", "Résidence", "Caractéristiques Moto", "Arrondissement",
]


@pytest.fixture()
def b2_workbook(temp_workdir: Path) -> Path:
    return _make_excel(
        temp_workdir / "data", "conducteurs.xlsx",
        {
            "Conducteurs": [
                ["Registre des conducteurs de taxi-moto"],
                B2_HEADER,
                ["NPC-2024-001", "AHOUANDJINOU", "Pierre Marie", "97001122", "HOUNGBEDJI Jeanne", "96334455",
                 "ZINSOU", "95667788", "Akpakpa", "Bajaj Boxer rouge", "1er"],
                ["NPC-2024-002", "SODJI", "André", "94990011", None, None, None, None, "Agla", None, "13e"],
            ]
        },
    )
