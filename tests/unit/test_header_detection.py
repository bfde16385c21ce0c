from __future__ import annotations

from driver_cards.excel.header import HEADER_SCAN_LIMIT, detect_header_row


def test_title_row_above_header():
    rows = [
        ["Rapport mensuel"],
        ["N° NPC", "Nom", "Prénoms", "Téléphone"],
        ["1", "Dupont", "Jean", "90000000"],
    ]
    assert detect_header_row(rows) == 1


def test_header_on_first_row():
    rows = [["NPC", "Nom", "Prénom(s)", "Tel"], ["001", "KOFFI", "Ama", "90112233"]]
    assert detect_header_row(rows) == 0


def test_tie_keeps_earliest_row():
    rows = [
        ["Nom", "Prénoms"],
        ["Nom", "Prénoms"],
        ["KOFFI", "Ama"],
    ]
    assert detect_header_row(rows) == 0


def test_distinct_keys_not_cells_are_counted():
    rows = [
        ["Téléphone", "Tél", "Mobile"],  # three cells, one field
        ["Nom", "Prénoms"],
    ]
    assert detect_header_row(rows) == 1


def test_merged_cell_tokens_are_counted():
    rows = [
        ["Nom"],
        ["NPC; Nom; Prénoms"],
    ]
    assert detect_header_row(rows) == 1


def test_blank_and_numeric_cells_ignored():
    rows = [
        [None, float("nan"), ""],
        [1, 2, 3],
        [None, "Nom", None, "Arrondissement"],
    ]
    assert detect_header_row(rows) == 2


def test_rows_beyond_scan_limit_are_not_considered():
    rows = [["Liste"] for _ in range(HEADER_SCAN_LIMIT)]
    rows.append(["NPC", "Nom", "Prénoms", "Téléphone"])
    assert detect_header_row(rows) == 0


def test_nothing_recognized_defaults_to_first_row():
    assert detect_header_row([["a", "b"], ["c", "d"]]) == 0
    assert detect_header_row([]) == 0
