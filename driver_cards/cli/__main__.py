from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from driver_cards.config.loader import AppConfig, ConfigError, load_config
from driver_cards.excel.extractor import EMPTY_INPUT_WARNING, extract_file, extract_sheet, select_sheet
from driver_cards.excel.reader import ExtractionError, read_workbook
from driver_cards.logging.init import get_logger, log_summary, setup_logging
from driver_cards.logging.warning_log import WarningLogBuffer
from driver_cards.models.extraction_result import ExtractionResult
from driver_cards.models.warning_record import WarningRecord
from driver_cards.services.card_store import CardSetStore, StorageError
from driver_cards.services.export import ExportError, PayloadTextRenderer, build_card_archive
from driver_cards.services.progress import ProgressTracker
from driver_cards.services.summary import render_summary_line

"""CLI entrypoint.

    driver-cards [--config PATH] [--debug] extract FILE [--json]
    driver-cards inspect FILE
    driver-cards export FILE --out cards.zip
    driver-cards sets save FILE --user U --name N
    driver-cards sets list --user U
    driver-cards sets rename SET_ID NAME
    driver-cards sets delete SET_ID

Exit codes: 0 success, 2 success with warnings, 1 fatal.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_WARNINGS = 2


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env (e.g. DRIVER_CARDS_CONFIG) with python-dotenv; existing variables win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="driver-cards", description="Driver registration spreadsheet -> B2 cards")
    p.add_argument("--config", type=Path, default=None, help="YAML config file (default config/cards.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    ex = sub.add_parser("extract", help="Extract contributor records from a spreadsheet")
    ex.add_argument("file", type=Path)
    ex.add_argument("--json", action="store_true", help="Print records as JSON")
    ex.set_defaults(handler=_cmd_extract)

    ins = sub.add_parser("inspect", help="Show sheets, detected header row and column mapping")
    ins.add_argument("file", type=Path)
    ins.set_defaults(handler=_cmd_inspect)

    exp = sub.add_parser("export", help="Write the card archive (zip)")
    exp.add_argument("file", type=Path)
    exp.add_argument("--out", type=Path, required=True)
    exp.set_defaults(handler=_cmd_export)

    sets = sub.add_parser("sets", help="Manage saved card sets")
    sets_sub = sets.add_subparsers(dest="sets_command", required=True)
    s_save = sets_sub.add_parser("save")
    s_save.add_argument("file", type=Path)
    s_save.add_argument("--user", required=True)
    s_save.add_argument("--name", required=True)
    s_save.set_defaults(handler=_cmd_sets_save)
    s_list = sets_sub.add_parser("list")
    s_list.add_argument("--user", required=True)
    s_list.set_defaults(handler=_cmd_sets_list)
    s_rename = sets_sub.add_parser("rename")
    s_rename.add_argument("set_id")
    s_rename.add_argument("name")
    s_rename.set_defaults(handler=_cmd_sets_rename)
    s_delete = sets_sub.add_parser("delete")
    s_delete.add_argument("set_id")
    s_delete.set_defaults(handler=_cmd_sets_delete)
    return p.parse_args(argv)


def _record_warnings(cfg: AppConfig, file_name: str, result: ExtractionResult) -> None:
    if not result.warnings:
        return
    buffer = WarningLogBuffer(cfg.logs_dir)
    for msg in result.warnings:
        warning_type = "EMPTY_INPUT" if msg == EMPTY_INPUT_WARNING else "MISSING_REQUIRED_FIELD"
        buffer.append(WarningRecord.create(file_name, result.sheet_name, -1, warning_type, msg))
    try:
        fp = buffer.flush()
    except OSError as e:
        get_logger().warning(f"cannot write warning log: {e}")
        return
    get_logger().info(f"warnings written to {fp}")


def _extract(cfg: AppConfig, path: Path) -> ExtractionResult | None:
    logger = get_logger()
    try:
        result = extract_file(path, cfg.aliases, cfg.required_fields)
    except ExtractionError as e:
        logger.error(f"extract: {e}")
        return None
    _record_warnings(cfg, path.name, result)
    # strip "SUMMARY " since log_summary adds the label
    log_summary(render_summary_line(path.name, result)[8:])
    return result


def _exit_code(result: ExtractionResult) -> int:
    if not result.records:
        get_logger().error("Aucune donnée valide trouvée dans le fichier")
        return EXIT_FATAL
    return EXIT_WARNINGS if result.warnings else EXIT_SUCCESS


def _cmd_extract(args: argparse.Namespace, cfg: AppConfig) -> int:
    result = _extract(cfg, args.file)
    if result is None:
        return EXIT_FATAL
    if args.json:
        print(json.dumps([r.to_dict() for r in result.records], ensure_ascii=False, indent=2))
    return _exit_code(result)


def _cmd_inspect(args: argparse.Namespace, cfg: AppConfig) -> int:
    try:
        sheets = read_workbook(args.file)
    except ExtractionError as e:
        get_logger().error(f"inspect: {e}")
        return EXIT_FATAL
    chosen = select_sheet(sheets)
    print(f"FILE: {args.file.name}")
    for i, sheet in enumerate(sheets):
        marker = "*" if i == chosen else " "
        print(f" {marker} SHEET: {sheet.name} rows={sheet.row_extent}")
    result = extract_sheet(sheets[chosen], cfg.aliases, cfg.required_fields)
    header = "-" if result.header_row_index is None else result.header_row_index + 1
    print(f"  header_row={header}")
    print("  columns=", {k.value: i for k, i in result.column_map.items()})
    for msg in result.warnings:
        print(f"  warning: {msg}")
    print("  sample_rows=", [r.to_dict() for r in result.records[:3]])
    return EXIT_SUCCESS


def _cmd_export(args: argparse.Namespace, cfg: AppConfig) -> int:
    logger = get_logger()
    result = _extract(cfg, args.file)
    if result is None:
        return EXIT_FATAL
    if not result.records:
        return _exit_code(result)
    try:
        with ProgressTracker(len(result.records) + 1) as tracker:
            data = build_card_archive(result.records, PayloadTextRenderer(), on_card=tracker.advance)
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_bytes(data)
    except ExportError as e:
        logger.error(f"export: {e}")
        return EXIT_FATAL
    except OSError as e:
        logger.error(f"export: cannot write {args.out}: {e}")
        return EXIT_FATAL
    logger.info(f"archive written to {args.out} ({len(result.records)} cards)")
    return _exit_code(result)


def _cmd_sets_save(args: argparse.Namespace, cfg: AppConfig) -> int:
    result = _extract(cfg, args.file)
    if result is None:
        return EXIT_FATAL
    if not result.records:
        return _exit_code(result)
    card_set = CardSetStore(cfg.storage_path).save(args.user, args.name, result.records)
    print(card_set.id)
    return _exit_code(result)


def _cmd_sets_list(args: argparse.Namespace, cfg: AppConfig) -> int:
    for s in CardSetStore(cfg.storage_path).list_for_user(args.user):
        print(f"{s.id}\t{s.name}\t{len(s.cards)}\t{s.created_at}")
    return EXIT_SUCCESS


def _cmd_sets_rename(args: argparse.Namespace, cfg: AppConfig) -> int:
    if CardSetStore(cfg.storage_path).update(args.set_id, name=args.name) is None:
        get_logger().error(f"card set not found: {args.set_id}")
        return EXIT_FATAL
    return EXIT_SUCCESS


def _cmd_sets_delete(args: argparse.Namespace, cfg: AppConfig) -> int:
    if not CardSetStore(cfg.storage_path).delete(args.set_id):
        get_logger().error(f"card set not found: {args.set_id}")
        return EXIT_FATAL
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when no list was given (tests call main([...]))
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        setup_logging(debug=True)
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        return args.handler(args, cfg)
    except StorageError as e:
        logger.error(f"storage: {e}")
        return EXIT_FATAL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
