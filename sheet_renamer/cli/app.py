from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..host.interfaces import CellAccess, FileStore
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import RenameConfig
from ..models.edit_event import EditEvent
from ..models.outcome import RowOutcome
from ..services.dispatcher import ON_EDIT, EditDispatcher, ensure_single_handler
from ..services.orchestrator import RenameOrchestrator
from ..services.poller import TriggerColumnPoller
from ..services.summary import OutcomeTally, render_summary_line

"""CLI entrypoint.

Commands:
- handle-edit: deliver one edit notification (e.g. forwarded by a webhook)
- watch: poll the trigger column and handle edits as they appear

Exit codes:
- 0: every handled row was renamed (or the edit was ignored)
- 1: configuration / setup failure
- 2: at least one row ended with an ERROR status
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_ROW_FAILURE = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; environment values win over the YAML config."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _build_collaborators(cfg: RenameConfig) -> tuple[CellAccess, FileStore]:  # pragma: no cover (needs Google credentials)
    from ..google.auth import build_services
    from ..google.drive import DriveFileStore
    from ..google.sheets import SheetsCellAccess

    services = build_services(cfg.credentials_file)
    return SheetsCellAccess(services.sheets, cfg.spreadsheet_id, cfg.sheet_name), DriveFileStore(services.drive)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Rename Drive files from spreadsheet rows")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    edit = sub.add_parser("handle-edit", help="Handle a single cell edit")
    edit.add_argument("--row", type=int, required=True, help="1-based row of the edited cell")
    edit.add_argument("--column", type=int, required=True, help="1-based column of the edited cell")
    edit.add_argument("--value", default=None, help="New value of the edited cell")
    edit.add_argument("--sheet", default=None, help="Sheet name (default: configured sheet)")

    watch = sub.add_parser(
        "watch",
        help="Poll the trigger column for edits",
        description=(
            "Poll the trigger column for edits. Typing Yes over a Yes left by a failed attempt "
            "is not seen as a change: to retry a row, clear its trigger cell, wait one poll "
            "interval, then set it to Yes again."
        ),
    )
    watch.add_argument("--once", action="store_true", help="Take a baseline, poll once, then exit")
    return p.parse_args(argv)


def _exit_code(tally: OutcomeTally) -> int:
    return EXIT_ROW_FAILURE if tally.failed else EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)
    if args.debug:
        set_debug()

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        cells, files = _build_collaborators(cfg)
    except Exception as e:
        logger.error(f"setup: {e}")
        return EXIT_FATAL

    orchestrator = RenameOrchestrator(cfg, cells, files)
    tally = OutcomeTally()

    def on_edit(event: EditEvent) -> RowOutcome | None:
        outcome = orchestrator.handle_edit(event)
        tally.add(outcome)
        return outcome

    dispatcher = EditDispatcher()
    ensure_single_handler(dispatcher, ON_EDIT, cfg.spreadsheet_id, on_edit)

    if args.command == "handle-edit":
        event = EditEvent(
            sheet_name=args.sheet or cfg.sheet_name,
            row=args.row,
            column=args.column,
            value=args.value,
        )
        dispatcher.dispatch(cfg.spreadsheet_id, event)
        log_summary(render_summary_line(tally)[len("SUMMARY "):])
        return _exit_code(tally)

    poller = TriggerColumnPoller(cells, dispatcher, cfg, error_log=orchestrator.error_log)
    logger.info(f"watching sheet={cfg.sheet_name} every {cfg.poll_interval_seconds}s")
    try:
        poller.run(max_polls=2 if args.once else None)
    except KeyboardInterrupt:
        logger.info("watch stopped")
    if poller.failed_polls:
        logger.warning(f"watch: {poller.failed_polls} poll(s) failed; see {orchestrator.error_log.file_path}")
    log_summary(render_summary_line(tally)[len("SUMMARY "):])
    return _exit_code(tally)

