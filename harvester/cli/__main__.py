from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from dotenv import load_dotenv

from harvester.config.loader import ConfigError, resolve_config
from harvester.excel.reader import read_raw_rows
from harvester.logging.init import log_summary, set_level, setup_logging
from harvester.models.config_models import HarvesterConfig
from harvester.services.orchestrator import harvest
from harvester.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, resolve parameters (command line > environment > config file)
- Abort with exit code 2 if input path, GTIN column or PHAR column is missing
- Let the user confirm or override each parameter (interactive terminals only)
- Run the harvest and print the SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_MISSING_PARAMS = 2

PATH_MSG = "Enter path to xsl file [{0}]: "
GTIN_MSG = "Enter column number for GTINs [{0}]: "
PHAR_MSG = "Enter column number for PHARs [{0}]: "
MISSING_PARAMS_MSG = "Missing parameters. The harvester needs three parameters to operate. Aborting..."
ENTERED_PATH_MSG = "Path to input file: {0}"
ENTERED_GTIN_MSG = "Column number for GTINs: {0}"
ENTERED_PHAR_MSG = "Column number for PHARs: {0}"

INSPECT_ROWS = 5


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; failures only produce a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        logging.getLogger(__name__).warning(f"failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="pharmacode-harvester",
        description="Extract a GTIN -> PharmaCode mapping from a spreadsheet",
    )
    p.add_argument("-p", "--path", dest="path", help="Path to the input workbook")
    p.add_argument("-gtin", "--gtin", dest="gtin", type=int, help="Zero-based column number of the GTINs")
    p.add_argument("-phar", "--phar", dest="phar", type=int, help="Zero-based column number of the PHARs")
    p.add_argument("--output-dir", dest="output_dir", help="Output directory (default: input file directory)")
    p.add_argument("--config", type=Path, help="YAML config file (default: config/harvester.yml if present)")
    p.add_argument("--no-input", action="store_true", help="Do not prompt for parameter confirmation")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print the first rows of both columns then exit")
    return p.parse_args(argv)


def _stdin_is_tty() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


def _ask(prompt: str, current: str, input_fn: Callable[[str], str]) -> str:
    try:
        answer = input_fn(prompt).strip()
    except EOFError:
        return current
    return answer or current


def _confirm_parameters(cfg: HarvesterConfig, input_fn: Callable[[str], str] = input) -> HarvesterConfig:
    """Show each parameter and let the user keep it (empty answer) or replace it.

    Raises:
        ValueError: a column answer is not an integer
    """
    path = _ask(PATH_MSG.format(cfg.input_path), cfg.input_path or "", input_fn)
    gtin = int(_ask(GTIN_MSG.format(cfg.gtin_column), str(cfg.gtin_column), input_fn))
    phar = int(_ask(PHAR_MSG.format(cfg.pharmacode_column), str(cfg.pharmacode_column), input_fn))
    return cfg.overlay(HarvesterConfig(input_path=path, gtin_column=gtin, pharmacode_column=phar))


def _inspect_data(input_path: Path, gtin_column: int, pharmacode_column: int) -> int:
    try:
        rows = read_raw_rows(input_path, gtin_column, pharmacode_column)
    except OSError as e:
        print(f"inspect: read_error: {e}")
        return EXIT_FATAL
    print(f"FILE: {input_path} rows={len(rows)}")
    for row in rows[:INSPECT_ROWS]:
        print(f"  row={row.row_index} gtin={row.gtin!r} pharmacode={row.pharmacode!r}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_level(logging.DEBUG)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)

    cli_cfg = HarvesterConfig(
        input_path=args.path,
        gtin_column=args.gtin,
        pharmacode_column=args.phar,
        output_directory=args.output_dir,
    )
    try:
        cfg = resolve_config(cli_cfg, config_path=args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if not cfg.is_complete:
        logger.error(MISSING_PARAMS_MSG)
        return EXIT_MISSING_PARAMS

    if not args.no_input and _stdin_is_tty():
        try:
            cfg = _confirm_parameters(cfg)
        except ValueError as e:
            logger.error(f"invalid column number: {e}")
            return EXIT_FATAL

    if cfg.gtin_column < 0 or cfg.pharmacode_column < 0:
        logger.error("column numbers must be >= 0")
        return EXIT_FATAL

    logger.info(ENTERED_PATH_MSG.format(cfg.input_path))
    logger.info(ENTERED_GTIN_MSG.format(cfg.gtin_column))
    logger.info(ENTERED_PHAR_MSG.format(cfg.pharmacode_column))

    if args.inspect_data:
        return _inspect_data(Path(cfg.input_path), cfg.gtin_column, cfg.pharmacode_column)

    output_dir = Path(cfg.output_directory) if cfg.output_directory else None
    try:
        result = harvest(Path(cfg.input_path), cfg.gtin_column, cfg.pharmacode_column, output_dir)
    except OSError as e:
        logger.error(f"harvest: {e}")
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
