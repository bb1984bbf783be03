import sys
from argparse import ArgumentParser, RawTextHelpFormatter
from pathlib import Path

from password_export.config import ExportConfig, SUPPORTED_ENCODINGS
from password_export.extractors import ExportError, ExtractionEngine, get_source
from password_export.loaders import LocalStorageClient, build_document
from password_export.util import TimestampedLogger


def _parse_args(argv=None):
    parser = ArgumentParser(
        prog='password-export', formatter_class=lambda prog: RawTextHelpFormatter(prog, width=120)
    )
    parser.add_argument('fixture', help="recorded password table to extract from (YAML)")
    parser.add_argument('output', help="path of the CSV file to write (overwritten if it exists)")
    parser.add_argument(
        '-c', '--config',
        type=Path,
        default=None,
        help="YAML configuration file (default: the packaged export_config.yaml)"
    )
    parser.add_argument(
        '-f', '--forced-row-count',
        type=int,
        default=None,
        help="visit this many rows, cycling over the table (load testing only; 0 disables)"
    )
    parser.add_argument(
        '-e', '--encoding',
        choices=SUPPORTED_ENCODINGS,
        default=None,
        help="encoding of the CSV file (default: from configuration, normally utf-8)"
    )
    parser.add_argument(
        '-l', '--log-file',
        type=str,
        default=None,
        help="append a timestamped diagnostic log to this file (enables logging)"
    )
    parser.add_argument(
        '--no-log',
        action='store_true',
        help="disable the diagnostic log even if the configuration enables it"
    )
    return parser.parse_args(argv)


def _build_config(args) -> ExportConfig:
    config = ExportConfig.from_yaml(args.config)

    logging_enabled = None
    if args.no_log:
        logging_enabled = False
    elif args.log_file:
        logging_enabled = True

    return config.with_overrides(
        forced_row_count=args.forced_row_count,
        encoding=args.encoding,
        log_file=args.log_file,
        logging_enabled=logging_enabled,
    )


def _main(config: ExportConfig, args) -> None:
    logger = TimestampedLogger(config.log_file, enabled=config.logging_enabled)
    source = get_source(args.fixture)

    engine = ExtractionEngine(config, logger)
    print("Extracting passwords")
    result = engine.extract(source)

    document = build_document(result.entries)
    written_path = LocalStorageClient().write_csv(args.output, document, encoding=config.encoding)
    logger.log(f"Wrote {len(result.entries)} entries to {written_path}")

    engine.stats.print_summary(str(written_path))


def main(argv=None) -> int:
    args = _parse_args(argv)
    try:
        config = _build_config(args)
        _main(config, args)
    except (ExportError, OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
