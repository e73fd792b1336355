#!/usr/bin/env python3
"""Ledger Statement Extraction System.

This script reads PDF ledger statements whose text has no table structure,
rebuilds the account, description, debit and credit columns from the text
layout, and writes them to an Excel workbook.

Usage:
    python main.py --pdf-file <path_to_pdf> [--password <password>] [--output-dir <dir>]

    python main.py --batch-dir <directory_with_pdfs> [--password-file <file>] [--output-dir <dir>]

    python main.py --daemon  # Run as background worker
"""

import argparse
import sys

from ledger_extractor.config.settings import (
    REPORTS_DIR,
    Settings,
    load_config_from_file,
    merge_configs,
)
from ledger_extractor.processor import LedgerStatementProcessor
from ledger_extractor.utils.logger import setup_logger


def load_settings(config_file=None) -> Settings:
    """Build settings from the environment, overlaid with an optional JSON file."""
    settings = Settings.from_env()
    if config_file:
        settings = Settings.from_dict(merge_configs(settings.to_dict(), load_config_from_file(config_file)))
    return settings


def start_daemon() -> None:
    """Start the Celery worker that serves ledger processing tasks."""
    # Imported lazily so the CLI does not need a broker configuration
    from ledger_extractor.tasks.celery_app import celery_app

    celery_app.worker_main(['worker', '--loglevel=info', '-Q', 'ledger_processing'])


def parse_arguments(argv=None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="Rebuild debit/credit ledger tables from PDF statements",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Process a single PDF
    python main.py --pdf-file ledger.pdf

    # Process an encrypted PDF into a chosen directory
    python main.py --pdf-file ledger.pdf --password secret --output-dir ./out

    # Process all PDFs in a directory
    python main.py --batch-dir ./statements --password-file passwords.txt

    # Run as background worker
    python main.py --daemon
        """
    )

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        '--pdf-file',
        type=str,
        help='Path to single PDF file to process'
    )
    group.add_argument(
        '--batch-dir',
        type=str,
        help='Directory containing multiple PDF files to process'
    )
    group.add_argument(
        '--daemon',
        action='store_true',
        help='Run as background Celery worker'
    )

    parser.add_argument(
        '--password',
        type=str,
        help='Password for encrypted PDF (only used with --pdf-file)'
    )
    parser.add_argument(
        '--password-file',
        type=str,
        help='File containing passwords for batch processing (format: filename=password)'
    )
    parser.add_argument(
        '--output-dir',
        type=str,
        default=None,
        help=f'Output directory for reports (default: {REPORTS_DIR})'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='JSON file with settings overriding the environment'
    )
    parser.add_argument(
        '--no-summary',
        action='store_true',
        help='Do not add the totals sheet to the workbook'
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    try:
        args = parse_arguments(argv)
        settings = load_settings(args.config)
        if not settings.validate():
            print("Error: Invalid configuration values")
            return 1

        settings.create_directories()
        setup_logger(
            "ledger_extractor",
            level=settings.get_log_level(),
            logs_dir=settings.logs_dir,
            log_format=settings.log_format,
        )

        if args.daemon:
            start_daemon()
            return 0

        processor = LedgerStatementProcessor(settings)
        include_summary = not args.no_summary

        if args.pdf_file:
            output_path = processor.process_single_pdf(
                pdf_path=args.pdf_file,
                password=args.password,
                output_dir=args.output_dir,
                include_summary=include_summary,
            )

            if output_path:
                print(f"Success! Report created: {output_path}")
                return 0
            print("Error: Processing failed. Check logs for details.")
            return 1

        output_paths = processor.process_batch(
            batch_dir=args.batch_dir,
            password_file=args.password_file,
            output_dir=args.output_dir,
            include_summary=include_summary,
        )

        if output_paths:
            print(f"Success! Created {len(output_paths)} reports:")
            for path in output_paths:
                print(f"  - {path}")
            return 0
        print("Error: No files were processed successfully. Check logs for details.")
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130
    except Exception as e:
        print(f"Unexpected error: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
