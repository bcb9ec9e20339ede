#!/usr/bin/env python3
"""
Entry point for the NetZap command-line interface.
"""

import sys
import json
import asyncio
import argparse
import logging

from netzap import __version__
from netzap.config.configuration import ConfigManager
from netzap.core.scan_runner import SCAN_TYPES, ScanRunner
from netzap.errors import ZMapError
from netzap.scanning.command_builder import format_command
from netzap.utils.logger import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser"""
    parser = argparse.ArgumentParser(description="NetZap - run ZMap scans and report parsed results")
    parser.add_argument("subnets", nargs="*", help="Subnets to scan in CIDR notation")
    parser.add_argument("-c", "--config", default="netzap.conf", help="Path to configuration file")
    parser.add_argument("-p", "--port", type=int, help="Target port")
    parser.add_argument("-t", "--scan-type", choices=SCAN_TYPES, help="Scan type")
    parser.add_argument("--rate", type=int, help="Send rate in packets per second")
    parser.add_argument("--bandwidth", help="Send bandwidth, e.g. 10M")
    parser.add_argument("--output-fields", help="Comma-separated output fields")
    parser.add_argument("--dry-run", action="store_true", help="Ask ZMap to print packets instead of sending them")
    parser.add_argument("--print-command", action="store_true", help="Print the ZMap command line and exit")
    parser.add_argument("--list-probe-modules", action="store_true", help="List ZMap probe modules")
    parser.add_argument("--list-output-modules", action="store_true", help="List ZMap output modules")
    parser.add_argument("--list-output-fields", action="store_true", help="List ZMap output fields")
    parser.add_argument("--tool-version", action="store_true", help="Show the installed ZMap version")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="store_true", help="Show version information")
    return parser


def scan_options_from_args(args: argparse.Namespace) -> dict:
    """ZMap options given on the command line"""
    options = {
        'rate': args.rate,
        'bandwidth': args.bandwidth,
        'output_fields': args.output_fields,
    }
    if args.dry_run:
        options['dry_run'] = True
    return {key: value for key, value in options.items() if value is not None}


async def run_introspection(runner: ScanRunner, args: argparse.Namespace) -> None:
    """Print the requested ZMap listings"""
    scanner = runner.scanner
    if args.tool_version:
        print(await scanner.version())
    if args.list_probe_modules:
        print("\n".join(await scanner.list_probe_modules()))
    if args.list_output_modules:
        print("\n".join(await scanner.list_output_modules()))
    if args.list_output_fields:
        print("\n".join(await scanner.list_output_fields()))


def main(argv=None) -> int:
    """Main function to run NetZap"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"NetZap version {__version__}")
        return 0

    log_level = logging.DEBUG if args.verbose else logging.INFO

    try:
        config_manager = ConfigManager(args.config)
        setup_logging(log_level, config_manager.get_log_file())

        runner = ScanRunner(config_manager)

        if args.tool_version or args.list_probe_modules or args.list_output_modules or args.list_output_fields:
            asyncio.run(run_introspection(runner, args))
            return 0

        if not args.subnets:
            parser.error("at least one subnet is required")

        options = scan_options_from_args(args)

        if args.print_command:
            scanner = runner.build_scanner(args.subnets, args.port, args.scan_type, options)
            print(format_command([scanner.executable_path] + scanner.build_command()))
            return 0

        report = asyncio.run(runner.run(args.subnets, args.port, args.scan_type, options))
        print(json.dumps(report, indent=2))
        return 0

    except ZMapError as e:
        logging.error(str(e))
        return 1
    except KeyboardInterrupt:
        logging.info("Scan stopped by user")
        return 130
    except Exception as e:
        logging.exception(f"Unhandled error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
