"""
Main module for VM Power Alarm.

This module contains the command line entry point that creates an alarm
which powers a virtual machine back on whenever it is powered off.
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import config
from .alarm_operations import create_power_state_alarm
from .vcenter_client import VCenterClient

logger = logging.getLogger("vm-power-alarm")


def setup_logging(level: str, log_file: str) -> None:
    """Configure logging; stdout is left free for the result line."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vm-power-alarm",
        description="Create an alarm to monitor the virtual machine's power state",
    )
    parser.add_argument("--url", default=config.VCENTER_URL,
                        help="url of the web service (env: VCENTER_URL)")
    parser.add_argument("--username", default=config.VCENTER_USER,
                        help="username for the authentication (env: VCENTER_USER)")
    parser.add_argument("--password", default=config.VCENTER_PASSWORD,
                        help="password for the authentication (env: VCENTER_PASSWORD)")
    parser.add_argument("--port", type=int, default=config.VCENTER_PORT,
                        help="port used when the url has none (env: VCENTER_PORT)")
    parser.add_argument("--vmname", required=True,
                        help="name of the virtual machine to monitor")
    parser.add_argument("--alarm", required=True,
                        help="name of the alarm")
    ssl_group = parser.add_mutually_exclusive_group()
    ssl_group.add_argument("--insecure", dest="disable_ssl_verification",
                           action="store_true",
                           help="skip SSL certificate validation")
    ssl_group.add_argument("--verify-ssl", dest="disable_ssl_verification",
                           action="store_false",
                           help="validate the server SSL certificate")
    parser.set_defaults(disable_ssl_verification=config.VCENTER_DISABLE_SSL_VERIFY)
    default_level = config.LOG_LEVEL if config.LOG_LEVEL in config.LOG_LEVELS else "INFO"
    parser.add_argument("--log-level", default=default_level,
                        choices=config.LOG_LEVELS,
                        type=str.upper, help="log level (env: LOG_LEVEL)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, config.LOG_FILE)

    logger.info("Starting VM Power Alarm")
    if config.LOG_LEVEL not in config.LOG_LEVELS:
        logger.warning(f"Unknown LOG_LEVEL '{config.LOG_LEVEL}', using {args.log_level}")

    # Validate configuration
    if not config.validate_config(args.url, args.username, args.password):
        logger.error("Invalid configuration, exiting")
        return 1

    host, port, path = config.parse_service_url(args.url, args.port)
    vcenter_client = VCenterClient(
        host=host,
        user=args.username,
        password=args.password,
        port=port,
        path=path,
        disable_ssl_verification=args.disable_ssl_verification,
    )

    with vcenter_client:
        alarm_id = create_power_state_alarm(vcenter_client, args.vmname, args.alarm)

    if alarm_id is None:
        print(f"Virtual Machine {args.vmname} Not Found")
    else:
        print(f"Successfully created Alarm: {alarm_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
