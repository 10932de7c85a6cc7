# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""CLI entry point for common-api (capi command).

Usage:
    capi --help
    capi country list --page-size 20
    capi dict-entry get 12
    capi serve-mock --port 8000
"""

import logging
import os

from .client_base import ApiClient, config_from_env


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(level=os.environ.get("COMMON_API_LOG_LEVEL", "WARNING").upper())
    config = config_from_env()
    client = ApiClient(config=config)
    client.cli.cli()


if __name__ == "__main__":
    main()
