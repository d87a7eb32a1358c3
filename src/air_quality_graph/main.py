"""
Main entry point for the air quality graph service.

Orchestrates latest and graph node updates for all configured devices.
"""

import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

from .core import Config, setup_logger, LoggerContext
from .api import QuantAQAPI, CredentialProvider
from .services import (
    PaginatedFetcher,
    GapBackfiller,
    RawDataBackfiller,
    GraphNodeUpdater,
    LatestNodeUpdater,
)
from .storage import JSONFileStore, StateStore
from .writer import StateWriter

MODES = ("latest", "graph", "all")


class AirQualityGraphApp:
    """Main application for updating device views."""

    def __init__(
        self,
        config_file: Optional[str] = None,
        store: Optional[StateStore] = None
    ):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            store: State store to use instead of the configured JSON file
        """
        self.config = Config(config_file)

        self.logger = setup_logger()
        self.logger.info("=" * 60)
        self.logger.info("Air Quality Graph Service")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        self.store = store

        # Initialize components (will be set in initialize_components)
        self.api_client: Optional[QuantAQAPI] = None
        self.credentials: Optional[CredentialProvider] = None
        self.writer: Optional[StateWriter] = None
        self.latest_updater: Optional[LatestNodeUpdater] = None
        self.graph_updater: Optional[GraphNodeUpdater] = None

    def initialize_components(self) -> None:
        """Initialize all application components."""
        self.logger.info("Initializing components...")

        self.api_client = QuantAQAPI(
            base_url=self.config.api_base_url,
            timeout=self.config.api_timeout,
            max_retries=self.config.api_max_retries,
            verify_ssl=self.config.api_verify_ssl,
            limit=self.config.api_limit,
            logger=self.logger
        )

        self.credentials = CredentialProvider(
            api_key=self.config.api_key,
            api_key_env=self.config.api_key_env,
            password=self.config.auth_password,
            logger=self.logger
        )

        if self.store is None:
            self.store = JSONFileStore(self.config.storage_path, logger=self.logger)

        self.writer = StateWriter(store=self.store, logger=self.logger)

        self.latest_updater = LatestNodeUpdater(
            api_client=self.api_client,
            writer=self.writer,
            archive_data=self.config.archive_data,
            logger=self.logger
        )

        fetcher = PaginatedFetcher(api_client=self.api_client, logger=self.logger)
        self.graph_updater = GraphNodeUpdater(
            writer=self.writer,
            gap_backfiller=GapBackfiller(fetcher, logger=self.logger),
            raw_backfiller=RawDataBackfiller(fetcher, logger=self.logger),
            logger=self.logger
        )

        self.logger.info("All components initialized successfully")

    def run(self, mode: str = "all", devices: Optional[List[str]] = None) -> Dict[str, bool]:
        """
        Run the update for all devices.

        Args:
            mode: 'latest', 'graph', or 'all' (latest followed by graph)
            devices: Device serial numbers. If None, uses configured devices.

        Returns:
            Dictionary mapping device serial numbers to success status
        """
        if mode not in MODES:
            raise ValueError(f"Invalid mode: {mode}. Use one of {', '.join(MODES)}")

        try:
            self.initialize_components()

            if not all([self.credentials, self.writer]):
                raise RuntimeError("Components not properly initialized")

            devices = devices or self.config.devices
            token = self.credentials.get_token()

            self.logger.info(f"Processing {len(devices)} devices (mode: {mode})")

            with ThreadPoolExecutor(
                max_workers=self.config.max_workers,
                thread_name_prefix="device"
            ) as executor:
                results = list(executor.map(
                    lambda sn: self.process_device(token, sn, mode),
                    devices
                ))

            status = dict(zip(devices, results))
            self.writer.log_run_summary(status, mode)
            self.logger.info("Processing complete")
            return status

        except Exception as e:
            self.logger.error(f"Application error: {e}", exc_info=True)
            raise

        finally:
            if self.api_client:
                self.api_client.close()

    def process_device(self, token: str, sn: str, mode: str) -> bool:
        """
        Process a single device.

        Args:
            token: Authorization header value
            sn: Device serial number
            mode: Run mode

        Returns:
            True if every step succeeded
        """
        if not all([self.latest_updater, self.graph_updater]):
            raise RuntimeError("Components not properly initialized")

        try:
            if mode in ("latest", "all"):
                with LoggerContext(self.logger, f"latest node update for {sn}", sn=sn):
                    self.latest_updater.update_latest_node(token, sn)

            if mode in ("graph", "all"):
                with LoggerContext(self.logger, f"graph node update for {sn}", sn=sn):
                    self.graph_updater.update_graph_node(token, sn)

            return True

        except Exception as e:
            self.logger.error(f"Failed to process device {sn}: {e}")
            return False


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Update latest and graph nodes of air-quality devices"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--device",
        action="append",
        default=None,
        help="Device serial number (repeatable). Default: configured devices"
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="all",
        help="Which nodes to update. Default: all"
    )

    args = parser.parse_args()

    try:
        app = AirQualityGraphApp(config_file=args.config)
        status = app.run(mode=args.mode, devices=args.device)
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)

    if not all(status.values()):
        sys.exit(1)


if __name__ == "__main__":
    main()
