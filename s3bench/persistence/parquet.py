"""
Parquet persistence for raw operation stats.
"""

import os
import logging
from datetime import datetime
from typing import Iterable, Optional

from s3bench.persistence.metrics_aggregator import stats_to_dataframe
from s3bench.persistence.record import Stat

logger = logging.getLogger(__name__)


class ParquetPersistence:
    """Writes a finished stats collection to a Parquet file for later analysis.

    Attributes:
        output_dir: Directory where Parquet files will be saved
    """

    def __init__(self, output_dir: str = "results"):
        """Initialize Parquet persistence.

        Args:
            output_dir: Directory for saving Parquet files (default: 'results')
        """
        self.output_dir: str = output_dir
        os.makedirs(output_dir, exist_ok=True)

    def save_to_file(self, stats: Iterable[Stat], filename_prefix: str = "s3bench") -> Optional[str]:
        """Save stats to a timestamped Parquet file.

        Args:
            stats: Stats to persist
            filename_prefix: Prefix for the generated filename

        Returns:
            Path to the saved file, or None if there was nothing to save
        """
        df = stats_to_dataframe(stats)
        if df.empty:
            logger.info("No stats recorded, skipping Parquet export")
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = os.path.join(self.output_dir, f"{filename_prefix}_{timestamp}.parquet")

        logger.info(f"Saving {len(df)} records to {filepath}")
        df.to_parquet(filepath, index=False)
        return filepath
