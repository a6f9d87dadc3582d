"""
Input/Output Manager (CSV)
Exports the observation table so it can be pasted into a lab report.
"""
import csv
import logging
from typing import Iterable

from condenserlab.model.readings import Reading

# Get module logger
logger = logging.getLogger(__name__)

CSV_HEADER = ["id", "time_s", "theta0", "theta_t", "r_mohm"]


class IOManager:

    @staticmethod
    def export_readings_csv(readings: Iterable[Reading], filepath: str) -> int:
        """Writes the readings to a CSV file. Returns the number of rows written."""
        logger.info(f"Exporting readings to: {filepath}")
        count = 0
        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for r in readings:
                writer.writerow([
                    r.id,
                    f"{r.time_seconds:.2f}",
                    f"{r.initial_deflection:.1f}",
                    f"{r.final_deflection:.1f}",
                    "" if r.display_r is None else f"{r.display_r:.2f}",
                ])
                count += 1
        logger.info(f"Exported {count} readings.")
        return count
