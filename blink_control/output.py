"""
Report output for the blink(1) hidraw interface.

This module hands encoded reports to their destination: the process's
standard output (to be redirected to the device node), an explicit
device path such as /dev/hidraw0, or any binary stream.
"""

import logging
import sys
from typing import BinaryIO, Optional

from blink_control.protocol import REPORT_SIZE, format_report


logger = logging.getLogger(__name__)


class ReportWriter:
    """Single-shot writer for 9-byte blink(1) reports."""

    def __init__(
        self,
        device: Optional[str] = None,
        stream: Optional[BinaryIO] = None
    ):
        """
        Initialize the report writer.

        Args:
            device: Device node path (e.g., "/dev/hidraw0"). Ignored when
                    a stream is given.
            stream: Binary stream to write to. Defaults to standard output
                    when neither stream nor device is set.
        """
        self.device = device
        self._stream = stream
        self._owns_stream = False

    @property
    def is_open(self) -> bool:
        """Check if the output stream is ready."""
        return self._stream is not None and not self._stream.closed

    def open(self) -> bool:
        """
        Open the output destination.

        Returns:
            True if the destination is ready, False otherwise.
        """
        if self.is_open:
            return True

        if self.device is None:
            self._stream = sys.stdout.buffer
            return True

        try:
            self._stream = open(self.device, "wb", buffering=0)
            self._owns_stream = True
            logger.debug(f"Opened {self.device}")
            return True
        except OSError as e:
            logger.error(f"Failed to open {self.device}: {e}")
            return False

    def close(self) -> None:
        """Close the destination if this writer opened it."""
        if self._owns_stream and self._stream is not None:
            try:
                self._stream.close()
            except OSError as e:
                logger.warning(f"Error closing {self.device}: {e}")
            finally:
                self._stream = None
                self._owns_stream = False

    def write(self, report: bytes) -> bool:
        """
        Write one report.

        Args:
            report: Encoded report, must be exactly REPORT_SIZE bytes.

        Returns:
            True if the full report was written, False otherwise.
        """
        if len(report) != REPORT_SIZE:
            logger.error(f"Refusing to write {len(report)}-byte report")
            return False

        if not self.is_open:
            if not self.open():
                return False

        try:
            written = self._stream.write(report)  # type: ignore
            self._stream.flush()  # type: ignore
        except OSError as e:
            logger.error(f"Failed to write report: {e}")
            return False

        # non-blocking raw streams return None when nothing was written
        if written is None:
            logger.error("Write would block, report not sent")
            return False
        if written != REPORT_SIZE:
            logger.error(f"Short write: {written} of {REPORT_SIZE} bytes")
            return False

        logger.debug(f"Sent report: {format_report(report)}")
        return True

    def __enter__(self) -> "ReportWriter":
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
