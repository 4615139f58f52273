"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import time


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50KB, 3.20MB).
        """
        if size_bytes < 0:
            return "0B"

        units = ["B", "KB", "MB", "GB", "TB", "PB"]
        for unit in units:
            if size_bytes < 1024:
                return f"{size_bytes:.2f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f}EB"

    @staticmethod
    def timestamp_to_human(timestamp: float, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
        """
        Convert a Unix timestamp to a human-readable string.
        Uses local time by default.
        """
        try:
            return time.strftime(fmt, time.localtime(timestamp))
        except (OverflowError, OSError, ValueError, TypeError):
            return "Invalid timestamp"

    @staticmethod
    def ratio_to_percent(ratio: float) -> str:
        """
        Format a similarity score in [0, 1] as a whole percentage ("0.923" → "92%").
        Scores just below 1.0 never round up to "100%", which is reserved for exact matches.
        """
        percent = ratio * 100
        if ratio < 1.0 and percent >= 99.5:
            return "99%"
        return f"{percent:.0f}%"
