"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""


class ConvertUtils:
    KILOBYTE = 1024
    MEGABYTE = 1024 ** 2
    GIGABYTE = 1024 ** 3

    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to a short human-readable string (e.g., 1.5K, 3.2M, 512 bytes).
        Values are rounded half up to one decimal place.
        """
        if size_bytes < 0:
            return "0 bytes"

        units = [
            (ConvertUtils.GIGABYTE, "G"),
            (ConvertUtils.MEGABYTE, "M"),
            (ConvertUtils.KILOBYTE, "K"),
        ]
        for threshold, unit in units:
            if size_bytes > threshold:
                value = int(size_bytes / threshold * 10 + 0.5) / 10
                return f"{value:.1f}{unit}"
        return f"{size_bytes} bytes"
