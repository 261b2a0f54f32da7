"""CSV seed validation and view export"""

from .csv_seed import SeedFileError, detect_delimiter, validate_seed_file, export_rows

__all__ = ["SeedFileError", "detect_delimiter", "validate_seed_file", "export_rows"]
