"""Wind iris reader user configuration.

This is the user-facing configuration file. Modify settings here to match
your lidar exports. Advanced settings are in windiris.schemas.param

Usage:
    python scripts/run_windiris.py catalog scripts/user_config.py --catalog-id /WIND/LIDAR
"""

CONFIG = {
    # ========================================================================
    # DATA LOCATION
    # ========================================================================
    "ROOT_DIR": "/data/lidar",        # Directory holding config.json and the files
    "CATALOG_CONFIG": "config.json",  # Catalog description inside ROOT_DIR

    # ========================================================================
    # FILE FORMAT
    # ========================================================================
    "DECIMAL_SEPARATOR": ".",         # "," for exports from German locales
    "ENCODING": "utf-8",
    "STATUS_POLICY": "window",        # "sample" marks only rows at the requested gate

    # ========================================================================
    # READ WORKERS
    # ========================================================================
    "MAX_WORKERS": 4,
    "FAILURE_POLICY": "fail_fast",    # "skip_file" keeps going past corrupt files
    "LOG_LEVEL": "INFO",
}
