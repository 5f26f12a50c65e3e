#!/usr/bin/env python3
"""Wind iris reader runner.

Usage:
    python scripts/run_windiris.py catalog scripts/user_config.py --catalog-id /WIND/LIDAR
    python scripts/run_windiris.py read scripts/user_config.py --catalog-id /WIND/LIDAR \
        --resource WLS200_0_RWS --distance 220 \
        --begin 2021-01-01T00:00:00Z --end 2021-01-01T06:00:00Z --output rws.csv

Note: User config in scripts/user_config.py, expert defaults in windiris.schemas.param
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from windiris.cli.run_read import main


if __name__ == "__main__":
    sys.exit(main())
