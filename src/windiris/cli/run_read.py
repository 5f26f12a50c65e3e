"""Command-line access to wind iris catalogs and reads.

This module contains the actual command implementations, separated from
argument parsing helpers. ``scripts/run_windiris.py`` is a thin wrapper.

Usage::

    windiris catalog user_config.py --catalog-id /WIND/LIDAR
    windiris read user_config.py --catalog-id /WIND/LIDAR --resource WLS200_0_RWS \\
        --distance 220 --begin 2021-01-01T00:00:00Z --end 2021-01-01T01:00:00Z \\
        --output rws_220.csv
    windiris read user_config.py --catalog-id /WIND/LIDAR --resource WLS200_0_RWS \\
        --resource WLS200_1_RWS --distance 220 --max-workers 2 \\
        --begin 2021-01-01T00:00:00Z --end 2021-01-01T01:00:00Z
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import pandas as pd

from windiris.contracts import ContractViolation
from windiris.pipeline.file_index import as_utc
from windiris.pipeline.orchestrator import ReadOrchestrator, configure_logging
from windiris.pipeline.source import ReadRequest, WindIrisDataSource, create_buffers
from windiris.schemas import (
    CLIConfig,
    InternalConfig,
    ParamConfig,
    UserConfig,
    load_user_config_dict,
    resolve_config,
)

__all__ = ['build_config', 'list_resources', 'read_resource', 'read_resources', 'main']

logger = logging.getLogger(__name__)


def build_config(user_config_path: str, cli_args: Optional[Dict[str, Any]] = None,
                 verbose: bool = False) -> InternalConfig:
    """Resolve the runtime configuration (Param < User < CLI).

    Parameters
    ----------
    user_config_path : str
        Python file with a ``CONFIG`` dict.
    cli_args : dict, optional
        Command-line overrides (``root_dir``, ``log_level``, ``max_workers``).
        None values are ignored.
    verbose : bool
        Force DEBUG logging.
    """
    user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    cli_args = dict(cli_args or {})
    if verbose:
        cli_args["log_level"] = "DEBUG"
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    return resolve_config(ParamConfig(), user_cfg, cli_cfg)


def parse_time(value: str) -> datetime:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC."""
    return as_utc(pd.Timestamp(value).to_pydatetime())


def list_resources(source: WindIrisDataSource, catalog_id: str) -> list[str]:
    return [resource.id for resource in source.get_catalog(catalog_id).resources]


def read_resources(source: WindIrisDataSource, catalog_id: str, resource_ids: Sequence[str],
                   distance: int, begin: datetime, end: datetime) -> pd.DataFrame:
    """Read several resources at one distance over the worker pool.

    Returns
    -------
    pd.DataFrame
        Index ``time`` (UTC, one row per sample), one value column per
        resource id plus ``<id>_status`` (1 = valid, 0 = no data).

    Raises
    ------
    ValueError
        If the resources do not share a sample period.
    """
    begin, end = as_utc(begin), as_utc(end)
    catalog = source.get_catalog(catalog_id)
    resources = [catalog.find(resource_id) for resource_id in resource_ids]

    periods = {resource.sample_period for resource in resources}
    if len(periods) != 1:
        raise ValueError(f"Resources {list(resource_ids)} do not share one sample period")
    sample_period = periods.pop()

    requests = []
    for resource in resources:
        data, status = create_buffers(sample_period, begin, end)
        requests.append(ReadRequest(catalog_id, resource, data, status, {"d": distance}))

    for outcome in ReadOrchestrator(source).read(begin, end, requests):
        if outcome.error is not None:
            raise outcome.error
        if outcome.cancelled:
            raise RuntimeError(f"Read of {outcome.request.resource.id} was cancelled")

    columns = {}
    for request in requests:
        columns[request.resource.id] = request.data
        columns[f"{request.resource.id}_status"] = request.status

    index = pd.date_range(begin, periods=len(requests[0].data), freq=pd.Timedelta(sample_period), name="time")
    return pd.DataFrame(columns, index=index)


def read_resource(source: WindIrisDataSource, catalog_id: str, resource_id: str,
                  distance: int, begin: datetime, end: datetime) -> pd.DataFrame:
    """Read one resource at one distance into a DataFrame.

    Returns
    -------
    pd.DataFrame
        Index ``time`` (UTC, one row per sample), columns ``value`` and ``status``
        (1 = valid, 0 = no data).
    """
    df = read_resources(source, catalog_id, [resource_id], distance, begin, end)
    return df.set_axis(["value", "status"], axis=1)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="windiris", description="Leosphere wind iris file reader")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("config", help="Path to user config file")
    common.add_argument("--catalog-id", required=True, help="Catalog id from config.json")
    common.add_argument("--root-dir", help="Override data root directory")
    common.add_argument("--verbose", "-v", action="store_true", help="Enable DEBUG logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("catalog", parents=[common], help="List the resources of a catalog")

    read = sub.add_parser("read", parents=[common], help="Read resources to CSV")
    read.add_argument("--resource", required=True, action="append", help="Resource id (repeat to read several)")
    read.add_argument("--distance", "-d", required=True, help="Distance gate in meters")
    read.add_argument("--begin", required=True, help="Start time (ISO format, inclusive)")
    read.add_argument("--end", required=True, help="End time (ISO format, exclusive)")
    read.add_argument("--output", "-o", help="CSV output path (default: stdout)")
    read.add_argument("--max-workers", type=int, help="Override the number of read workers")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    cli_args = {"root_dir": args.root_dir, "max_workers": getattr(args, "max_workers", None)}
    config = build_config(args.config, cli_args, verbose=args.verbose)
    configure_logging(config.logging.level)

    if args.verbose:
        logger.debug("Resolved configuration:\n%s", json.dumps(config.model_dump(), indent=2))

    source = WindIrisDataSource(config)

    if args.command == "catalog":
        for resource_id in list_resources(source, args.catalog_id):
            print(resource_id)
        return 0

    try:
        begin, end = parse_time(args.begin), parse_time(args.end)
        if len(args.resource) == 1:
            df = read_resource(source, args.catalog_id, args.resource[0], args.distance, begin, end)
            valid = int(df["status"].sum())
        else:
            df = read_resources(source, args.catalog_id, args.resource, args.distance, begin, end)
            valid = int(df[[f"{rid}_status" for rid in args.resource]].to_numpy().sum())
    except (ValueError, ContractViolation, KeyError) as e:
        logger.error("Read failed: %s", e)
        return 1

    if args.output:
        df.to_csv(args.output)
        logger.info("Wrote %d samples (%d valid) to %s", len(df), valid, args.output)
    else:
        df.to_csv(sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
