from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, config file, CLI overrides), pipeline execution and result
rendering. This is the hook a build script calls once the static build
has finished writing its output directory.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from assetcdn.core.pipeline.engine import run_pipeline
from assetcdn.core.pipeline.validator import validate_config
from assetcdn.domain.config import get_default_config, load_config
from assetcdn.domain.models import RewriteResult
from assetcdn.infra.fs import normalize_path
from assetcdn.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from assetcdn.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 missing input, 130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Resolve configuration hierarchy
    if args.use_defaults:
        base_conf = get_default_config()
    else:
        base_conf = load_config(args.config_path)

    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "INFO"
    log_file = clean_conf.get("log_file") or None
    if log_file is None and args.persist_log:
        log_file = get_default_log_path()
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(_redact(clean_conf), ensure_ascii=False, indent=2))
        return 0

    # 3. Pre-flight output directory verification
    output_dir = normalize_path(clean_conf.get("output_dir"), os.getcwd())
    if not os.path.isdir(output_dir):
        msg = f"Output directory does not exist: {output_dir}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    # 4. Pipeline execution phase
    logger.info(f"Post-processing build output: {output_dir}")
    try:
        result = run_pipeline(clean_conf)
    except KeyboardInterrupt:
        msg = "Interrupted by user."
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130

    # 5. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    Only known keys with a value are merged.
    """
    out = dict(base)
    known = get_default_config().keys()
    for k, v in overrides.items():
        if k in known and v is not None:
            out[k] = v
    return out


def _redact(config: Dict[str, Any]) -> Dict[str, Any]:
    """Hide the upload token when echoing the configuration."""
    out = dict(config)
    if out.get("upload_token"):
        out["upload_token"] = "***"
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: RewriteResult) -> None:
    """Print the run result as a short terminal report."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary
    print("SUCCESS: build output rewritten and uploaded.")
    print(f"Output directory: {result.output_dir}")
    print(f"Public path: {result.base}")
    print(f"Entry documents: {len(result.entries)}")

    stats_keys = {
        "files": "Files scanned",
        "uploaded": "Assets uploaded",
        "deleted": "Local copies removed",
        "rounds": "Upload rounds",
    }
    for key, label in stats_keys.items():
        if key in summary:
            print(f"{label}: {summary[key]}")

    if result.uploaded:
        print("\nUploaded assets:")
        for name, location in sorted(result.uploaded.items()):
            print(f"  - {name}: {location}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
