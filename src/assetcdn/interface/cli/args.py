from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the assetcdn CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="assetcdn",
        description=(
            "Upload a finished static build to a CDN and rewrite every "
            "cross-file reference to the uploaded location."
        ),
    )

    # --- Build Output ---
    p.add_argument(
        "-d", "--output-dir",
        dest="output_dir",
        default=None,
        help="Build output directory to post-process (default: dist).",
    )
    p.add_argument(
        "--base",
        dest="base",
        default=None,
        help="Public path the build was made with (default: /).",
    )

    # --- Upload Service ---
    p.add_argument(
        "--endpoint",
        dest="upload_endpoint",
        default=None,
        help="URL of the upload service.",
    )
    p.add_argument(
        "--token",
        dest="upload_token",
        default=None,
        help="Bearer token for the upload service (or ASSETCDN_UPLOAD_TOKEN).",
    )
    p.add_argument(
        "--http",
        action="store_true",
        help="Build http:// URLs instead of https:// for returned keys.",
    )
    p.add_argument(
        "--image-domains",
        dest="image_domains",
        default=None,
        help="Comma-separated CDN domains for images.",
    )
    p.add_argument(
        "--static-domains",
        dest="static_domains",
        default=None,
        help="Comma-separated CDN domains for scripts, styles and other assets.",
    )
    p.add_argument(
        "--timeout",
        dest="upload_timeout",
        type=int,
        default=None,
        help="Per-upload timeout in seconds.",
    )
    p.add_argument(
        "--round-size",
        dest="round_size",
        type=int,
        default=None,
        help="Maximum distinct uploads per batch round (0 = unbounded).",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help="JSON config file (default: ./assetcdn.json if present).",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore config files and start from built-in defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )
    p.add_argument(
        "--persist-log",
        action="store_true",
        help="Write logs to the default rotating file in the user data directory.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset (None = not given).
    """
    overrides: Dict[str, Any] = {}

    overrides["output_dir"] = args.output_dir
    overrides["base"] = args.base
    overrides["upload_endpoint"] = args.upload_endpoint
    overrides["upload_token"] = args.upload_token
    overrides["upload_timeout"] = args.upload_timeout
    overrides["round_size"] = args.round_size
    overrides["log_file"] = args.log_file

    if args.http:
        overrides["https"] = False

    if args.image_domains:
        overrides["image_domains"] = _split_csv(args.image_domains)
    if args.static_domains:
        overrides["static_domains"] = _split_csv(args.static_domains)

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
