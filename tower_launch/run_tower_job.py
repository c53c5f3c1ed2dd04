#!/usr/bin/env python3
"""
Launch an Ansible Tower job template, wait for it, and export its resource name.

Inputs come from command-line flags, then GitHub Actions step inputs
(``INPUT_*``), then ``TOWER_*`` environment variables.

Usage:
    python3 -m tower_launch.run_tower_job --template-id 42 \\
        --username deploy --password "$PASS" \\
        --additional-vars '{"env": "staging"}'
    tower-launch --template-id 42 --certificate-path cert.pfx
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Mapping, Optional

from pydantic import ValidationError

from tower_launch.actions import ActionsHarness
from tower_launch.config import validate_config
from tower_launch.errors import ConfigurationError, InvalidInputError, TowerError
from tower_launch.pipeline import TowerJobPipeline
from tower_launch.request_builder import LaunchInputs
from tower_launch.settings import TowerSettings
from tower_launch.utils.logging import configure_logging

logger = logging.getLogger("tower_launch.run_tower_job")

# Used only when the additional-vars input is not set at all.
ADDITIONAL_VARS_DEFAULT = "{}"

# CLI dest -> step input name
_STEP_INPUTS = {
    "username": "ansible-user",
    "password": "ansible-pass",
    "template_id": "template-id",
    "subscription": "azure-subscription",
    "client_id": "azure-client-id",
    "client_secret": "azure-client-secret",
    "certificate_path": "certificate-path",
}


def build_parser() -> argparse.ArgumentParser:
    """Argument parser; every option falls back to the step input of the same meaning."""
    parser = argparse.ArgumentParser(
        description="Launch an Ansible Tower job template and wait for it to finish",
    )
    parser.add_argument("--url", type=str, default=None, help="Tower base URL")
    parser.add_argument("--username", type=str, default=None, help="Tower user (ansible-user)")
    parser.add_argument("--password", type=str, default=None, help="Tower password (ansible-pass)")
    parser.add_argument("--template-id", type=str, default=None, help="Job template id")
    parser.add_argument("--subscription", type=str, default=None, help="Azure subscription id")
    parser.add_argument("--client-id", type=str, default=None, help="Azure client id")
    parser.add_argument("--client-secret", type=str, default=None, help="Azure client secret")
    parser.add_argument("--certificate-path", type=str, default=None, help="Certificate file to send base64-encoded")
    parser.add_argument("--additional-vars", type=str, default=None, help=f"JSON object of extra vars (default when unset: {ADDITIONAL_VARS_DEFAULT})")
    parser.add_argument("--poll-interval", type=float, default=None, help="Seconds between status checks")
    parser.add_argument("--poll-timeout", type=float, default=None, help="Give up after this many seconds (default: never)")
    parser.add_argument("--request-timeout", type=float, default=None, help="Per-request HTTP timeout in seconds")
    parser.add_argument("--verify-tls", action="store_true", default=None, help="Verify the server's TLS certificate")
    parser.add_argument("--log-level", type=str, default=None)
    parser.add_argument("--log-format", choices=["text", "json"], default=None)
    return parser


def resolve_inputs(
    args: argparse.Namespace,
    harness: ActionsHarness,
    settings: TowerSettings,
) -> LaunchInputs:
    """Merge CLI flags, step inputs and settings into one LaunchInputs."""
    values = {}
    for dest, input_name in _STEP_INPUTS.items():
        cli_value = getattr(args, dest)
        values[dest] = cli_value if cli_value not in (None, "") else harness.get_input(input_name)

    additional_vars = args.additional_vars
    if additional_vars is None:
        additional_vars = harness.get_raw_input("additional-vars")
    if additional_vars is None:
        additional_vars = ADDITIONAL_VARS_DEFAULT

    username = values["username"] or settings.username
    password = values["password"] or settings.password
    if not values["template_id"]:
        raise InvalidInputError("Input required and not supplied: template-id")
    if not username or not password:
        raise InvalidInputError("Input required and not supplied: ansible-user / ansible-pass")

    return LaunchInputs(
        username=username,
        password=password,
        template_id=values["template_id"],
        url=args.url or settings.url,
        subscription=values["subscription"],
        client_id=values["client_id"],
        client_secret=values["client_secret"],
        certificate_path=values["certificate_path"],
        additional_vars=additional_vars,
        verify_tls=settings.verify_tls if args.verify_tls is None else args.verify_tls,
        request_timeout=args.request_timeout if args.request_timeout is not None else settings.request_timeout,
    )


def main(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    """Run the job end to end and return the process exit code."""
    args = build_parser().parse_args(argv)
    harness = ActionsHarness(environ=environ)

    try:
        settings = TowerSettings()
        configure_logging(
            level=args.log_level or settings.log_level,
            fmt=args.log_format or settings.log_format,
        )
        inputs = resolve_inputs(args, harness, settings)
        poll_interval = args.poll_interval if args.poll_interval is not None else settings.poll_interval
        issues = validate_config(url=inputs.url, verify_tls=inputs.verify_tls, poll_interval=poll_interval)
        for issue in issues:
            logger.log(logging.getLevelName(issue["level"]), issue["message"])
        errors = [i["message"] for i in issues if i["level"] == "ERROR"]
        if errors:
            raise ConfigurationError(" ".join(errors))

        pipeline = TowerJobPipeline.from_inputs(
            inputs,
            harness=harness,
            poll_interval=poll_interval,
            poll_timeout=args.poll_timeout if args.poll_timeout is not None else settings.poll_timeout,
        )
        pipeline.run()
    except TowerError as exc:
        harness.set_failed(str(exc))
        return 1
    except ValidationError as exc:
        harness.set_failed(f"Invalid TOWER_* setting: {exc}")
        return 1
    except OSError as exc:
        harness.set_failed(f"Could not read certificate: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
