"""
Ansible Tower job launcher for CI pipelines.

Launches a job template, waits for it to finish, reports its output and
exports the resource name found in that output.
"""

from .client import ClientConfig, TowerClient
from .errors import TowerError
from .extractor import extract_resource_name, resolve_resource_name
from .launcher import launch_job
from .pipeline import PipelineResult, TowerJobPipeline, export_resource_name
from .poller import poll_until_terminal
from .reporter import print_job_output, report_job_output
from .request_builder import LaunchInputs, LaunchRequest, build_launch_request

__all__ = [
    "ClientConfig",
    "TowerClient",
    "TowerError",
    "LaunchInputs",
    "LaunchRequest",
    "build_launch_request",
    "launch_job",
    "poll_until_terminal",
    "print_job_output",
    "report_job_output",
    "extract_resource_name",
    "resolve_resource_name",
    "export_resource_name",
    "PipelineResult",
    "TowerJobPipeline",
]
