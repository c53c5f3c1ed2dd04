"""
Orchestration of the launch → poll → report → extract sequence.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import requests

from .actions import ActionsHarness
from .client import TowerClient
from .config import POLL_INTERVAL_SECONDS, POLL_TIMEOUT_SECONDS, RESOURCE_NAME_OUTPUT
from .extractor import resolve_resource_name
from .launcher import launch_job
from .poller import poll_until_terminal
from .reporter import print_job_output
from .request_builder import LaunchInputs, LaunchRequest, build_launch_request

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outcome of a job that finished without a failure status."""
    job_id: Optional[object]
    status: str
    output: str
    resource_name: Optional[str] = None


def export_resource_name(name: Optional[str], harness: Optional[ActionsHarness]) -> bool:
    """Publish ``name`` as the step output; returns whether anything was exported."""
    if name is None:
        logger.warning("No resource name exported as output variable.")
        return False
    if harness is not None:
        harness.set_output(RESOURCE_NAME_OUTPUT, name)
    logger.info("Resource name exported: %s", name)
    return True


@dataclass
class TowerJobPipeline:
    """Runs one job template end to end against a single Tower client."""
    request: LaunchRequest
    client: TowerClient
    harness: Optional[ActionsHarness] = None
    poll_interval: float = POLL_INTERVAL_SECONDS
    poll_timeout: Optional[float] = POLL_TIMEOUT_SECONDS
    cancel_event: Optional[threading.Event] = None
    sleep: Optional[Callable[[float], None]] = None

    @classmethod
    def from_inputs(
        cls,
        inputs: LaunchInputs,
        harness: Optional[ActionsHarness] = None,
        session: Optional[requests.Session] = None,
        **kwargs,
    ) -> "TowerJobPipeline":
        """Build the request and client, then wrap them in a pipeline."""
        request, client = build_launch_request(inputs, session=session)
        return cls(request=request, client=client, harness=harness, **kwargs)

    def wait_for_job(self, job_url: str) -> Dict[str, object]:
        """Poll the launched job until it finishes."""
        return poll_until_terminal(
            self.client,
            job_url,
            interval_seconds=self.poll_interval,
            timeout_seconds=self.poll_timeout,
            cancel_event=self.cancel_event,
            sleep=self.sleep,
        )

    def run(self) -> PipelineResult:
        """Launch, wait, report and export.  Any stage error aborts the rest."""
        job_url = launch_job(self.client, self.request)
        record = self.wait_for_job(job_url)
        output = print_job_output(self.client, record)
        resource_name = resolve_resource_name(record, output)
        export_resource_name(resource_name, self.harness)
        return PipelineResult(
            job_id=record.get("id"),
            status=str(record.get("status")),
            output=output,
            resource_name=resource_name,
        )
