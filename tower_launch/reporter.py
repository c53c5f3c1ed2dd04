"""
Fetch a finished job's stdout and report it according to the final status.
"""
from __future__ import annotations

import logging
from typing import Dict

from .client import TowerClient
from .config import STATUS_ERROR, STATUS_FAILED, STATUS_SUCCESSFUL, STDOUT_FORMAT
from .errors import JobErroredError, JobFailedError, StatusUnavailableError

logger = logging.getLogger(__name__)

ERROR_BANNER = "***************************Ansible Tower error output***************************"
TRACEBACK_BANNER = "***************************Ansible Tower traceback output***************************"
OUTPUT_BANNER = "******************************Ansible Tower output******************************"


def stdout_url(record: Dict[str, object]) -> str:
    """URL of the job's stdout resource."""
    related = record.get("related")
    if not isinstance(related, dict) or not related.get("stdout"):
        logger.info("%s", record)
        raise StatusUnavailableError(
            f"Job {record.get('id')} status has no link to its output."
        )
    return related["stdout"]


def fetch_job_output(client: TowerClient, record: Dict[str, object]) -> str:
    """Download the job's stdout as plain text."""
    return client.get_text(stdout_url(record), params={"format": STDOUT_FORMAT})


def report_job_output(record: Dict[str, object], output: str) -> str:
    """Log ``output`` for the record's final status.

    Raises ``JobFailedError`` / ``JobErroredError`` for ``failed`` / ``error``
    jobs; otherwise returns ``output`` unchanged.
    """
    status = record.get("status")
    job_id = record.get("id")
    logger.info("Final status: %s", status, extra={"job": {"id": job_id, "status": status}})

    if status == STATUS_FAILED and output:
        logger.info(ERROR_BANNER)
        logger.info("%s", output)
        raise JobFailedError(f"Ansible tower job {job_id} execution failed", job_id=job_id)

    if status == STATUS_ERROR:
        logger.info(ERROR_BANNER)
        logger.info("%s", output)
        logger.info(TRACEBACK_BANNER)
        logger.info("%s", record.get("result_traceback"))
        raise JobErroredError(
            f"An error has ocurred on Ansible tower trying to launch job {job_id}",
            job_id=job_id,
        )

    if status == STATUS_SUCCESSFUL and output:
        logger.info(OUTPUT_BANNER)
        logger.info("%s", output)
        return output

    logger.warning("An error ocurred trying to get the ansible tower output")
    logger.info("%s", output)
    return output


def print_job_output(client: TowerClient, record: Dict[str, object]) -> str:
    """Fetch and report the job output in one step."""
    return report_job_output(record, fetch_job_output(client, record))
