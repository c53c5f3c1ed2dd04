"""
Launch a job template and return the job's polling URL.
"""
from __future__ import annotations

import logging

from .client import TowerClient
from .config import LAUNCH_PATH_TEMPLATE
from .errors import LaunchRejectedError, LaunchUnavailableError
from .request_builder import LaunchRequest

logger = logging.getLogger(__name__)


def launch_job(client: TowerClient, request: LaunchRequest) -> str:
    """POST the launch request; return the ``url`` of the created job."""
    template_id = request.template_id
    logger.info("Launching Template ID %s on Ansible Tower...", template_id)

    response = client.post_json(
        LAUNCH_PATH_TEMPLATE.format(template_id=template_id),
        body=request.body(),
    )

    if isinstance(response, dict) and response.get("job") and response.get("url"):
        logger.info("Template Id %s launched successfully.", template_id)
        logger.info(
            "Job %s was created on Ansible Tower: Status %s.",
            response["job"],
            response.get("status"),
        )
        return response.get("url")

    if isinstance(response, dict) and response.get("detail"):
        logger.info(
            "Template ID %s couldn't be launched, the Ansible API is returning the following error:",
            template_id,
        )
        raise LaunchRejectedError(str(response["detail"]))

    logger.info("%s", response)
    raise LaunchUnavailableError(
        f"Template ID {template_id} couldn't be launched, the Ansible API is not working"
    )
