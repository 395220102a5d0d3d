"""Service draining: scale every ECS service to zero, then delete it.

Services are handled one at a time. A failed update skips that service
entirely; a failed or timed-out stability wait is logged and the forced
delete goes ahead anyway. Only the initial listing call is fatal.
"""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from .arn import arn_to_name
from .exceptions import ClusterOperationError

logger = logging.getLogger(__name__)


class ServiceDrainer:
    """Stops and removes the services of one ECS cluster."""

    def __init__(
        self,
        ecs_client: Any,
        wait_delay_seconds: int = 15,
        wait_max_attempts: int = 40,
        dry_run: bool = False,
    ):
        self.ecs_client = ecs_client
        self.wait_delay_seconds = wait_delay_seconds
        self.wait_max_attempts = wait_max_attempts
        self.dry_run = dry_run

    def list_service_arns(self, cluster_name: str) -> list[str]:
        paginator = self.ecs_client.get_paginator("list_services")
        try:
            return [
                arn
                for page in paginator.paginate(cluster=cluster_name)
                for arn in page.get("serviceArns", [])
            ]
        except (BotoCoreError, ClientError) as e:
            raise ClusterOperationError(
                f"Failed to list services in cluster {cluster_name}: {e}",
                cluster_name=cluster_name,
                operation="ListServices",
            ) from e

    def drain(self, cluster_name: str) -> None:
        """Scale down and delete every service in ``cluster_name``.

        Raises:
            ClusterOperationError: If the services cannot be listed
        """
        service_arns = self.list_service_arns(cluster_name)
        if not service_arns:
            logger.info("No ECS services found in cluster: %s", cluster_name)
            return

        for service_arn in service_arns:
            self._drain_service(cluster_name, arn_to_name(service_arn))

    def _drain_service(self, cluster_name: str, service_name: str) -> None:
        if self.dry_run:
            logger.info(
                "DRY RUN: scale service %s to 0, wait and delete (cluster=%s)", service_name, cluster_name
            )
            return

        logger.info("[Service: %s] Setting desired count to 0...", service_name)
        try:
            self.ecs_client.update_service(cluster=cluster_name, service=service_name, desiredCount=0)
        except (BotoCoreError, ClientError) as e:
            logger.error("Failed to update service(%s) desiredCount=0: %s", service_name, e)
            return

        try:
            self.wait_until_stable(cluster_name, service_name)
        except (BotoCoreError, ClientError) as e:
            logger.warning("Waiting for service(%s) to stabilize failed: %s", service_name, e)

        logger.info("[Service: %s] Deleting...", service_name)
        try:
            self.ecs_client.delete_service(cluster=cluster_name, service=service_name, force=True)
        except (BotoCoreError, ClientError) as e:
            logger.error("Failed to delete service(%s): %s", service_name, e)

    def wait_until_stable(self, cluster_name: str, service_name: str) -> None:
        """Block until the service is stable or the waiter gives up."""
        waiter = self.ecs_client.get_waiter("services_stable")
        waiter.wait(
            cluster=cluster_name,
            services=[service_name],
            WaiterConfig={"Delay": self.wait_delay_seconds, "MaxAttempts": self.wait_max_attempts},
        )
