"""Stop tasks still running in an ECS cluster."""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from .arn import arn_to_name
from .exceptions import ClusterOperationError

logger = logging.getLogger(__name__)

STOP_REASON = "Cleanup before destroy"


class TaskReaper:
    """Stops every task whose desired status is RUNNING."""

    def __init__(self, ecs_client: Any, dry_run: bool = False):
        self.ecs_client = ecs_client
        self.dry_run = dry_run

    def list_running_task_arns(self, cluster_name: str) -> list[str]:
        paginator = self.ecs_client.get_paginator("list_tasks")
        try:
            return [
                arn
                for page in paginator.paginate(cluster=cluster_name, desiredStatus="RUNNING")
                for arn in page.get("taskArns", [])
            ]
        except (BotoCoreError, ClientError) as e:
            raise ClusterOperationError(
                f"Failed to list tasks in cluster {cluster_name}: {e}",
                cluster_name=cluster_name,
                operation="ListTasks",
            ) from e

    def reap(self, cluster_name: str) -> None:
        """Stop the running tasks of ``cluster_name``; stop failures are logged."""
        task_arns = self.list_running_task_arns(cluster_name)
        if not task_arns:
            logger.info("No running tasks found in cluster: %s", cluster_name)
            return

        for task_arn in task_arns:
            task_name = arn_to_name(task_arn)
            if self.dry_run:
                logger.info("DRY RUN: stop task %s (cluster=%s)", task_name, cluster_name)
                continue

            logger.info("[Task: %s] Stopping...", task_name)
            try:
                self.ecs_client.stop_task(cluster=cluster_name, task=task_arn, reason=STOP_REASON)
            except (BotoCoreError, ClientError) as e:
                logger.error("Failed to stop task(%s): %s", task_name, e)
