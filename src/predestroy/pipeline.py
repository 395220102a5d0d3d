"""Pre-destroy pipeline: inspect stack, drain services, stop tasks, destroy.

Stages run strictly in order. Any ``PreDestroyError`` raised by a stage
ends the run; per-service and per-task failures are logged by the
stages themselves and never reach this level.
"""

from __future__ import annotations

import logging

from .aws import AwsContext
from .config import PreDestroyConfig
from .destroy import command_from_config, run_command
from .services import ServiceDrainer
from .stack import StackInspector
from .tasks import TaskReaper

logger = logging.getLogger(__name__)


def clean_cluster(config: PreDestroyConfig, aws: AwsContext, cluster_name: str) -> None:
    """Drain services, then stop whatever tasks are left."""
    drainer = ServiceDrainer(
        aws.ecs,
        wait_delay_seconds=config.service_wait_delay_seconds,
        wait_max_attempts=config.service_wait_max_attempts,
        dry_run=config.dry_run,
    )
    drainer.drain(cluster_name)

    TaskReaper(aws.ecs, dry_run=config.dry_run).reap(cluster_name)


def run_predestroy(config: PreDestroyConfig, aws: AwsContext) -> None:
    """Run all four stages for ``config.stack``.

    Raises:
        PreDestroyError: On the first fatal failure
    """
    cluster_name = StackInspector(aws.cloudformation).find_cluster_name(config.stack)

    if not cluster_name:
        logger.info("No ECS::Cluster resource found in stack %s", config.stack)
    else:
        logger.info("Detected ECS Cluster: %s", cluster_name)
        clean_cluster(config, aws, cluster_name)

    run_command(command_from_config(config), dry_run=config.dry_run)
    logger.info("All done.")
