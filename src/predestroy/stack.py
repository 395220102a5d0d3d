"""Stack inspection: find the ECS cluster declared in a CloudFormation stack."""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import StackInspectionError

logger = logging.getLogger(__name__)

CLUSTER_RESOURCE_TYPE = "AWS::ECS::Cluster"


class StackInspector:
    """Reads resource summaries of a CloudFormation stack."""

    def __init__(self, cloudformation_client: Any):
        self.cloudformation_client = cloudformation_client

    def find_cluster_name(self, stack_name: str) -> str | None:
        """Return the physical id of the first ECS cluster in ``stack_name``.

        Args:
            stack_name: CloudFormation stack name or id

        Returns:
            The cluster name, or ``None`` if the stack declares no cluster

        Raises:
            StackInspectionError: If the stack resources cannot be listed
        """
        paginator = self.cloudformation_client.get_paginator("list_stack_resources")
        try:
            for page in paginator.paginate(StackName=stack_name):
                for summary in page.get("StackResourceSummaries", []):
                    if summary.get("ResourceType") == CLUSTER_RESOURCE_TYPE:
                        return summary.get("PhysicalResourceId") or None
        except (BotoCoreError, ClientError) as e:
            raise StackInspectionError(
                f"Failed to list resources of stack {stack_name}: {e}",
                stack_name=stack_name,
            ) from e
        return None
