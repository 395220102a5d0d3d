"""AWS credential and region context shared by every stage."""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import BotoCoreError, ProfileNotFound

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"


class AwsContext:
    """One boto3 session plus the clients created from it."""

    def __init__(self, session: boto3.Session, region_name: str):
        self.session = session
        self.region_name = region_name
        self._cloudformation_client = None
        self._ecs_client = None

    @classmethod
    def create(cls, profile: str | None = None, region: str | None = None) -> "AwsContext":
        """Resolve credentials and region once at startup.

        Raises:
            ConfigurationError: If the profile does not exist or the session cannot be built
        """
        try:
            session = boto3.Session(profile_name=profile or None, region_name=region or None)
        except ProfileNotFound as e:
            raise ConfigurationError(f"AWS profile not found: {profile}", config_key="profile") from e
        except BotoCoreError as e:
            raise ConfigurationError(f"Failed to load AWS configuration: {e}") from e

        region_name = session.region_name
        if not region_name:
            logger.info("No AWS region configured, falling back to %s", DEFAULT_REGION)
            region_name = DEFAULT_REGION

        return cls(session, region_name)

    @property
    def cloudformation(self):
        """Lazy-loaded CloudFormation client."""
        if self._cloudformation_client is None:
            self._cloudformation_client = self.session.client(
                "cloudformation", region_name=self.region_name
            )
        return self._cloudformation_client

    @property
    def ecs(self):
        """Lazy-loaded ECS client."""
        if self._ecs_client is None:
            self._ecs_client = self.session.client("ecs", region_name=self.region_name)
        return self._ecs_client
