"""Pytest configuration and shared fixtures for pre-destroy tests."""

from __future__ import annotations

import os
from unittest.mock import MagicMock

import pytest

from src.predestroy.config import PreDestroyConfig

from .stubs import ecs_client_with, set_pages


@pytest.fixture
def sample_config() -> PreDestroyConfig:
    """Sample configuration for testing."""
    return PreDestroyConfig(
        stack="web-stack",
        profile="prod",
        cdk_app_root="/app",
        cdk_app_path="/app/bin/app.ts",
    )


@pytest.fixture
def mock_cfn_client() -> MagicMock:
    """Mock CloudFormation client with a stack holding one cluster."""
    client = MagicMock()
    set_pages(
        client,
        [
            {
                "StackResourceSummaries": [
                    {"ResourceType": "AWS::IAM::Role", "PhysicalResourceId": "web-role"},
                    {"ResourceType": "AWS::ECS::Cluster", "PhysicalResourceId": "web-cluster"},
                ]
            }
        ],
    )
    return client


@pytest.fixture
def mock_ecs_client() -> MagicMock:
    """Mock ECS client with no services and no tasks."""
    return ecs_client_with()


@pytest.fixture
def aws_context(mock_cfn_client, mock_ecs_client) -> MagicMock:
    """AwsContext double exposing the mock clients."""
    aws = MagicMock()
    aws.cloudformation = mock_cfn_client
    aws.ecs = mock_ecs_client
    return aws


@pytest.fixture(autouse=True)
def clean_environment():
    """Clean up environment variables after each test."""
    yield
    test_env_vars = ["AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"]
    for var in test_env_vars:
        if var in os.environ:
            del os.environ[var]
