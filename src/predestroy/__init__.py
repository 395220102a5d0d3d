"""ECS pre-destroy - drain ECS workloads before ``cdk destroy``.

Scales down and removes the ECS services and tasks of a CloudFormation
stack so that the CDK destroy that follows does not hang on them.
"""

__version__ = "0.1.0"

from .config import PreDestroyConfig
from .exceptions import PreDestroyError

__all__ = [
    "PreDestroyConfig",
    "PreDestroyError",
]
