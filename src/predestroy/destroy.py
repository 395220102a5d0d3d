"""Build and run the ``cdk destroy`` child process."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass, field

from .config import PreDestroyConfig
from .exceptions import DestroyCommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalCommand:
    """A child process run with inherited stdout/stderr."""

    program: str
    args: list[str]
    cwd: str = "."
    env_overrides: dict[str, str] = field(default_factory=dict)

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def display(self) -> str:
        return shlex.join(self.argv)


def build_destroy_command(
    entry_path: str,
    app_root: str = ".",
    profile: str | None = None,
    region: str | None = None,
    executable: str = "cdk",
) -> ExternalCommand:
    """Compose ``cdk destroy --all --force [--profile P] --app "npx ts-node <entry>"``."""
    args = ["destroy", "--all", "--force"]
    if profile:
        args += ["--profile", profile]
    args += ["--app", f"npx ts-node {entry_path}"]

    env_overrides = {}
    if region:
        env_overrides = {"AWS_REGION": region, "AWS_DEFAULT_REGION": region}

    return ExternalCommand(program=executable, args=args, cwd=app_root, env_overrides=env_overrides)


def command_from_config(config: PreDestroyConfig) -> ExternalCommand:
    return build_destroy_command(
        entry_path=config.entry_path,
        app_root=config.cdk_app_root,
        profile=config.profile,
        region=config.region,
        executable=config.cdk_executable,
    )


def run_command(command: ExternalCommand, dry_run: bool = False) -> int:
    """Run ``command`` to completion in its working directory.

    Returns:
        The process exit code (always 0 on success)

    Raises:
        DestroyCommandError: If the process cannot start or exits non-zero
    """
    if dry_run:
        logger.info("DRY RUN: would execute in %s: %s", command.cwd, command.display())
        return 0

    logger.info("Executing: %s", command.display())
    env = {**os.environ, **command.env_overrides} if command.env_overrides else None
    try:
        result = subprocess.run(command.argv, cwd=command.cwd, env=env, check=False)
    except OSError as e:
        raise DestroyCommandError(
            f"Failed to launch {command.program}: {e}", command=command.argv
        ) from e

    if result.returncode != 0:
        raise DestroyCommandError(
            f"{command.program} exited with status {result.returncode}",
            command=command.argv,
            returncode=result.returncode,
        )
    return result.returncode
