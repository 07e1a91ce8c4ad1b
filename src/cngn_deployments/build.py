"""External contract build for cngn-deployments."""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from .constants import BUILD_COMMAND
from .exceptions import BuildError

logger = logging.getLogger(__name__)


def run_build(
    command: Sequence[str] = BUILD_COMMAND,
    cwd: Optional[Union[Path, str]] = None,
) -> None:
    """
    Run the contract build so artifacts under target/dev are current.

    Output goes straight to the console.

    Args:
        command: Build command and arguments (defaults to "scarb build")
        cwd: Project directory (defaults to the current directory)

    Raises:
        BuildError: If the build tool is missing or exits non-zero
    """
    logger.info("\nBuilding contracts...")
    try:
        subprocess.run(list(command), check=True, cwd=cwd)
    except FileNotFoundError as e:
        raise BuildError(f"Build tool not found: {command[0]}") from e
    except subprocess.CalledProcessError as e:
        raise BuildError(
            f"Build failed with exit code {e.returncode}. Please fix compilation errors."
        ) from e
    logger.info("Build successful!")
