"""Operator confirmation before deploying to a high-stakes network."""

import logging
from typing import Callable

from .constants import NETWORK_CONFIG

logger = logging.getLogger(__name__)

CONFIRMATION_PROMPT = "Type 'yes' to continue: "


def is_high_stakes(network: str) -> bool:
    """Whether deploying to a network spends real funds."""
    return bool(NETWORK_CONFIG[network]["high_stakes"])


def confirm_deployment(network: str, prompt: Callable[[str], str] = input) -> bool:
    """
    Ask the operator to confirm a deployment to a high-stakes network.

    Non-high-stakes networks proceed without prompting. Otherwise only an
    answer of exactly "yes" (any case) proceeds.

    Args:
        network: Canonical network name
        prompt: Function that shows a prompt and returns the answer

    Returns:
        True to proceed, False if the operator declined
    """
    if not is_high_stakes(network):
        return True

    logger.warning("\nWARNING: You are deploying to %s!", network.upper())
    logger.warning("This will cost real funds and cannot be undone.")

    try:
        answer = prompt(CONFIRMATION_PROMPT)
    except EOFError:
        answer = ""

    if answer.lower() != "yes":
        logger.info("Deployment cancelled.")
        return False
    return True
