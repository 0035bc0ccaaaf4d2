"""
Console activation notifier adapter - Implements ActivationNotifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging activation links for demo purposes.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleActivationNotifier:
    """
    Implements ActivationNotifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints activation links to the log.
    """

    def send_activation_link(self, email: str, link: str) -> None:
        """
        Log the activation link (simulates email delivery).

        Args:
            email: Recipient email address (normalized by domain layer)
            link: Absolute activation URL
        """
        logger.info("[ACTIVATION] Email: %s Link: %s", email, link)
