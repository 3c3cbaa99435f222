"""Outbound mail port."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class Mailer(ABC):
    """Sends a localized notification mail.

    The core only names the message: ``subject_key`` is a key into the
    caller's string catalog and ``body_template`` names the template to
    render with ``data``. Rendering belongs to the implementation.
    """

    @abstractmethod
    def send(
        self,
        recipient: str,
        subject_key: str,
        body_template: str,
        data: Mapping[str, Any],
    ) -> None:
        """Deliver one message.

        Raises
        ------
        Exception
            Any delivery failure; the identity service reports it without
            rolling back the operation that triggered the mail.
        """
