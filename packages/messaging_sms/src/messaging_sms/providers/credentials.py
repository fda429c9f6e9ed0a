"""
Gateway Credentials

Resolves the account a message is submitted under.

CDAC uses a single account for every sender id. NIC registers a separate
username/pin pair per sender id (e.g. INPOST, DOPBNK), configured as a JSON
map in SMS_NIC_CREDENTIALS. Several sender ids may share one pair.
"""

import logging
from dataclasses import dataclass

from basecore.settings import SenderCredential, Settings

from messaging_sms.contracts.payloads import Gateway
from messaging_sms.errors import MissingCredentialsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayCredentials:
    """Account used for one gateway call."""

    username: str
    password: str
    secure_key: str = ""

    def __repr__(self) -> str:
        return f"GatewayCredentials(username={self.username!r})"


class CredentialProvider:
    """Looks up gateway credentials for a (gateway, sender id) pair."""

    def __init__(
        self,
        cdac: GatewayCredentials | None = None,
        nic: dict[str, GatewayCredentials] | None = None,
    ):
        self.cdac = cdac
        self.nic = {sender.upper(): creds for sender, creds in (nic or {}).items()}

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialProvider":
        cdac = None
        if settings.SMS_CDAC_USERNAME:
            cdac = GatewayCredentials(
                username=settings.SMS_CDAC_USERNAME,
                password=settings.SMS_CDAC_PASSWORD,
                secure_key=settings.SMS_CDAC_SECURE_KEY,
            )

        nic = {
            sender_id: _from_sender_credential(credential)
            for sender_id, credential in settings.SMS_NIC_CREDENTIALS.items()
        }
        return cls(cdac=cdac, nic=nic)

    def for_request(self, gateway: Gateway, sender_id: str) -> GatewayCredentials:
        """
        Credentials for submitting on behalf of sender_id.

        Raises:
            MissingCredentialsError: Nothing configured for this gateway/sender
        """
        if gateway == Gateway.CDAC:
            creds = self.cdac
        else:
            creds = self.nic.get(sender_id.strip().upper())

        if creds is None:
            logger.warning(
                "No gateway credentials for sender",
                extra={"gateway": gateway.value, "sender_id": sender_id},
            )
            raise MissingCredentialsError(gateway.name, sender_id)

        return creds


def _from_sender_credential(credential: SenderCredential) -> GatewayCredentials:
    return GatewayCredentials(username=credential.username, password=credential.password)
