"""
Network parameter resolution
"""

from typing import Dict

from stellar_sdk import Network

from ..errors import ConfigurationError


STANDALONE = "standalone"
TESTNET = "testnet"

NETWORK_PASSPHRASES: Dict[str, str] = {
    STANDALONE: Network.STANDALONE_NETWORK_PASSPHRASE,
    TESTNET: Network.TESTNET_NETWORK_PASSPHRASE,
}


def is_supported_network(network: str) -> bool:
    return network in NETWORK_PASSPHRASES


def get_network_passphrase(network: str) -> str:
    """
    Get the signing passphrase for a network name

    Args:
        network: "standalone" or "testnet"

    Raises:
        ConfigurationError: for any other name
    """
    passphrase = NETWORK_PASSPHRASES.get(network)
    if passphrase is None:
        raise ConfigurationError.unsupported_network(network)
    return passphrase
