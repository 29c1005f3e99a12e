"""
Known networks and their block explorers.
"""

from typing import Dict

from .errors import FatalConfigurationError


class NetworkConfig:
    """Chain identity and explorer location for one network."""

    def __init__(self, name: str, display_name: str, chain_id: int, explorer_url: str):
        self.name = name
        self.display_name = display_name
        self.chain_id = chain_id
        self.explorer_url = explorer_url.rstrip('/')

    def address_url(self, address: str) -> str:
        """Explorer page for a contract address."""
        return f"{self.explorer_url}/address/{address}"


NETWORKS: Dict[str, NetworkConfig] = {
    network.name: network
    for network in (
        NetworkConfig('base-sepolia', 'Base Sepolia', 84532, 'https://sepolia.basescan.org'),
        NetworkConfig('base', 'Base', 8453, 'https://basescan.org'),
        NetworkConfig('sepolia', 'Sepolia', 11155111, 'https://sepolia.etherscan.io'),
        NetworkConfig('mainnet', 'Ethereum', 1, 'https://etherscan.io'),
    )
}


def get_network(name: str) -> NetworkConfig:
    try:
        return NETWORKS[name]
    except KeyError:
        known = ', '.join(sorted(NETWORKS))
        raise FatalConfigurationError(f"Unknown network '{name}' (known: {known})") from None
