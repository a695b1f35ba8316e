from typing import Optional

from ape import networks
from ape.api import ProviderAPI

from metalock.constants import LOCAL_NETWORKS


def is_local_network(provider: Optional[ProviderAPI] = None) -> bool:
    """Returns True when connected to a local development network."""
    provider = provider or networks.provider
    return provider.network.name in LOCAL_NETWORKS


def get_required_confirmations(provider: Optional[ProviderAPI] = None) -> int:
    """Returns the number of confirmations the connected network considers final."""
    provider = provider or networks.provider
    return provider.network.required_confirmations
