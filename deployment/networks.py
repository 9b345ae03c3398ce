from ape import networks
from ape.api.networks import LOCAL_NETWORK_NAME


def is_local_network() -> bool:
    """Returns True when connected to a local development network."""
    return networks.provider.network.name == LOCAL_NETWORK_NAME
