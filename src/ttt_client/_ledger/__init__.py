# Area: Ledger
"""
Ledger access: the gateway interface and its Solana implementation.
"""

from .gateway import LedgerGateway
from .rpc_client import RpcClient, RpcError
from .solana_gateway import SolanaGateway, load_keypair

__all__ = [
    "LedgerGateway",
    "RpcClient",
    "RpcError",
    "SolanaGateway",
    "load_keypair",
]
