__all__ = [
    # Config
    "BridgeConfig",
    "load_config",
    "apply_profile",
    # Errors
    "FerryError",
    "ConfigError",
    "PayloadError",
    "RpcError",
    "ToolNotFoundError",
    "ToolFailedError",
    # Deployer
    "DeployResult",
    "DeployedContract",
    "deploy_messaging_contracts",
    # Messaging
    "send_message",
    "consume_message",
    "build_send_message_tx",
    "build_consume_message_tx",
    # Selector
    "get_selector_from_name",
    "starkli_selector",
    # Payload
    "parse_payload",
]

from .config import BridgeConfig, apply_profile, load_config
from .errors import (
    ConfigError,
    FerryError,
    PayloadError,
    RpcError,
    ToolFailedError,
    ToolNotFoundError,
)
from .pneuma.forge import DeployedContract, DeployResult, deploy_messaging_contracts
from .pneuma.messaging import (
    build_consume_message_tx,
    build_send_message_tx,
    consume_message,
    send_message,
)
from .pneuma.starknet import get_selector_from_name, starkli_selector
from .utils import parse_payload
