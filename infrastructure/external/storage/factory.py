"""Presigned URL signer factory with registry pattern."""
from typing import Callable
import importlib

from core.logging_config import get_logger
from .base import PresignedURLSigner
from .config import StorageConfig, SignerType
from .exceptions import ConfigurationError
from . import sigv4

logger = get_logger(__name__)

# Signer builder type
SignerBuilder = Callable[..., PresignedURLSigner]

# Global registry for signing strategies
_signer_registry: dict[SignerType, SignerBuilder] = {}


def register_signer(
    signer_type: SignerType,
    builder: SignerBuilder
) -> None:
    """Register a signer builder.

    Args:
        signer_type: Signing strategy
        builder: Function ``(config, clock) -> PresignedURLSigner``
    """
    _signer_registry[SignerType(signer_type)] = builder
    logger.debug("signer_registered", signer=SignerType(signer_type).value)


def create_signer(
    config: StorageConfig,
    clock: sigv4.Clock = sigv4.utc_now,
) -> PresignedURLSigner:
    """Create the signer selected by ``config.signer``.

    Args:
        config: Storage configuration
        clock: Source of the signing instant

    Returns:
        Configured signer instance

    Raises:
        ConfigurationError: If the strategy is unknown or settings are missing
    """
    try:
        signer_type = SignerType(config.signer)
    except ValueError:
        raise ConfigurationError(
            f"Unknown signer '{config.signer}'. "
            f"Available: {[t.value for t in SignerType]}"
        )

    if signer_type not in _signer_registry:
        _auto_register_signers()

        if signer_type not in _signer_registry:
            raise ConfigurationError(
                f"Signer '{signer_type.value}' not registered. "
                f"Available: {[t.value for t in _signer_registry]}"
            )

    return _signer_registry[signer_type](config, clock)


def _auto_register_signers() -> None:
    """Auto-register built-in signers."""
    signers = [
        (SignerType.MANUAL, "infrastructure.external.storage.signers.manual", "build_manual_signer"),
        (SignerType.SDK, "infrastructure.external.storage.signers.sdk", "build_sdk_signer"),
    ]

    for signer_type, module_path, builder_name in signers:
        if signer_type in _signer_registry:
            continue

        try:
            module = importlib.import_module(module_path)
            builder = getattr(module, builder_name)
            register_signer(signer_type, builder)
        except (ImportError, AttributeError) as e:
            logger.debug("signer_unavailable", signer=signer_type.value, error=str(e))
