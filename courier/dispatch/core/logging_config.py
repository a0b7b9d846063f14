from typing import TYPE_CHECKING, Optional

from courier.common.core.logging_config import setup_logging as common_setup_logging

if TYPE_CHECKING:
    from ..config import DispatchConfig


def setup_logging(dispatch_config: Optional["DispatchConfig"] = None):
    """
    Load the YAML config named by LOG_CONFIG_PATH and initialize logging.
    """
    if dispatch_config is None:
        from ..config import config as dispatch_config

    common_setup_logging(dispatch_config.LOG_CONFIG_PATH)
