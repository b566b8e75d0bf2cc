#Description: OKX Web3 API adapters. Their loguru records stay off until the host calls logger.enable("adapters").

from loguru import logger

logger.disable("adapters")
