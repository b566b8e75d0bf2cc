#Description: OKX DEX market data service: one coroutine per remote endpoint, delegating to the signed adapter.

import os
from threading import Lock
from typing import Any, Iterable, Mapping, Union

import httpx

from adapters.okx_common import OKXBaseAdapter
from models.schemas import Credentials, TokenAddress
from utils.config import load_credentials, settings

TokenLike = Union[TokenAddress, Mapping[str, str]]

def _tokens(items: Iterable[TokenLike]) -> list[dict[str, str]]:
    """Normalize {chainIndex, tokenContractAddress} pairs to their wire form."""
    return [TokenAddress.model_validate(t).model_dump(by_alias=True) for t in items]

def _chains(chains: Iterable[str] | None) -> str | None:
    # a bare str is iterable too and would be split into characters
    if isinstance(chains, str):
        raise TypeError(f"chains must be a list of chain indices, not a str: {chains!r}")
    return None if chains is None else ",".join(chains)

class DexMarketService:
    _instance = None
    _lock = Lock()

    def __init__(
        self,
        credentials: Credentials | None = None,
        base_url: str | None = None,
        timeout_ms: int | None = None,
        api_version: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        # credentials are resolved eagerly so a bad environment fails here, not on first call
        if credentials is None:
            credentials = load_credentials(os.environ)
        self.client = OKXBaseAdapter(
            credentials,
            base_url=settings.OKX_BASE_URL if base_url is None else base_url,
            timeout_ms=settings.OKX_TIMEOUT_MS if timeout_ms is None else timeout_ms,
            transport=transport,
        )
        self.api_version = api_version or settings.OKX_API_VERSION

    @classmethod
    def instance(cls):
        """Shared service built from the environment. Use it from a single event loop."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = DexMarketService()
        return cls._instance

    def _path(self, suffix: str) -> str:
        return f"/api/{self.api_version}/dex{suffix}"

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "DexMarketService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # -----------------------
    # Market price
    # -----------------------
    async def market_price_chains(self, chain_index: str | None = None) -> Any:
        return await self.client.get_json(
            self._path("/market/supported/chain"), {"chainIndex": chain_index}
        )

    async def market_price(self, chain_index: str, token_contract_address: str) -> Any:
        """Latest price for one token. The endpoint takes an array body."""
        return await self.client.post_json(
            self._path("/market/price"),
            [{"chainIndex": chain_index, "tokenContractAddress": token_contract_address}],
        )

    async def market_trades(
        self,
        chain_index: str,
        token_contract_address: str,
        after: str | None = None,
        limit: int = 100,
    ) -> Any:
        return await self.client.get_json(self._path("/market/trades"), {
            "chainIndex": chain_index,
            "tokenContractAddress": token_contract_address,
            "after": after,
            "limit": limit,
        })

    async def market_candlesticks(
        self,
        chain_index: str,
        token_contract_address: str,
        after: str | None = None,
        before: str | None = None,
        bar: str = "1m",
        limit: int = 100,
    ) -> Any:
        """Candles as rows of strings: [ts, o, h, l, c, vol, volUsd, confirm]."""
        return await self.client.get_json(self._path("/market/candles"), {
            "chainIndex": chain_index,
            "tokenContractAddress": token_contract_address,
            "after": after,
            "before": before,
            "bar": bar,
            "limit": limit,
        })

    async def market_candlesticks_history(
        self,
        chain_index: str,
        token_contract_address: str,
        after: str | None = None,
        before: str | None = None,
        bar: str = "1m",
        limit: int = 100,
    ) -> Any:
        return await self.client.get_json(self._path("/market/historical-candles"), {
            "chainIndex": chain_index,
            "tokenContractAddress": token_contract_address,
            "after": after,
            "before": before,
            "bar": bar,
            "limit": limit,
        })

    # -----------------------
    # Index price
    # -----------------------
    async def index_price_chains(self) -> Any:
        return await self.client.get_json(self._path("/balance/supported/chain"))

    async def index_price(self, token_contract_addresses: Iterable[TokenLike]) -> Any:
        return await self.client.post_json(
            self._path("/index/current-price"), _tokens(token_contract_addresses)
        )

    async def historical_index_price(
        self,
        chain_index: str,
        token_contract_address: str | None = None,
        limit: int = 50,
        cursor: str | None = None,
        begin: str | None = None,
        end: str | None = None,
        period: str | None = None,
    ) -> Any:
        """
        Historical index price, paged by `cursor`.

        begin/end are millisecond timestamps as strings; period is e.g. 5m, 1h, 1d.
        """
        return await self.client.get_json(self._path("/index/historical-price"), {
            "chainIndex": chain_index,
            "tokenContractAddress": token_contract_address,
            "limit": limit,
            "cursor": cursor,
            "begin": begin,
            "end": end,
            "period": period,
        })

    # -----------------------
    # Token
    # -----------------------
    async def market_token_search(self, chains: Iterable[str], search: str) -> Any:
        return await self.client.get_json(self._path("/market/token/search"), {
            "chains": _chains(chains),
            "search": search,
        })

    async def market_token_basic_info(self, tokens: Iterable[TokenLike]) -> Any:
        return await self.client.post_json(self._path("/market/token/basic-info"), _tokens(tokens))

    async def market_token_price_info(self, tokens: Iterable[TokenLike]) -> Any:
        return await self.client.post_json(self._path("/market/price-info"), _tokens(tokens))

    async def market_token_ranking(self, chains: Iterable[str], sort_by: str, time_frame: str) -> Any:
        return await self.client.get_json(self._path("/market/token/toplist"), {
            "chains": _chains(chains),
            "sortBy": sort_by,
            "timeFrame": time_frame,
        })

    async def market_token_holder(self, chain_index: str, token_contract_address: str) -> Any:
        return await self.client.get_json(self._path("/market/token/holder"), {
            "chainIndex": chain_index,
            "tokenContractAddress": token_contract_address,
        })

    # -----------------------
    # Balance
    # -----------------------
    async def balance_chains(self) -> Any:
        return await self.client.get_json(self._path("/balance/supported/chain"))

    async def balance_total_value(
        self,
        address: str,
        chains: Iterable[str],
        asset_type: str = "0",
        exclude_risk_token: str = "0",
    ) -> Any:
        return await self.client.get_json(self._path("/balance/total-value-by-address"), {
            "address": address,
            "chains": _chains(chains),
            "assetType": asset_type,
            "excludeRiskToken": exclude_risk_token,
        })

    async def balance_total_token_balances(
        self, address: str, chains: Iterable[str], exclude_risk_token: str = "0"
    ) -> Any:
        return await self.client.get_json(self._path("/balance/all-token-balances-by-address"), {
            "address": address,
            "chains": _chains(chains),
            "excludeRiskToken": exclude_risk_token,
        })

    async def balance_specific_token_balance(
        self,
        address: str,
        token_contract_addresses: Iterable[TokenLike],
        exclude_risk_token: str = "0",
    ) -> Any:
        return await self.client.post_json(self._path("/balance/token-balances-by-address"), {
            "address": address,
            "tokenContractAddresses": _tokens(token_contract_addresses),
            "excludeRiskToken": exclude_risk_token,
        })

    # -----------------------
    # Transaction history
    # -----------------------
    async def tx_history_chains(self) -> Any:
        return await self.client.get_json(self._path("/balance/supported/chain"))

    async def tx_history_transactions_by_address(
        self,
        address: str,
        chains: Iterable[str] | None = None,
        token_contract_address: str | None = None,
        begin: str | None = None,
        end: str | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> Any:
        return await self.client.get_json(self._path("/post-transaction/transactions-by-address"), {
            "address": address,
            "chains": _chains(chains),
            "tokenContractAddress": token_contract_address,
            "begin": begin,
            "end": end,
            "cursor": cursor,
            "limit": limit,
        })

    async def tx_history_specific_transaction_detail_by_txhash(
        self, chain_index: str, tx_hash: str, itype: str | None = None
    ) -> Any:
        return await self.client.get_json(self._path("/post-transaction/transaction-detail-by-txhash"), {
            "chainIndex": chain_index,
            "txHash": tx_hash,
            "itype": itype,
        })
