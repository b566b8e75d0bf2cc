#Description: Endpoint methods map their arguments to the right path, query string and body.

import asyncio
import json

import pytest

from models.schemas import TokenAddress
from services.dex_market import DexMarketService
from fakes import Recorder

BASE = "https://web3.example"


@pytest.fixture
def rec():
    return Recorder(payload=[{"ok": True}])


@pytest.fixture
def service(creds, rec):
    service = DexMarketService(credentials=creds, base_url=BASE, transport=rec.transport())
    yield service
    asyncio.run(service.aclose())


def call(service, name, *args, **kwargs):
    return asyncio.run(getattr(service, name)(*args, **kwargs))


def test_returns_envelope_data(service):
    assert call(service, "balance_chains") == [{"ok": True}]


def test_candlesticks_defaults(service, rec):
    call(service, "market_candlesticks", "1", "0xabc")
    assert rec.last.method == "GET"
    assert str(rec.last.url) == BASE + "/api/v6/dex/market/candles?bar=1m&chainIndex=1&limit=100&tokenContractAddress=0xabc"


def test_candlesticks_history_cursor(service, rec):
    call(service, "market_candlesticks_history", "1", "0xabc", after="1700000000000", bar="1H", limit=20)
    assert str(rec.last.url) == (
        BASE + "/api/v6/dex/market/historical-candles?after=1700000000000&bar=1H&chainIndex=1&limit=20"
        "&tokenContractAddress=0xabc"
    )


def test_trades_default_limit(service, rec):
    call(service, "market_trades", "501", "So11111111111111111111111111111111111111112")
    assert rec.last.url.params["limit"] == "100"
    assert "after" not in rec.last.url.params


def test_market_price_chains_optional_filter(service, rec):
    call(service, "market_price_chains")
    assert str(rec.last.url) == BASE + "/api/v6/dex/market/supported/chain"
    call(service, "market_price_chains", chain_index="1")
    assert str(rec.last.url) == BASE + "/api/v6/dex/market/supported/chain?chainIndex=1"


def test_market_price_posts_array(service, rec):
    call(service, "market_price", "1", "0xabc")
    assert rec.last.method == "POST"
    assert str(rec.last.url) == BASE + "/api/v6/dex/market/price"
    assert rec.last.content == b'[{"chainIndex":"1","tokenContractAddress":"0xabc"}]'


@pytest.mark.parametrize("name,path", [
    ("index_price", "/index/current-price"),
    ("market_token_basic_info", "/market/token/basic-info"),
    ("market_token_price_info", "/market/price-info"),
])
def test_token_list_bodies(service, rec, name, path):
    tokens = [TokenAddress(chain_index="1", token_contract_address="0xa"),
              {"chainIndex": "56", "tokenContractAddress": "0xb"}]
    call(service, name, tokens)
    assert rec.last.url.path == "/api/v6/dex" + path
    assert json.loads(rec.last.content) == [
        {"chainIndex": "1", "tokenContractAddress": "0xa"},
        {"chainIndex": "56", "tokenContractAddress": "0xb"},
    ]


def test_historical_index_price_defaults(service, rec):
    call(service, "historical_index_price", "1", period="1h")
    assert str(rec.last.url) == BASE + "/api/v6/dex/index/historical-price?chainIndex=1&limit=50&period=1h"


def test_chain_lists_joined(service, rec):
    call(service, "balance_total_value", "0xowner", ["1", "56"])
    assert str(rec.last.url) == (
        BASE + "/api/v6/dex/balance/total-value-by-address?address=0xowner&assetType=0&chains=1%2C56&excludeRiskToken=0"
    )
    assert rec.last.url.params["chains"] == "1,56"


def test_token_search_and_ranking(service, rec):
    call(service, "market_token_search", ["1", "501"], "weth")
    assert rec.last.url.params["chains"] == "1,501"
    assert rec.last.url.params["search"] == "weth"
    call(service, "market_token_ranking", ["1"], sort_by="2", time_frame="4")
    assert rec.last.url.path == "/api/v6/dex/market/token/toplist"
    assert dict(rec.last.url.params) == {"chains": "1", "sortBy": "2", "timeFrame": "4"}


def test_token_holder(service, rec):
    call(service, "market_token_holder", "1", "0xabc")
    assert dict(rec.last.url.params) == {"chainIndex": "1", "tokenContractAddress": "0xabc"}


def test_total_token_balances(service, rec):
    call(service, "balance_total_token_balances", "0xowner", ["1"], exclude_risk_token="1")
    assert rec.last.url.path == "/api/v6/dex/balance/all-token-balances-by-address"
    assert dict(rec.last.url.params) == {"address": "0xowner", "chains": "1", "excludeRiskToken": "1"}


def test_specific_token_balance_body(service, rec):
    call(service, "balance_specific_token_balance", "0xowner",
         [{"chain_index": "1", "token_contract_address": ""}])
    assert rec.last.method == "POST"
    assert json.loads(rec.last.content) == {
        "address": "0xowner",
        "tokenContractAddresses": [{"chainIndex": "1", "tokenContractAddress": ""}],
        "excludeRiskToken": "0",
    }


@pytest.mark.parametrize("name", ["index_price_chains", "balance_chains", "tx_history_chains"])
def test_supported_chain_endpoints(service, rec, name):
    call(service, name)
    assert str(rec.last.url) == BASE + "/api/v6/dex/balance/supported/chain"


def test_transactions_by_address_optional_chains(service, rec):
    call(service, "tx_history_transactions_by_address", "0xowner", limit=20)
    assert str(rec.last.url) == (
        BASE + "/api/v6/dex/post-transaction/transactions-by-address?address=0xowner&limit=20"
    )
    call(service, "tx_history_transactions_by_address", "0xowner", chains=["1", "10"], cursor="abc")
    assert dict(rec.last.url.params) == {"address": "0xowner", "chains": "1,10", "cursor": "abc"}


def test_transaction_detail(service, rec):
    call(service, "tx_history_specific_transaction_detail_by_txhash", "1", "0xhash", itype="2")
    assert rec.last.url.path == "/api/v6/dex/post-transaction/transaction-detail-by-txhash"
    assert dict(rec.last.url.params) == {"chainIndex": "1", "itype": "2", "txHash": "0xhash"}


def test_api_version_override(creds, rec):
    service = DexMarketService(credentials=creds, base_url=BASE, api_version="v5", transport=rec.transport())
    call(service, "balance_chains")
    assert rec.last.url.path == "/api/v5/dex/balance/supported/chain"
    asyncio.run(service.aclose())


def test_two_calls_share_one_client(service, rec):
    call(service, "balance_chains")
    call(service, "market_token_holder", "1", "0xabc")
    assert len(rec.requests) == 2
    assert not service.client.client.is_closed


@pytest.mark.parametrize("name,args", [
    ("market_token_search", ("56", "weth")),
    ("market_token_ranking", ("56", "2", "4")),
    ("balance_total_value", ("0xowner", "56")),
    ("balance_total_token_balances", ("0xowner", "56")),
])
def test_bare_string_chains_rejected(service, rec, name, args):
    with pytest.raises(TypeError, match="chains"):
        call(service, name, *args)
    assert rec.requests == []


def test_bare_string_chains_rejected_for_history(service, rec):
    with pytest.raises(TypeError):
        call(service, "tx_history_transactions_by_address", "0xowner", chains="56")
    assert rec.requests == []


def test_single_chain_list(service, rec):
    call(service, "balance_total_value", "0xowner", ["56"])
    assert rec.last.url.params["chains"] == "56"
