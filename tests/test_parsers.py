# -*- coding: utf-8 -*-
"""
Tests for response normalization.
"""

from decimal import Decimal

import pytest

from okx_client.errors import InsufficientFunds
from okx_client.models.orders import OrderStatus
from okx_client.parsers import (
    parse_balance,
    parse_create_order_results,
    parse_ledger_entry,
    parse_order,
    parse_order_status,
    parse_order_type,
    parse_position,
    parse_trade,
    parse_transfer,
)


class TestOrderStatus:
    """Venue states collapse onto open/closed/canceled."""

    @pytest.mark.parametrize(
        "state,expected",
        [
            ("live", "open"),
            ("partially_filled", "open"),
            ("filled", "closed"),
            ("effective", "closed"),
            ("canceled", "canceled"),
            ("order_failed", "canceled"),
            ("mmp_canceled", "canceled"),
        ],
    )
    def test_mapped(self, state, expected):
        assert parse_order_status(state) == expected

    def test_unmapped_passes_through(self):
        assert parse_order_status("pause") == "pause"

    def test_absent(self):
        assert parse_order_status(None) is None


class TestOrderType:

    @pytest.mark.parametrize(
        "data,expected",
        [
            ({"ordType": "market"}, "market"),
            ({"ordType": "optimal_limit_ioc"}, "market"),
            ({"ordType": "post_only"}, "limit"),
            ({"ordType": "fok"}, "limit"),
            ({"ordType": "trigger", "ordPx": "-1"}, "market"),
            ({"ordType": "trigger", "ordPx": "30000"}, "limit"),
            ({"ordType": "conditional", "slOrdPx": "-1"}, "market"),
            ({"ordType": "oco", "ordPx": "", "tpOrdPx": "35000"}, "limit"),
            ({"ordType": "move_order_stop"}, "market"),
        ],
    )
    def test_types(self, data, expected):
        assert parse_order_type(data) == expected


class TestParseOrder:
    """Plain and algo order normalization."""

    def test_spot_limit_order(self, spot_limit_order_data, spot_market):
        order = parse_order(spot_limit_order_data, spot_market)

        assert order.id == "312269865356374016"
        assert order.client_order_id == "b1"
        assert order.status == OrderStatus.OPEN
        assert order.symbol == "BTC/USDT"
        assert order.side == "buy"
        assert order.type == "limit"
        assert order.time_in_force == "GTC"
        assert order.post_only is False
        assert order.price == Decimal("29000.1")
        assert order.amount == Decimal("0.5")
        assert order.filled == Decimal("0.2")
        assert order.remaining == Decimal("0.3")
        assert order.average == Decimal("29000")
        assert order.cost == Decimal("5800")
        assert order.reduce_only is False
        assert order.margin_mode is None
        assert order.timestamp == 1597026383085
        assert order.last_trade_timestamp == 1597026383088
        assert order.last_update_timestamp == 1597026383090
        assert order.info is spot_limit_order_data

    def test_fee_is_positive_cost(self, spot_limit_order_data, spot_market):
        order = parse_order(spot_limit_order_data, spot_market)
        assert order.fee.cost == Decimal("0.0002")
        assert order.fee.currency == "BTC"

    def test_blank_strings_are_absent(self, spot_limit_order_data):
        order = parse_order(spot_limit_order_data)
        assert order.stop_loss_price is None
        assert order.take_profit_price is None
        assert order.symbol == "BTC-USDT"

    def test_spot_market_buy_in_quote(self):
        data = {
            "instType": "SPOT",
            "instId": "BTC-USDT",
            "ordId": "1",
            "ordType": "market",
            "side": "buy",
            "sz": "100",
            "tgtCcy": "quote_ccy",
            "accFillSz": "0.003",
            "avgPx": "30000",
            "state": "filled",
        }
        order = parse_order(data)

        assert order.amount is None
        assert order.remaining is None
        assert order.cost == Decimal("100")
        assert order.filled == Decimal("0.003")
        assert order.status == OrderStatus.CLOSED

    def test_linear_contract_cost(self, swap_market):
        data = {"ordId": "1", "ordType": "limit", "sz": "5", "accFillSz": "3", "avgPx": "30000", "px": "30000"}
        order = parse_order(data, swap_market)
        assert order.cost == Decimal("900")
        assert order.remaining == Decimal("2")

    def test_inverse_contract_cost(self, inverse_market):
        data = {"ordId": "1", "ordType": "limit", "sz": "10", "accFillSz": "10", "avgPx": "50000"}
        order = parse_order(data, inverse_market)
        assert order.cost == Decimal("0.02")

    def test_time_in_force_and_post_only(self):
        assert parse_order({"ordId": "1", "ordType": "ioc"}).time_in_force == "IOC"
        assert parse_order({"ordId": "1", "ordType": "fok"}).time_in_force == "FOK"
        assert parse_order({"ordId": "1", "ordType": "post_only"}).post_only is True

    def test_margin_mode(self):
        assert parse_order({"ordId": "1", "tdMode": "isolated"}).margin_mode == "isolated"
        assert parse_order({"ordId": "1", "tdMode": "cash"}).margin_mode is None

    def test_conditional_algo_order(self, swap_market):
        data = {
            "algoId": "681096944655273984",
            "algoClOrdId": "brokerABCabc",
            "instId": "BTC-USDT-SWAP",
            "ordType": "conditional",
            "side": "sell",
            "sz": "1",
            "actualSz": "",
            "slTriggerPx": "25000",
            "slOrdPx": "-1",
            "tpTriggerPx": "",
            "state": "live",
            "cTime": "1700000000000",
        }
        order = parse_order(data, swap_market)

        assert order.id == "681096944655273984"
        assert order.client_order_id == "brokerABCabc"
        assert order.status == OrderStatus.OPEN
        assert order.type == "market"
        assert order.stop_loss_price == Decimal("25000")
        assert order.take_profit_price is None
        assert order.price is None
        assert order.filled is None

    def test_trailing_algo_order(self):
        data = {"algoId": "9", "ordType": "move_order_stop", "callbackRatio": "0.015", "state": "effective"}
        order = parse_order(data)

        assert order.trailing_percent == Decimal("1.5")
        assert order.status == OrderStatus.CLOSED

    def test_trigger_with_market_execution(self):
        data = {"algoId": "9", "ordType": "trigger", "triggerPx": "31000", "ordPx": "-1"}
        order = parse_order(data)
        assert order.trigger_price == Decimal("31000")
        assert order.price is None
        assert order.type == "market"


class TestCreateOrderResults:
    """Placement acknowledgements, including rejected items."""

    def test_ack_has_no_status(self, spot_market):
        results = parse_create_order_results(
            [{"ordId": "1", "clOrdId": "c1", "sCode": "0", "sMsg": "", "tag": ""}], [spot_market]
        )

        assert len(results) == 1
        assert results[0].id == "1"
        assert results[0].client_order_id == "c1"
        assert results[0].status is None
        assert results[0].symbol == "BTC/USDT"

    def test_rejected_item(self, rejected_item):
        ok = {"ordId": "2", "clOrdId": "c2", "sCode": "0", "sMsg": ""}
        results = parse_create_order_results([ok, rejected_item])

        assert results[0].status is None
        rejected = results[1]
        assert rejected.status == OrderStatus.REJECTED
        assert rejected.is_rejected
        assert rejected.id is None
        assert rejected.client_order_id == "reject1"
        assert isinstance(rejected.error, InsufficientFunds)

    def test_order_of_results_is_kept(self, rejected_item):
        items = [rejected_item, {"ordId": "7", "sCode": "0"}]
        results = parse_create_order_results(items)
        assert [r.status for r in results] == ["rejected", None]


class TestParseTrade:

    def test_fill(self, spot_market):
        data = {
            "tradeId": "123",
            "ordId": "456",
            "instId": "BTC-USDT",
            "side": "sell",
            "fillPx": "30000",
            "fillSz": "0.01",
            "execType": "M",
            "fee": "-0.3",
            "feeCcy": "USDT",
            "ts": "1700000000000",
        }
        trade = parse_trade(data, spot_market)

        assert trade.id == "123"
        assert trade.order_id == "456"
        assert trade.symbol == "BTC/USDT"
        assert trade.cost == Decimal("300")
        assert trade.taker_or_maker == "maker"
        assert trade.fee.cost == Decimal("0.3")
        assert trade.timestamp == 1700000000000

    def test_rebate_fee_is_negative_cost(self):
        trade = parse_trade({"tradeId": "1", "fee": "0.1", "feeCcy": "USDT", "execType": "T"})
        assert trade.fee.cost == Decimal("-0.1")
        assert trade.taker_or_maker == "taker"


class TestParsePosition:

    def test_net_mode_short(self, swap_market):
        data = {
            "instId": "BTC-USDT-SWAP",
            "posSide": "net",
            "pos": "-3",
            "avgPx": "30000",
            "markPx": "29900",
            "notionalUsd": "1000",
            "mmr": "10",
            "uplRatio": "0.05",
            "upl": "3",
            "lever": "10",
            "mgnMode": "cross",
            "imr": "90",
            "margin": "",
            "uTime": "1700000000000",
        }
        position = parse_position(data, swap_market)

        assert position.symbol == "BTC/USDT:USDT"
        assert position.side == "short"
        assert position.contracts == Decimal("3")
        assert position.contract_size == Decimal("0.01")
        assert position.maintenance_margin_percentage == Decimal("1")
        assert position.percentage == Decimal("5")
        assert position.initial_margin == Decimal("90")
        assert position.collateral == Decimal("90")
        assert position.hedged is False

    def test_hedged_long(self):
        position = parse_position({"instId": "BTC-USDT-SWAP", "posSide": "long", "pos": "2", "margin": "50"})

        assert position.side == "long"
        assert position.hedged is True
        assert position.initial_margin == Decimal("50")
        assert position.collateral == Decimal("50")

    def test_flat_position(self):
        assert parse_position({"instId": "X", "posSide": "net", "pos": "0"}).side is None


class TestParseBalance:

    def test_trading_account(self):
        data = [{
            "uTime": "1700000000000",
            "details": [
                {"ccy": "USDT", "availBal": "100", "frozenBal": "5", "eq": "105"},
                {"ccy": "BTC", "availBal": "", "frozenBal": "0", "eq": "0.5"},
            ],
        }]
        balances = parse_balance(data, "trading")

        assert balances.account == "trading"
        assert balances.timestamp == 1700000000000
        assert balances.get("USDT").free == Decimal("100")
        assert balances.get("USDT").used == Decimal("5")
        assert balances.get("USDT").total == Decimal("105")
        assert balances.get("BTC").free is None
        assert balances.get("ETH") is None

    def test_funding_account(self):
        data = [{"ccy": "BTC", "bal": "1", "availBal": "0.9", "frozenBal": "0.1"}]
        balances = parse_balance(data, "funding")

        assert balances.account == "funding"
        assert balances.get("BTC").total == Decimal("1")
        assert balances.get("BTC").free == Decimal("0.9")

    def test_empty(self):
        assert dict(parse_balance([], "trading").entries) == {}


class TestParseTransferAndLedger:

    def test_transfer(self):
        transfer = parse_transfer(
            {"transId": "754147", "ccy": "USDT", "amt": "1.5", "from": "6", "to": "18", "state": "success"}
        )

        assert transfer.id == "754147"
        assert transfer.amount == Decimal("1.5")
        assert transfer.from_account == "funding"
        assert transfer.to_account == "trading"
        assert transfer.status == "ok"

    def test_ledger_entry(self):
        bill = {
            "billId": "b1",
            "ccy": "USDT",
            "balChg": "-1.5",
            "bal": "98.5",
            "type": "2",
            "ordId": "o1",
            "instId": "BTC-USDT",
            "fee": "-0.01",
            "ts": "1700000000000",
        }
        entry = parse_ledger_entry(bill)

        assert entry.id == "b1"
        assert entry.direction == "out"
        assert entry.amount == Decimal("1.5")
        assert entry.before == Decimal("100")
        assert entry.after == Decimal("98.5")
        assert entry.type == "trade"
        assert entry.reference_id == "o1"
        assert entry.symbol == "BTC-USDT"
        assert entry.fee.cost == Decimal("0.01")

    def test_unknown_ledger_type_passes_through(self):
        assert parse_ledger_entry({"billId": "1", "type": "999", "balChg": "2"}).type == "999"
        assert parse_ledger_entry({"billId": "1", "balChg": "2"}).direction == "in"
