"""
Tests for the multi-send domain models

Checks:
1. Creation and validation of the Pydantic models
2. Business helpers (amount_of, denom totals, settlement views)
3. Immutability (frozen=True)
4. Invalid data (negative amounts, rates out of range, duplicate denoms)
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from multisend.core.domain import (
    Balance,
    BalanceChange,
    Coin,
    CoinDelta,
    DenomDefinition,
    MultiSendInstruction,
    Settlement,
)


# =============================================================================
# COIN TESTS
# =============================================================================


class TestCoin:
    """Tests for Coin and CoinDelta"""

    def test_coin_creation(self) -> None:
        coin = Coin(denom="ucore", amount=100)
        assert coin.denom == "ucore"
        assert coin.amount == 100

    def test_coin_zero_amount_allowed(self) -> None:
        assert Coin(denom="ucore", amount=0).amount == 0

    def test_coin_negative_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Coin(denom="ucore", amount=-1)

    def test_coin_empty_denom_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Coin(denom="", amount=1)

    def test_coin_large_amount(self) -> None:
        """Amounts beyond 128 bits are kept exactly"""
        amount = 2**130 + 7
        assert Coin(denom="ucore", amount=amount).amount == amount

    def test_coin_immutable(self) -> None:
        coin = Coin(denom="ucore", amount=1)
        with pytest.raises(ValidationError):
            coin.amount = 2  # type: ignore

    def test_coin_delta_allows_negative(self) -> None:
        assert CoinDelta(denom="ucore", amount=-250).amount == -250


# =============================================================================
# BALANCE TESTS
# =============================================================================


class TestBalance:
    """Tests for Balance and BalanceChange"""

    def test_amount_of_present_denom(self) -> None:
        balance = Balance(
            address="account1",
            coins=[Coin(denom="denom1", amount=10), Coin(denom="denom2", amount=20)],
        )
        assert balance.amount_of("denom1") == 10
        assert balance.amount_of("denom2") == 20

    def test_amount_of_missing_denom_is_zero(self) -> None:
        balance = Balance(address="account1", coins=[Coin(denom="denom1", amount=10)])
        assert balance.amount_of("denom2") == 0

    def test_empty_coins(self) -> None:
        balance = Balance(address="account1", coins=[])
        assert balance.denoms() == []
        assert balance.amount_of("denom1") == 0

    def test_duplicate_denom_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Balance(
                address="account1",
                coins=[Coin(denom="denom1", amount=10), Coin(denom="denom1", amount=5)],
            )
        assert "duplicate denom" in str(exc_info.value)

    def test_empty_address_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Balance(address="", coins=[])

    def test_total_by_denom(self) -> None:
        balance = Balance(
            address="account1",
            coins=[Coin(denom="b", amount=2), Coin(denom="a", amount=1)],
        )
        assert balance.total_by_denom() == {"b": 2, "a": 1}
        assert balance.denoms() == ["b", "a"]

    def test_from_dict(self) -> None:
        balance = Balance.model_validate(
            {"address": "account1", "coins": [{"denom": "denom1", "amount": 5}]}
        )
        assert balance.coins == [Coin(denom="denom1", amount=5)]

    def test_balance_change_amount_of(self) -> None:
        change = BalanceChange(address="a", coins=[CoinDelta(denom="x", amount=-3)])
        assert change.amount_of("x") == -3
        assert change.amount_of("y") == 0


# =============================================================================
# DENOM DEFINITION TESTS
# =============================================================================


class TestDenomDefinition:
    """Tests for DenomDefinition"""

    def test_float_rates_parsed_by_repr(self) -> None:
        definition = DenomDefinition(
            denom="denom1", issuer="issuer", burn_rate=0.08, commission_rate=0.12
        )
        assert definition.burn_rate == Decimal("0.08")
        assert definition.commission_rate == Decimal("0.12")

    def test_string_rates(self) -> None:
        definition = DenomDefinition(
            denom="denom1", issuer="issuer", burn_rate="0.5", commission_rate="1"
        )
        assert definition.burn_rate == Decimal("0.5")
        assert definition.commission_rate == Decimal("1")

    def test_default_rates_zero(self) -> None:
        definition = DenomDefinition(denom="denom1", issuer="issuer")
        assert definition.burn_rate == 0
        assert definition.commission_rate == 0
        assert not definition.has_fees()

    def test_has_fees(self) -> None:
        definition = DenomDefinition(denom="denom1", issuer="issuer", commission_rate=0.01)
        assert definition.has_fees()

    @pytest.mark.parametrize("rate", [-0.01, 1.01, 2])
    def test_rate_out_of_range_rejected(self, rate: float) -> None:
        with pytest.raises(ValidationError):
            DenomDefinition(denom="denom1", issuer="issuer", burn_rate=rate)

    def test_nan_rate_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DenomDefinition(denom="denom1", issuer="issuer", burn_rate=float("nan"))

    def test_is_issuer(self) -> None:
        definition = DenomDefinition(denom="denom1", issuer="issuer")
        assert definition.is_issuer("issuer")
        assert not definition.is_issuer("account1")


# =============================================================================
# MULTI-SEND INSTRUCTION TESTS
# =============================================================================


class TestMultiSendInstruction:
    """Tests for MultiSendInstruction"""

    @pytest.fixture
    def instruction(self) -> MultiSendInstruction:
        return MultiSendInstruction(
            inputs=[
                Balance(address="a", coins=[Coin(denom="x", amount=10)]),
                Balance(
                    address="b",
                    coins=[Coin(denom="y", amount=5), Coin(denom="x", amount=3)],
                ),
            ],
            outputs=[
                Balance(
                    address="c",
                    coins=[Coin(denom="x", amount=13), Coin(denom="z", amount=0)],
                ),
            ],
        )

    def test_denoms_first_seen_order(self, instruction: MultiSendInstruction) -> None:
        assert instruction.denoms() == ["x", "y", "z"]

    def test_input_totals(self, instruction: MultiSendInstruction) -> None:
        assert instruction.input_totals() == {"x": 13, "y": 5}

    def test_output_totals(self, instruction: MultiSendInstruction) -> None:
        assert instruction.output_totals() == {"x": 13, "z": 0}

    def test_empty_instruction(self) -> None:
        instruction = MultiSendInstruction()
        assert instruction.denoms() == []
        assert instruction.input_totals() == {}


# =============================================================================
# SETTLEMENT TESTS
# =============================================================================


class TestSettlement:
    """Tests for Settlement"""

    @pytest.fixture
    def settlement(self) -> Settlement:
        return Settlement(
            changes={
                "account1": {"denom1": -1200},
                "issuer": {"denom1": 120},
                "recipient": {"denom1": 1000, "denom2": 5},
            },
            burned={"denom1": 80},
            commissions={"denom1": 120},
        )

    def test_delta(self, settlement: Settlement) -> None:
        assert settlement.delta("account1", "denom1") == -1200
        assert settlement.delta("account1", "denom2") == 0
        assert settlement.delta("nobody", "denom1") == 0

    def test_net_change_equals_minus_burn(self, settlement: Settlement) -> None:
        assert settlement.net_change("denom1") == -settlement.total_burned("denom1")

    def test_totals(self, settlement: Settlement) -> None:
        assert settlement.total_burned("denom1") == 80
        assert settlement.total_commission("denom1") == 120
        assert settlement.total_burned("denom2") == 0

    def test_to_balance_changes(self, settlement: Settlement) -> None:
        changes = settlement.to_balance_changes()
        assert [change.address for change in changes] == ["account1", "issuer", "recipient"]
        assert changes[2].coins == [
            CoinDelta(denom="denom1", amount=1000),
            CoinDelta(denom="denom2", amount=5),
        ]

    def test_to_payload(self, settlement: Settlement) -> None:
        payload = settlement.to_payload()
        assert payload["changes"][0] == {
            "address": "account1",
            "coins": [{"denom": "denom1", "amount": -1200}],
        }
        assert payload["burned"] == {"denom1": 80}
        assert payload["commissions"] == {"denom1": 120}

    def test_empty(self) -> None:
        assert Settlement().is_empty()
        assert Settlement().addresses() == []
