"""Settlement Calculator — net balance changes of a multi-send

Computes the balance changes a multi-send transaction causes, applying the
burn and commission fees of every denom:

1. Balanced-transaction check: per denom, inputs sum == outputs sum
2. Index construction: address -> balance, denom -> definition
3. Per-denom aggregates (once per denom, shared by all its senders):
   non_issuer_input_sum, non_issuer_output_sum,
   burn_base = min(non_issuer_input_sum, non_issuer_output_sum)
4. Per-sender apportionment (non-issuer senders only):
   burn_share       = round_up(burn_base * burn_rate * amount / non_issuer_input_sum)
   commission_share = round_up(burn_base * commission_rate * amount / non_issuer_input_sum)
   sender  -= amount + burn_share + commission_share
   issuer  += commission_share      (burn_share leaves circulation)
5. Output crediting: receiver += amount
6. Aggregation into one Settlement

Example (burn_rate 10%):
    inputs:  60, 90, 25 (issuer)       outputs: 50, 100 (issuer), 25
    non_issuer_input_sum = 150, non_issuer_output_sum = 75, burn_base = 75
    burn: 7.5 * 60 / 150 = 3 -> 3,  7.5 * 90 / 150 = 4.5 -> 5

Any rejection aborts the whole transaction; no partial settlement is ever
returned. The calculator holds no state between calls and may be shared
between threads.
"""

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Iterable, Optional

from multisend.calculator.errors import (
    DuplicateBalance,
    DuplicateDefinition,
    InsufficientBalance,
    SettlementRejected,
    UnbalancedTransaction,
    UnknownDenomination,
    UnknownIssuer,
)
from multisend.calculator.working_state import SettlementWorkingState
from multisend.core.contracts import validate_settlement_request
from multisend.core.domain import (
    Balance,
    Coin,
    DenomDefinition,
    MultiSendInstruction,
    Settlement,
)
from multisend.core.math import FeeRounding, proportional_share, to_fraction

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SettlementConfig:
    """Configuration of the settlement calculator.

    The defaults are the permissive behaviour: undefined denoms move
    fee-free, issuers missing from the snapshot start from zero.
    """

    # Rounding of fractional fee shares
    fee_rounding: FeeRounding = FeeRounding.CEILING

    # Keep (address, denom) pairs whose net delta is 0
    report_zero_deltas: bool = False

    # Reject instructions moving a denom without definition
    reject_unknown_denoms: bool = False

    # Reject commission credits to issuers absent from the balance snapshot
    require_known_issuers: bool = False

    # Check that issuers can cover their own (fee-free) input legs
    check_issuer_balances: bool = True


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class SettlementResult:
    """Outcome of SettlementCalculator.evaluate."""

    accepted: bool
    rejection_reason: str

    settlement: Optional[Settlement]
    error: Optional[SettlementRejected]

    details: str


# =============================================================================
# PER-DENOM AGGREGATES
# =============================================================================


@dataclass(frozen=True)
class DenomAggregate:
    """Sums of one denom shared by every sender of that denom."""

    denom: str
    definition: Optional[DenomDefinition]
    non_issuer_input_sum: int
    non_issuer_output_sum: int

    @property
    def burn_base(self) -> int:
        """Amount the fees are charged on."""
        return min(self.non_issuer_input_sum, self.non_issuer_output_sum)

    @property
    def burn_rate(self) -> Fraction:
        if self.definition is None:
            return Fraction(0)
        return to_fraction(self.definition.burn_rate)

    @property
    def commission_rate(self) -> Fraction:
        if self.definition is None:
            return Fraction(0)
        return to_fraction(self.definition.commission_rate)

    def is_issuer(self, address: str) -> bool:
        return self.definition is not None and self.definition.is_issuer(address)


# =============================================================================
# SETTLEMENT CALCULATOR
# =============================================================================


class SettlementCalculator:
    """Settlement calculator for multi-send transactions.

    Pure function object: compute() only reads its arguments and builds a
    new Settlement, all working state is local to the call.
    """

    def __init__(self, config: SettlementConfig | None = None):
        """Initialize the calculator.

        Args:
            config: calculator configuration (optional, defaults used otherwise)
        """
        self.config = config or SettlementConfig()

    def compute(
        self,
        balances: Iterable[Balance],
        definitions: Iterable[DenomDefinition],
        instruction: MultiSendInstruction,
    ) -> Settlement:
        """Compute the balance changes of a multi-send.

        Args:
            balances: balance snapshot before the transaction
            definitions: denom registry
            instruction: the proposed multi-send

        Returns:
            Settlement with the net per-address, per-denom deltas

        Raises:
            UnbalancedTransaction: inputs and outputs of a denom differ
            InsufficientBalance: a sender cannot cover amount + fees
            UnknownIssuer: strict issuer mode and the issuer is missing
            UnknownDenomination: strict denom mode and a denom is undefined
            DuplicateDefinition: a denom is defined twice
            DuplicateBalance: an address appears twice in the snapshot
        """
        try:
            settlement = self._compute(list(balances), list(definitions), instruction)
        except SettlementRejected as exc:
            logger.warning("multi-send rejected (%s): %s", exc.reason, exc)
            raise

        logger.info(
            "multi-send settled: %d inputs, %d outputs, %d accounts changed, burned=%s",
            len(instruction.inputs),
            len(instruction.outputs),
            len(settlement.changes),
            settlement.burned,
        )
        return settlement

    def evaluate(
        self,
        balances: Iterable[Balance],
        definitions: Iterable[DenomDefinition],
        instruction: MultiSendInstruction,
    ) -> SettlementResult:
        """Compute without raising on rejection.

        Returns:
            SettlementResult, accepted with the settlement or rejected with
            the reason code and the rejection exception
        """
        try:
            settlement = self.compute(balances, definitions, instruction)
        except SettlementRejected as exc:
            return SettlementResult(
                accepted=False,
                rejection_reason=exc.reason,
                settlement=None,
                error=exc,
                details=str(exc),
            )

        return SettlementResult(
            accepted=True,
            rejection_reason="",
            settlement=settlement,
            error=None,
            details=f"{len(settlement.changes)} accounts changed",
        )

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _compute(
        self,
        balances: list[Balance],
        definitions: list[DenomDefinition],
        instruction: MultiSendInstruction,
    ) -> Settlement:
        # 1. Balanced-transaction check
        self._check_balanced(instruction)

        # 2. Indexes
        balance_index = self._index_balances(balances)
        definition_index = self._index_definitions(definitions)

        if self.config.reject_unknown_denoms:
            for denom in instruction.denoms():
                if denom not in definition_index:
                    raise UnknownDenomination(denom)

        # 3. Per-denom aggregates
        aggregates = self._aggregate(instruction, definition_index)

        # 4. Inputs with fees
        state = SettlementWorkingState()
        for leg in instruction.inputs:
            for coin in leg.coins:
                self._apply_input(state, leg.address, coin, aggregates[coin.denom], balance_index)

        # 5. Outputs
        for leg in instruction.outputs:
            for coin in leg.coins:
                state.add(leg.address, coin.denom, coin.amount)

        # 6. Aggregation
        return state.to_settlement(report_zero_deltas=self.config.report_zero_deltas)

    def _check_balanced(self, instruction: MultiSendInstruction) -> None:
        input_totals = instruction.input_totals()
        output_totals = instruction.output_totals()

        for denom in instruction.denoms():
            input_sum = input_totals.get(denom, 0)
            output_sum = output_totals.get(denom, 0)
            if input_sum != output_sum:
                raise UnbalancedTransaction(denom, input_sum, output_sum)

    def _index_balances(self, balances: list[Balance]) -> dict[str, Balance]:
        index: dict[str, Balance] = {}
        for balance in balances:
            if balance.address in index:
                raise DuplicateBalance(balance.address)
            index[balance.address] = balance
        return index

    def _index_definitions(self, definitions: list[DenomDefinition]) -> dict[str, DenomDefinition]:
        index: dict[str, DenomDefinition] = {}
        for definition in definitions:
            if definition.denom in index:
                raise DuplicateDefinition(definition.denom)
            index[definition.denom] = definition
        return index

    def _aggregate(
        self,
        instruction: MultiSendInstruction,
        definition_index: dict[str, DenomDefinition],
    ) -> dict[str, DenomAggregate]:
        input_sums: dict[str, int] = {}
        output_sums: dict[str, int] = {}

        for legs, sums in ((instruction.inputs, input_sums), (instruction.outputs, output_sums)):
            for leg in legs:
                for coin in leg.coins:
                    definition = definition_index.get(coin.denom)
                    if definition is not None and definition.is_issuer(leg.address):
                        continue
                    sums[coin.denom] = sums.get(coin.denom, 0) + coin.amount

        aggregates: dict[str, DenomAggregate] = {}
        for denom in instruction.denoms():
            aggregate = DenomAggregate(
                denom=denom,
                definition=definition_index.get(denom),
                non_issuer_input_sum=input_sums.get(denom, 0),
                non_issuer_output_sum=output_sums.get(denom, 0),
            )
            if aggregate.definition is None:
                logger.debug("denom %s has no definition, moving fee-free", denom)
            logger.debug(
                "denom %s: non_issuer_input_sum=%d non_issuer_output_sum=%d burn_base=%d",
                denom,
                aggregate.non_issuer_input_sum,
                aggregate.non_issuer_output_sum,
                aggregate.burn_base,
            )
            aggregates[denom] = aggregate
        return aggregates

    def _apply_input(
        self,
        state: SettlementWorkingState,
        address: str,
        coin: Coin,
        aggregate: DenomAggregate,
        balance_index: dict[str, Balance],
    ) -> None:
        if aggregate.is_issuer(address):
            total_debit = state.debit(address, coin.denom, coin.amount)
            if self.config.check_issuer_balances:
                self._check_funds(address, coin.denom, total_debit, balance_index)
            return

        rounding = self.config.fee_rounding
        burn_share = proportional_share(
            aggregate.burn_base,
            aggregate.burn_rate,
            coin.amount,
            aggregate.non_issuer_input_sum,
            rounding,
        )
        commission_share = proportional_share(
            aggregate.burn_base,
            aggregate.commission_rate,
            coin.amount,
            aggregate.non_issuer_input_sum,
            rounding,
        )
        logger.debug(
            "sender %s denom %s: amount=%d burn=%d commission=%d",
            address,
            coin.denom,
            coin.amount,
            burn_share,
            commission_share,
        )

        total_debit = state.debit(address, coin.denom, coin.amount + burn_share + commission_share)
        self._check_funds(address, coin.denom, total_debit, balance_index)

        if commission_share:
            issuer = aggregate.definition.issuer
            if self.config.require_known_issuers and issuer not in balance_index:
                raise UnknownIssuer(issuer, coin.denom)
            state.add(issuer, coin.denom, commission_share)

        state.record_fees(coin.denom, burn_share, commission_share)

    def _check_funds(
        self,
        address: str,
        denom: str,
        required: int,
        balance_index: dict[str, Balance],
    ) -> None:
        balance = balance_index.get(address)
        available = balance.amount_of(denom) if balance is not None else 0
        if available < required:
            raise InsufficientBalance(address, denom, available, required)


# =============================================================================
# MODULE API
# =============================================================================


def compute_balance_changes(
    balances: Iterable[Balance],
    definitions: Iterable[DenomDefinition],
    instruction: MultiSendInstruction,
    config: SettlementConfig | None = None,
) -> Settlement:
    """Compute the balance changes of a multi-send.

    Shortcut for SettlementCalculator(config).compute(...).

    Raises:
        SettlementRejected: the transaction must be rejected
    """
    return SettlementCalculator(config).compute(balances, definitions, instruction)


def compute_from_payload(
    payload: dict[str, Any],
    config: SettlementConfig | None = None,
) -> Settlement:
    """Compute the balance changes of a raw JSON settlement request.

    The payload is checked against the settlement_request contract before
    the domain models are built.

    Args:
        payload: dict with 'balances', 'definitions' and 'multi_send'
        config: calculator configuration (optional)

    Raises:
        jsonschema.ValidationError: the payload violates the contract
        pydantic.ValidationError: the payload violates a model constraint
            (e.g. duplicate denoms inside one balance)
        SettlementRejected: the transaction must be rejected
    """
    validate_settlement_request(payload)

    balances = [Balance.model_validate(item) for item in payload["balances"]]
    definitions = [DenomDefinition.model_validate(item) for item in payload["definitions"]]
    instruction = MultiSendInstruction.model_validate(payload["multi_send"])

    return compute_balance_changes(balances, definitions, instruction, config)
