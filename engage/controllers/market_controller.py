"""Prediction market controller: market creation, predictions and market odds."""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping

from engage.errors import NotFoundError, PermissionDeniedError, ValidationError
from engage.utils.amounts import format_amount, format_percentage, money_context, to_decimal
from engage.utils.validation import (
    ROLE_BASIC,
    validate_amount,
    validate_bool,
    validate_choice,
    validate_iso_datetime,
    validate_required_fields,
)

logger = logging.getLogger(__name__)

MARKET_STATUSES = ("active", "ended", "resolved")
BALANCE_STATS_FIELDS = ("bdag_balance", "portfolio_value")


def compute_market_stats(predictions: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Derive pool size, participant count and yes/no percentages.

    Each side's percentage is computed from its own sum, so after rounding the
    two need not add up to exactly 100. An empty pool is an even 50/50.
    Sums are exact, so the result does not depend on prediction order.
    """
    total_pool = Decimal(0)
    yes_amount = Decimal(0)
    no_amount = Decimal(0)
    count = 0
    with money_context():
        for prediction in predictions:
            amount = to_decimal(prediction["amount"])
            total_pool += amount
            if prediction["prediction"]:
                yes_amount += amount
            else:
                no_amount += amount
            count += 1

    return {
        "total_pool": format_amount(total_pool),
        "participant_count": count,
        "yes_percentage": format_percentage(yes_amount, total_pool),
        "no_percentage": format_percentage(no_amount, total_pool),
    }


class MarketController:
    """Controller for prediction markets and the predictions placed on them."""

    def __init__(self, user_repository, market_repository, prediction_repository, publisher):
        self.user_repository = user_repository
        self.market_repository = market_repository
        self.prediction_repository = prediction_repository
        self.publisher = publisher

    def list_markets(self) -> List[Dict[str, Any]]:
        return self.market_repository.list_markets()

    def create_market(self, claims: Mapping[str, Any], payload: Dict[str, Any]) -> Dict[str, Any]:
        if claims.get("role") == ROLE_BASIC:
            logger.warning("create_market_denied role=%s", claims.get("role"))
            raise PermissionDeniedError("Upgrade required to create markets")

        validate_required_fields(payload, ["title", "description", "category", "end_date"])
        status = validate_choice(payload.get("status", "active"), MARKET_STATUSES, "status")

        market = self.market_repository.create_market(
            title=payload["title"],
            description=payload["description"],
            category=payload["category"],
            end_date=validate_iso_datetime(payload["end_date"], "end_date"),
            status=status,
        )
        logger.info("market_created market_id=%s category=%s", market["id"], market["category"])

        self.publisher.markets_changed()
        return market

    def place_prediction(self, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Debit the stake, record the prediction and republish the market odds.

        The balance is read before the prediction is written and written back
        afterwards without any lock; concurrent requests for the same user can
        both pass the balance check.
        """
        validate_required_fields(payload, ["market_id", "prediction", "amount", "potential_win"])
        side = validate_bool(payload["prediction"], "prediction")
        amount = validate_amount(payload["amount"], "amount")
        potential_win = validate_amount(payload["potential_win"], "potential_win", allow_zero=True)
        market_id = payload["market_id"]

        user = self.user_repository.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        current_balance = to_decimal(user["bdag_balance"])
        if current_balance < amount:
            logger.warning(
                "insufficient_balance user_id=%s balance=%s amount=%s",
                user_id,
                user["bdag_balance"],
                amount,
            )
            raise ValidationError("Insufficient BDAG balance")

        prediction = self.prediction_repository.create_prediction(
            user_id=user_id,
            market_id=market_id,
            prediction=side,
            amount=format_amount(amount),
            potential_win=format_amount(potential_win),
        )

        with money_context():
            new_balance = current_balance - amount
        updated_user = self.user_repository.update_user(
            user_id, bdag_balance=format_amount(new_balance)
        )
        logger.info(
            "prediction_placed user_id=%s market_id=%s amount=%s balance=%s",
            user_id,
            market_id,
            prediction["amount"],
            updated_user["bdag_balance"],
        )

        if self.market_repository.get_market(market_id):
            stats = compute_market_stats(self.prediction_repository.get_predictions_by_market(market_id))
            market = self.market_repository.update_market(market_id, **stats)
            self.publisher.market_price_changed(market)
        else:
            logger.warning("prediction_for_unknown_market market_id=%s", market_id)

        self.publisher.user_stats_changed(updated_user, BALANCE_STATS_FIELDS)
        return prediction

    def get_user_predictions(self, user_id: str) -> List[Dict[str, Any]]:
        return self.prediction_repository.get_user_predictions(user_id)
