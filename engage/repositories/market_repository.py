"""Repository for prediction markets and the predictions placed on them."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .base_repository import BaseRepository, newest_first


class MarketRepository(BaseRepository):
    """Manages the `prediction_markets` collection."""

    def __init__(self, store) -> None:
        super().__init__(store, "prediction_markets")

    def list_markets(self) -> List[Dict[str, Any]]:
        return newest_first(self.collection)

    def get_market(self, market_id: str) -> Optional[Dict[str, Any]]:
        if not market_id:
            return None
        return self.collection.get(market_id)

    def create_market(
        self,
        title: str,
        description: str,
        category: str,
        end_date: str,
        status: str = "active",
    ) -> Dict[str, Any]:
        return self.collection.insert(
            {
                "title": title,
                "description": description,
                "category": category,
                "end_date": end_date,
                "total_pool": "0",
                "participant_count": 0,
                "yes_percentage": "50.00",
                "no_percentage": "50.00",
                "status": status,
                "result": None,
            }
        )

    def update_market(self, market_id: str, **updates) -> Dict[str, Any]:
        return self.collection.update(market_id, updates)


class PredictionRepository(BaseRepository):
    """Manages the `predictions` collection."""

    def __init__(self, store) -> None:
        super().__init__(store, "predictions")

    def create_prediction(
        self,
        user_id: str,
        market_id: str,
        prediction: bool,
        amount: str,
        potential_win: str,
    ) -> Dict[str, Any]:
        return self.collection.insert(
            {
                "user_id": user_id,
                "market_id": market_id,
                "prediction": prediction,
                "amount": amount,
                "potential_win": potential_win,
                "status": "active",
            }
        )

    def get_user_predictions(self, user_id: str) -> List[Dict[str, Any]]:
        return self.collection.find({"user_id": user_id})

    def get_predictions_by_market(self, market_id: str) -> List[Dict[str, Any]]:
        return self.collection.find({"market_id": market_id})
