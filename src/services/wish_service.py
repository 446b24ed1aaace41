"""
Wish drafting service.

Asks Bedrock (Haiku by default) for a short celebration message. Any failure
or empty answer falls back to a fixed template so staff always get text to
send; nothing here raises.
"""

from __future__ import annotations

import json
import time
from typing import Optional

import boto3

from config.settings import Settings
from models.customer import Customer
from utils.logging_config import get_logger

logger = get_logger(__name__)


class WishService:
    """Draft celebration wishes for customers."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings.from_environment()
        self.model_id = self.settings.model_id
        self.client = boto3.client("bedrock-runtime", region_name=self.settings.bedrock_region)

    def generate_wish(self, customer: Customer) -> str:
        """Single model call; falls back to a template on error or empty output."""
        start = time.perf_counter()
        try:
            response = self.client.invoke_model(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps(
                    {
                        "anthropic_version": "bedrock-2023-05-31",
                        "messages": [
                            {
                                "role": "user",
                                "content": [{"type": "text", "text": self._build_prompt(customer)}],
                            }
                        ],
                        "max_tokens": self.settings.wish_max_tokens,
                        "temperature": 0.7,
                    }
                ),
            )
            payload = json.loads(response["body"].read())
            text = self._extract_text(payload)
        except Exception as exc:
            logger.warning(
                "Wish generation failed; using fallback template",
                extra={"customer_id": customer.id, "error": str(exc)},
            )
            return self.error_fallback(customer)
        finally:
            logger.info(
                "Wish generation latency captured",
                extra={"duration_ms": int((time.perf_counter() - start) * 1000)},
            )

        if not text:
            return self.empty_fallback()
        return text

    def empty_fallback(self) -> str:
        return (
            f"Happy Celebration from {self.settings.business_name}! "
            "Wishing you a wonderful day filled with joy and sparkle."
        )

    def error_fallback(self, customer: Customer) -> str:
        return (
            f"Happy {customer.event_type.value.lower()} to our valued customer, "
            f"{customer.name}! Best wishes from team {self.settings.business_name}."
        )

    def _build_prompt(self, customer: Customer) -> str:
        return (
            f"Write a short, professional, yet warm {customer.event_type.value.lower()} wish "
            f"for a customer named {customer.name}. "
            f"The company name is {self.settings.business_name}. Keep it under 30 words. "
            "Mention that we value their relationship and hope their day is as sparkling "
            "as our jewelry."
        )

    def _extract_text(self, payload: dict) -> str:
        """Join the text blocks of an Anthropic messages response."""
        blocks = payload.get("content") or []
        parts = [b.get("text", "") for b in blocks if b.get("type") == "text"]
        return " ".join(p.strip() for p in parts if p.strip())
