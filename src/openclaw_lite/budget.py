# openclaw_lite/budget.py
"""
Budget governor: turns today's token spend into request parameters.

Ladder, evaluated from the top (usage = used / budget):

    >= 1.00   block, no LLM call at all
    >= 0.90   fallback model, 500 max tokens, 5 messages of history
    >= 0.75   configured model, 1024 max tokens, 10 messages
    >= 0.50   configured model, configured max tokens, 20 messages
     < 0.50   configured everything
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from openclaw_lite.models.budget import BudgetAwareParams, TokenBudget

if TYPE_CHECKING:
    from openclaw_lite.config import AssistantConfig

logger = logging.getLogger(__name__)

BLOCK_RATIO = 1.0
FALLBACK_RATIO = 0.9
REDUCED_RATIO = 0.75
SHORT_HISTORY_RATIO = 0.5

FALLBACK_MAX_TOKENS = 500
FALLBACK_MAX_HISTORY = 5
REDUCED_MAX_TOKENS = 1024
REDUCED_MAX_HISTORY = 10
SHORT_MAX_HISTORY = 20

WARN_RATIO = 0.9


class BudgetGovernor:
    """Reads the shared :class:`TokenBudget`; also the place spend is billed."""

    def __init__(
        self,
        tokens: TokenBudget,
        *,
        model: str,
        smart_model: str,
        fallback_model: str,
        max_tokens: int,
        max_history: int,
    ):
        self.tokens = tokens
        self.model = model
        self.smart_model = smart_model
        self.fallback_model = fallback_model
        self.max_tokens = max_tokens
        self.max_history = max_history

    @classmethod
    def from_config(cls, config: AssistantConfig, tokens: TokenBudget) -> BudgetGovernor:
        return cls(
            tokens,
            model=config.model,
            smart_model=config.smart_model,
            fallback_model=config.fallback_model,
            max_tokens=config.max_tokens,
            max_history=config.max_history,
        )

    @property
    def usage_ratio(self) -> float:
        return self.tokens.usage_ratio

    def current_params(self) -> BudgetAwareParams:
        usage = self.usage_ratio

        if usage >= BLOCK_RATIO:
            return self._params(should_block=True)
        if usage >= FALLBACK_RATIO:
            return BudgetAwareParams(
                model=self.fallback_model,
                max_tokens=min(self.max_tokens, FALLBACK_MAX_TOKENS),
                max_history=min(self.max_history, FALLBACK_MAX_HISTORY),
            )
        if usage >= REDUCED_RATIO:
            return self._params(
                max_tokens=min(self.max_tokens, REDUCED_MAX_TOKENS),
                max_history=min(self.max_history, REDUCED_MAX_HISTORY),
            )
        if usage >= SHORT_HISTORY_RATIO:
            return self._params(max_history=min(self.max_history, SHORT_MAX_HISTORY))
        return self._params()

    def _params(
        self,
        *,
        max_tokens: int | None = None,
        max_history: int | None = None,
        should_block: bool = False,
    ) -> BudgetAwareParams:
        return BudgetAwareParams(
            model=self.model,
            max_tokens=self.max_tokens if max_tokens is None else max_tokens,
            max_history=self.max_history if max_history is None else max_history,
            should_block=should_block,
        )

    def upgrade_for(
        self,
        params: BudgetAwareParams,
        *,
        has_attachments: bool = False,
        uses_tools: bool = False,
    ) -> BudgetAwareParams:
        """Swap in the smart model for attachments or tool use.

        Blocked requests and the fallback tier are left alone.
        """
        if params.should_block or not (has_attachments or uses_tools):
            return params
        if params.model != self.model:
            return params
        return params.model_copy(update={"model": self.smart_model})

    def record_usage(self, tokens: int, label: str = "api") -> None:
        """Bill ``tokens`` against today's budget."""
        self.tokens.record(tokens)
        logger.info(
            f"[{label}] +{tokens} tokens | budget:{self.tokens.usage_percent}% "
            f"({self.tokens.used}/{self.tokens.budget})"
        )
        if self.usage_ratio >= WARN_RATIO:
            logger.warning(f"Token budget at {self.tokens.usage_percent}% ({self.tokens.used}/{self.tokens.budget})")


def trim_history(messages: list[dict], max_history: int) -> list[dict]:
    """Keep the newest ``max_history`` messages, starting on a user turn."""
    if max_history <= 0:
        return []
    trimmed = messages[-max_history:]
    start = 0
    while start < len(trimmed) and trimmed[start].get("role") != "user":
        start += 1
    return trimmed[start:]
