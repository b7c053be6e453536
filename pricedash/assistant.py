"""
Scripted advisory responder.

The dashboard only depends on the `Responder` protocol, so a real model call can
replace `ScriptedResponder` without touching the analytics pipeline.
"""
import re
from typing import Protocol, Tuple

from pricedash.reporting import format_price
from pricedash.types import AdvisoryContext

__all__ = ["Responder", "ScriptedResponder", "FALLBACK_REPLY"]

FALLBACK_REPLY = (
    "The assistant is unavailable right now. Nothing on this dashboard is investment advice."
)

_PROMPT_REPLY = "Ask me about {symbol}, its trend or the projection shown on the dashboard."

_DEFAULT_REPLY = (
    "I can only describe what the dashboard shows for {symbol}. "
    "It is synthetic data and not investment advice."
)

# Checked in order; the first matching keyword group wins.
_SCRIPT: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (
        ("forecast", "predict", "projection", "future", "target"),
        "The projection for {symbol} is random noise around {price}. "
        "It is illustrative only and must not be read as a prediction.",
    ),
    (
        ("buy", "sell", "invest", "hold", "should i"),
        "I can't give buy or sell recommendations. "
        "Please talk to a licensed financial adviser before trading {symbol}.",
    ),
    (
        ("risk", "safe", "volatile", "volatility", "lose"),
        "All investments carry risk, including loss of principal. "
        "The {symbol} series here is simulated and says nothing about real volatility.",
    ),
    (
        ("trend", "average", "moving", "ma"),
        "The moving average smooths the last few weeks of the synthetic {symbol} series. "
        "The latest price is {price}. Past movement does not imply future results.",
    ),
    (
        ("hello", "hi", "hey"),
        "Hello! I can walk you through the {symbol} chart. Nothing I say is financial advice.",
    ),
)


class Responder(Protocol):
    def respond(self, user_text: str, context: AdvisoryContext) -> str:
        ...


class ScriptedResponder:
    """
    Answers with one of a fixed set of canned disclaimers, picked by keyword.
    """

    def respond(self, user_text: str, context: AdvisoryContext) -> str:
        fields = {"symbol": context.symbol, "price": format_price(context.last_price)}
        text = user_text.strip().lower()
        if not text:
            return _PROMPT_REPLY.format(**fields)

        words = set(re.findall(r"[a-z']+", text))
        for keywords, reply in _SCRIPT:
            if any((" " in k and k in text) or k in words for k in keywords):
                return reply.format(**fields)
        return _DEFAULT_REPLY.format(**fields)
