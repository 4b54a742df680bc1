"""Shared pieces of every explanation prompt."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

BASE_SYSTEM_PROMPT = """\
You are a brutally honest senior thinker focused on clarity,
critical reasoning, and long-term consequences.

Your job is not to summarize, but to expose blind spots,
weak assumptions, missing context, edge cases,
and downstream risks.

You challenge the input.
You do not validate bad thinking.
You prefer clarity over politeness.
You think in tradeoffs, second-order effects,
and what breaks over time.

Stay grounded in what is actually provided.
If you lack information, say so clearly.
Do not invent facts, statistics, or quotes.

Use simple English.
Be direct.
No fluff."""

TLDR_SECTION = """\
# TL;DR
- What: (short factual description of what the input is about)
- Key Risk: (the critical insight, hidden risk, or uncomfortable truth)
- Action: (optional next step or guidance)"""


class BasePromptBuilder(ABC):
    """Abstract base class for the per-kind prompt builders.

    Subclasses declare the Markdown headings the model must produce in
    `headings`; the rendered output-format block always lists them in order.
    Builders are stateless and deterministic.
    """

    headings: ClassVar[tuple[str, ...]]

    @abstractmethod
    def create_prompt(self, *args: Any) -> str:
        """Creates the full prompt text to be sent to the model."""

    @abstractmethod
    def output_format(self) -> str:
        """The Markdown section layout requested from the model."""

    def _compose(self, *blocks: str) -> str:
        return "\n\n".join(
            (BASE_SYSTEM_PROMPT, *blocks, f"Output Format (Markdown):\n{self.output_format()}")
        )
