"""One prompt builder per content kind.

Every builder requests a fixed Markdown section layout. The core never checks
that a model honored it; the raw answer is passed through untouched.
"""

from __future__ import annotations

from typing import ClassVar

from plainly.prompts.base import TLDR_SECTION, BasePromptBuilder


class TextPromptBuilder(BasePromptBuilder):
    """Critical rewrite of free text, treated as unfinished thinking."""

    headings: ClassVar[tuple[str, ...]] = (
        "What It's Really Saying",
        "What's Weak or Missing",
        "If Someone Acts on This",
        "What to Rethink Next",
        "TL;DR",
    )

    def create_prompt(self, text: str) -> str:
        return self._compose(
            "Assume the role of a critical thinking partner whose job is\n"
            "to challenge reasoning and improve the quality of decisions.\n\n"
            "Treat the following text as unfinished thinking, not a final answer.\n\n"
            "Analyze it by:\n"
            "- Calling out unclear or weak reasoning\n"
            "- Identifying assumptions presented as facts\n"
            "- Highlighting what is missing or ignored\n"
            "- Pointing out where hard tradeoffs are avoided\n\n"
            "If this text influences a decision:\n"
            "- What could go wrong?\n"
            "- What is underestimated?\n"
            "- What should be challenged?",
            f'Input:\n"""\n{text}\n"""',
        )

    def output_format(self) -> str:
        return (
            "# What It's Really Saying\n"
            "(The underlying position, belief, or assumption driving the text)\n\n"
            "# What's Weak or Missing\n"
            "- (Blind spots, unsupported assumptions, gaps)\n\n"
            "# If Someone Acts on This\n"
            "- (What could go wrong)\n"
            "- (What is underestimated or ignored)\n\n"
            "# What to Rethink Next\n"
            "(Concrete guidance on how the thinking should change)\n\n"
            f"{TLDR_SECTION}"
        )


class LinkPromptBuilder(BasePromptBuilder):
    """Skeptical analysis of the content behind a URL."""

    headings: ClassVar[tuple[str, ...]] = (
        "What It's Really Saying",
        "What's Missing or Misleading",
        "If You Act on This",
        "What to Rethink or Verify",
        "TL;DR",
    )

    def create_prompt(self, url: str) -> str:
        return self._compose(
            "Assume the role of a skeptical analyst evaluating whether\n"
            "this content should be trusted or acted upon.\n\n"
            "Analyze the content of the following URL skeptically, as if it may be\n"
            "incomplete, biased, or oversimplified.\n\n"
            "Focus on:\n"
            "- What the author is trying to convince the reader of\n"
            "- What evidence is weak or missing\n"
            "- What risks or downsides are ignored\n"
            "- What assumptions would fail in real-world use",
            f"URL:\n{url}",
        )

    def output_format(self) -> str:
        return (
            "# What It's Really Saying\n"
            "(The underlying argument, intent, or position)\n\n"
            "# What's Missing or Misleading\n"
            "- (Gaps, bias, oversimplifications, hidden assumptions)\n\n"
            "# If You Act on This\n"
            "- (What could go wrong)\n"
            "- (Who is exposed to risk)\n"
            "- (Second-order consequences)\n\n"
            "# What to Rethink or Verify\n"
            "(Concrete checks, questions, or next steps)\n\n"
            f"{TLDR_SECTION}"
        )


class VideoPromptBuilder(BasePromptBuilder):
    """Critique of a video; shared by the by-reference and by-bytes paths."""

    headings: ClassVar[tuple[str, ...]] = (
        "What It's Really About",
        "What's Missing or Oversimplified",
        "If You Follow This Advice",
        "What to Do Instead",
        "TL;DR",
    )

    def create_prompt(self) -> str:
        return self._compose(
            "Assume the role of a sharp reviewer whose goal is to cut\n"
            "through hype and surface what actually matters.\n\n"
            "Analyze this video assuming the viewer's time is expensive.\n\n"
            "Do NOT summarize chronologically.\n\n"
            "Instead:\n"
            "- Identify the core claim or thesis\n"
            "- Call out assumptions the speaker relies on\n"
            "- Highlight what is glossed over or oversimplified\n"
            "- Explain who should NOT follow this advice\n\n"
            "If technical:\n"
            "- What breaks at scale?\n"
            "- What edge cases are ignored?",
        )

    def output_format(self) -> str:
        return (
            "# What It's Really About\n"
            "(The core thesis or agenda beneath the presentation)\n\n"
            "# What's Missing or Oversimplified\n"
            "- (Ignored edge cases or weak assumptions)\n\n"
            "# If You Follow This Advice\n"
            "- (What breaks at scale or in the real world)\n"
            "- (Who this advice is dangerous for)\n\n"
            "# What to Do Instead\n"
            "(More grounded or safer next actions)\n\n"
            f"{TLDR_SECTION}"
        )


class ImagePromptBuilder(BasePromptBuilder):
    """Analysis of an image beyond surface description."""

    headings: ClassVar[tuple[str, ...]] = (
        "What It Might Actually Mean",
        "What's Easy to Misread",
        "If You Act on This Interpretation",
        "What to Confirm First",
        "TL;DR",
    )

    def create_prompt(self) -> str:
        return self._compose(
            "Assume the role of an observer whose responsibility is to\n"
            "warn against false certainty and misinterpretation.\n\n"
            "Analyze this image beyond surface-level description.\n\n"
            "Focus on:\n"
            "- What context is missing\n"
            "- What could be misinterpreted\n"
            "- What assumptions a viewer might incorrectly make\n"
            "- What information should be verified before acting",
        )

    def output_format(self) -> str:
        return (
            "# What It Might Actually Mean\n"
            "(Reasonable interpretations, without certainty)\n\n"
            "# What's Easy to Misread\n"
            "- (Common wrong assumptions or leaps)\n\n"
            "# If You Act on This Interpretation\n"
            "(Potential consequences of being wrong)\n\n"
            "# What to Confirm First\n"
            "(Information that must be verified)\n\n"
            f"{TLDR_SECTION}"
        )


class DocumentPromptBuilder(BasePromptBuilder):
    """Risk review of a document someone is about to rely on."""

    headings: ClassVar[tuple[str, ...]] = (
        "What It's Really Doing",
        "What's Missing or Risky",
        "If You Agree to This",
        "What Must Be Clarified or Changed",
        "TL;DR",
    )

    def create_prompt(self, file_name: str) -> str:
        return self._compose(
            "Assume the role of a careful reviewer advising someone\n"
            "before they commit time, money, or legal responsibility.\n\n"
            "Analyze this document as if it will be used to make a real decision.\n"
            f"Document: {file_name}\n\n"
            "Do NOT summarize section by section.\n\n"
            "Focus on:\n"
            "- Obligations, deadlines, or commitments\n"
            "- Risks that are buried or minimized\n"
            "- Vague or weak language\n"
            "- Missing protections or guarantees",
        )

    def output_format(self) -> str:
        return (
            "# What It's Really Doing\n"
            "(The obligations, power dynamics, or intent beneath the language)\n\n"
            "# What's Missing or Risky\n"
            "- (Ambiguities, loopholes, weak guarantees)\n\n"
            "# If You Agree to This\n"
            "- (Concrete risks and long-term consequences)\n\n"
            "# What Must Be Clarified or Changed\n"
            "(Before signing or proceeding)\n\n"
            f"{TLDR_SECTION}"
        )


class CodePromptBuilder(BasePromptBuilder):
    """Senior-engineer review of a source file; the code follows the template."""

    headings: ClassVar[tuple[str, ...]] = (
        "What This Code Is About",
        "How It Works at a High Level",
        "High-Risk Issues",
        "Edge Cases & Failure Modes",
        "What to Fix First (and Why)",
        "TL;DR",
    )

    def create_prompt(self, file_name: str, language: str, source: str) -> str:
        instructions = self._compose(
            "Assume the role of a senior software engineer responsible\n"
            "for maintaining and scaling this code long-term.\n\n"
            "Review the following code like a senior engineer responsible for its future.\n\n"
            "Do NOT explain the code line by line.",
            f"File: {file_name}\nLanguage: {language}",
            "Focus on:\n"
            "- Design smells or unnecessary complexity\n"
            "- Hidden coupling or tight dependencies\n"
            "- Error handling and failure modes\n"
            "- Scalability, performance, or concurrency risks\n"
            "- Security or data integrity concerns\n\n"
            "If this code grows 10x:\n"
            "- What breaks first?\n"
            "- What decision here will age badly?",
        )
        return f"{instructions}\n\nCODE:\n{source}"

    def output_format(self) -> str:
        return (
            "# What This Code Is About\n"
            "- (The problem this code is trying to solve)\n"
            "- (Its role in the larger system, if inferable)\n\n"
            "# How It Works at a High Level\n"
            "(A brief architectural or logical overview, no line-by-line explanation)\n\n"
            "# High-Risk Issues\n"
            "- (Top problems ranked by impact)\n\n"
            "# Edge Cases & Failure Modes\n"
            "- (Where this code will misbehave or break)\n\n"
            "# What to Fix First (and Why)\n"
            "(Clear prioritization and reasoning)\n\n"
            "# TL;DR\n"
            "(What this code is responsible for + the most dangerous or costly issue)"
        )


_TEXT = TextPromptBuilder()
_LINK = LinkPromptBuilder()
_VIDEO = VideoPromptBuilder()
_IMAGE = ImagePromptBuilder()
_DOCUMENT = DocumentPromptBuilder()
_CODE = CodePromptBuilder()


def text_prompt(text: str) -> str:
    return _TEXT.create_prompt(text)


def link_prompt(url: str) -> str:
    return _LINK.create_prompt(url)


def video_prompt() -> str:
    return _VIDEO.create_prompt()


def image_prompt() -> str:
    return _IMAGE.create_prompt()


def document_prompt(file_name: str) -> str:
    return _DOCUMENT.create_prompt(file_name)


def code_prompt(file_name: str, language: str, source: str) -> str:
    return _CODE.create_prompt(file_name, language, source)
