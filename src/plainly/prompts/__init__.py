"""Prompt builders producing complete instruction strings per content kind."""

from .base import BASE_SYSTEM_PROMPT, BasePromptBuilder
from .builders import (
    CodePromptBuilder,
    DocumentPromptBuilder,
    ImagePromptBuilder,
    LinkPromptBuilder,
    TextPromptBuilder,
    VideoPromptBuilder,
    code_prompt,
    document_prompt,
    image_prompt,
    link_prompt,
    text_prompt,
    video_prompt,
)

__all__ = [
    "BASE_SYSTEM_PROMPT",
    "BasePromptBuilder",
    "CodePromptBuilder",
    "DocumentPromptBuilder",
    "ImagePromptBuilder",
    "LinkPromptBuilder",
    "TextPromptBuilder",
    "VideoPromptBuilder",
    "code_prompt",
    "document_prompt",
    "image_prompt",
    "link_prompt",
    "text_prompt",
    "video_prompt",
]
