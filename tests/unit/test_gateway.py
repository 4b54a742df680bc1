"""
Unit tests for ExplanationGateway routing, fallback and timeouts
"""

import asyncio

import pytest

from plainly.core.classifier import classify
from plainly.core.exceptions import (
    BackendUnavailableError,
    ExplainTimeoutError,
    GenerationFailedError,
    TransportError,
)
from plainly.core.types import (
    Code,
    Document,
    Failure,
    ImageBytes,
    Link,
    ProcessingMode,
    Success,
    Text,
    VideoBytes,
)
from plainly.gateway import (
    ExplanationGateway,
    offline_placeholder,
    sniff_image_mime_type,
)
from plainly.prompts import (
    code_prompt,
    document_prompt,
    image_prompt,
    link_prompt,
    text_prompt,
    video_prompt,
)

pytestmark = pytest.mark.unit

ON_DEVICE = ProcessingMode.ON_DEVICE
CLOUD = ProcessingMode.CLOUD

PNG = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
    b"\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00"
)
GIF = b"GIF89a\x01\x00\x01\x00\x80\x00\x00" + b"\x00" * 8
WEBP = b"RIFF\x24\x00\x00\x00WEBPVP8 \x18\x00\x00\x00" + b"\x00" * 8
JPEG = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00" + b"\x00" * 8


class TestRouting:
    @pytest.mark.asyncio
    async def test_youtube_in_text_uses_reference_capability(
        self, gateway, fake_local, fake_cloud
    ):
        kind = classify(Text("check this out https://youtu.be/dQw4w9WgXcQ please"))

        result = await gateway.dispatch(kind, CLOUD)

        assert result == Success("cloud markdown")
        assert fake_cloud.calls == [
            ("reference", video_prompt(), "https://youtu.be/dQw4w9WgXcQ", "video/mp4")
        ]
        assert fake_local.prompts == []

    @pytest.mark.asyncio
    async def test_youtube_ignores_on_device_mode(self, gateway, fake_local, fake_cloud):
        kind = classify(Link("https://www.youtube.com/watch?v=dQw4w9WgXcQ"))

        await gateway.dispatch(kind, ON_DEVICE)

        assert [c[0] for c in fake_cloud.calls] == ["reference"]
        assert fake_local.prompts == []

    @pytest.mark.asyncio
    async def test_text_on_device_uses_local(self, gateway, fake_local, fake_cloud):
        result = await gateway.dispatch(Text("Read the fine print."), ON_DEVICE)

        assert result == Success("local markdown")
        assert fake_local.prompts == [text_prompt("Read the fine print.")]
        assert fake_cloud.calls == []

    @pytest.mark.asyncio
    async def test_text_in_cloud_uses_text_capability(self, gateway, fake_cloud):
        await gateway.dispatch(Text("Read the fine print."), CLOUD)
        assert fake_cloud.calls == [
            ("text", text_prompt("Read the fine print."), None, None)
        ]

    @pytest.mark.asyncio
    async def test_link_uses_link_prompt(self, gateway, fake_cloud):
        await gateway.dispatch(Link("https://example.com/post"), CLOUD)
        assert fake_cloud.calls == [
            ("text", link_prompt("https://example.com/post"), None, None)
        ]

    @pytest.mark.asyncio
    async def test_code_builds_review_prompt_once(self, gateway, fake_cloud):
        kind = Code(source="print(1)", file_name="a.py", language="python")

        result = await gateway.dispatch(kind, CLOUD)

        assert isinstance(result, Success)
        assert len(fake_cloud.calls) == 1
        capability, prompt, _, _ = fake_cloud.calls[0]
        assert capability == "text"
        assert prompt == code_prompt("a.py", "python", "print(1)")
        assert "File: a.py\nLanguage: python" in prompt
        assert prompt.endswith("print(1)")

    @pytest.mark.asyncio
    async def test_video_bytes_sent_as_mp4(self, gateway, fake_cloud):
        await gateway.dispatch(VideoBytes(b"\x00\x01"), CLOUD)
        assert fake_cloud.calls == [("bytes", video_prompt(), b"\x00\x01", "video/mp4")]

    @pytest.mark.asyncio
    async def test_document_uses_declared_media_type(self, gateway, fake_cloud):
        kind = Document(b"%PDF-1.7", "application/pdf", "lease.pdf")
        await gateway.dispatch(kind, CLOUD)
        assert fake_cloud.calls == [
            ("bytes", document_prompt("lease.pdf"), b"%PDF-1.7", "application/pdf")
        ]

    @pytest.mark.asyncio
    async def test_image_media_type_is_sniffed(self, gateway, fake_cloud):
        await gateway.dispatch(ImageBytes(PNG), CLOUD)
        assert fake_cloud.calls == [("bytes", image_prompt(), PNG, "image/png")]

    @pytest.mark.asyncio
    async def test_fixed_kind_ignores_on_device_mode(
        self, gateway, fake_local, fake_cloud
    ):
        await gateway.dispatch(Link("https://example.com"), ON_DEVICE)
        assert len(fake_cloud.calls) == 1
        assert fake_local.prompts == []


class TestLocalFallback:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            BackendUnavailableError("not ready"),
            GenerationFailedError("nothing"),
            TransportError("connection refused"),
            RuntimeError("unexpected"),
        ],
    )
    async def test_local_failure_degrades_to_placeholder(
        self, gateway, fake_local, fake_cloud, error
    ):
        fake_local.error = error

        result = await gateway.dispatch(Text("Hello there"), ON_DEVICE)

        assert result == Success(offline_placeholder("Hello there"))
        assert fake_cloud.calls == []

    def test_placeholder_is_deterministic_and_labeled(self):
        text = "x" * 80
        markdown = offline_placeholder(text)

        assert markdown == offline_placeholder(text)
        assert f'"{"x" * 50}..."' in markdown
        assert "*mock*" in markdown
        assert markdown.startswith("# TL;DR")

    def test_placeholder_points_to_a_restart_not_a_retry(self):
        markdown = offline_placeholder("hello")

        assert "Restart Plainly once the local model is running" in markdown
        assert "Try On-Device again" not in markdown

    @pytest.mark.asyncio
    async def test_local_timeout_also_degrades(self, fake_cloud):
        class SlowLocal:
            async def generate(self, prompt):
                await asyncio.sleep(10)
                return "late"

        gateway = ExplanationGateway(local=SlowLocal(), cloud=fake_cloud, timeout=0.01)

        result = await gateway.dispatch(Text("Hi"), ON_DEVICE)

        assert result == Success(offline_placeholder("Hi"))


class TestFailures:
    @pytest.mark.asyncio
    async def test_cloud_transport_error_is_returned_verbatim(self, gateway, fake_cloud):
        fake_cloud.error = TransportError("429 RESOURCE_EXHAUSTED")

        result = await gateway.dispatch(Link("https://example.com"), CLOUD)

        assert isinstance(result, Failure)
        assert result.error.cause == "429 RESOURCE_EXHAUSTED"

    @pytest.mark.asyncio
    async def test_unexpected_cloud_exception_becomes_transport_error(
        self, gateway, fake_cloud
    ):
        fake_cloud.error = ValueError("bad payload")

        result = await gateway.dispatch(ImageBytes(JPEG), CLOUD)

        assert isinstance(result, Failure)
        assert isinstance(result.error, TransportError)
        assert result.error.cause == "bad payload"

    @pytest.mark.asyncio
    async def test_cloud_timeout(self, fake_local, fake_cloud):
        fake_cloud.gate = asyncio.Event()
        gateway = ExplanationGateway(local=fake_local, cloud=fake_cloud, timeout=0.01)

        result = await gateway.dispatch(Text("hi"), CLOUD)

        assert isinstance(result, Failure)
        assert isinstance(result.error, ExplainTimeoutError)
        assert result.error.kind == "timeout"

    @pytest.mark.asyncio
    async def test_blank_text_is_empty_input(self, gateway, fake_local, fake_cloud):
        result = await gateway.dispatch(Text("   "), ON_DEVICE)

        assert isinstance(result, Failure)
        assert result.error.kind == "empty_input"
        assert fake_local.prompts == []
        assert fake_cloud.calls == []

    @pytest.mark.asyncio
    async def test_gateway_does_not_retry(self, gateway, fake_cloud):
        fake_cloud.error = TransportError("down")
        await gateway.dispatch(Link("https://example.com"), CLOUD)
        assert len(fake_cloud.calls) == 1


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (PNG, "image/png"),
        (GIF, "image/gif"),
        (b"GIF87a\x01\x00\x01\x00\x80\x00\x00" + b"\x00" * 8, "image/gif"),
        (WEBP, "image/webp"),
        (JPEG, "image/jpeg"),
        (b"", "image/jpeg"),
        (b"unknown-format", "image/jpeg"),
        (b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n", "image/jpeg"),
    ],
)
def test_sniff_image_mime_type(data, expected):
    assert sniff_image_mime_type(data) == expected
