"""
Unit tests for the processing-mode policy and presentation labels
"""

import pytest

from plainly.core.classifier import classify
from plainly.core.policy import (
    RESTORED_LABEL,
    default_mode,
    effective_mode,
    is_mode_flexible,
    loading_label,
    shows_mode_picker,
)
from plainly.core.types import (
    Code,
    Document,
    ImageBytes,
    Link,
    ProcessingMode,
    Text,
    VideoBytes,
)

pytestmark = pytest.mark.unit

ON_DEVICE = ProcessingMode.ON_DEVICE
CLOUD = ProcessingMode.CLOUD

FIXED_KINDS = [
    Link("https://example.com"),
    ImageBytes(b"img"),
    VideoBytes(b"vid"),
    Document(b"%PDF", "application/pdf", "doc.pdf"),
    Code("print(1)", "a.py", "python"),
]


@pytest.mark.parametrize(
    "body",
    ["hello", "Terms and conditions apply.", "see youtube.com without scheme"],
)
def test_plain_text_defaults_on_device_with_picker(body):
    kind = classify(Text(body))
    assert default_mode(kind) is ON_DEVICE
    assert shows_mode_picker(kind)


@pytest.mark.parametrize(
    "raw",
    [
        Text("watch https://youtu.be/dQw4w9WgXcQ"),
        Link("https://www.youtube.com/watch?v=dQw4w9WgXcQ"),
    ],
)
def test_youtube_inputs_force_cloud_without_picker(raw):
    kind = classify(raw)
    assert default_mode(kind) is CLOUD
    assert not shows_mode_picker(kind)


def test_youtube_override_flag_forces_cloud_for_text():
    assert default_mode(Text("anything"), youtube_override=True) is CLOUD


@pytest.mark.parametrize("kind", FIXED_KINDS)
def test_fixed_kinds_default_to_cloud_without_picker(kind):
    assert default_mode(kind) is CLOUD
    assert not is_mode_flexible(kind)
    assert not shows_mode_picker(kind)


def test_no_input_shows_no_picker():
    assert not shows_mode_picker(None)


@pytest.mark.parametrize("kind", FIXED_KINDS)
def test_effective_mode_keeps_fixed_kinds_in_cloud(kind):
    assert effective_mode(kind, ON_DEVICE) is CLOUD


@pytest.mark.parametrize("mode", list(ProcessingMode))
def test_effective_mode_honors_text_choice(mode):
    assert effective_mode(Text("hi"), mode) is mode


@pytest.mark.parametrize(
    ("kind", "mode", "label"),
    [
        (Link("https://example.com"), CLOUD, "Reading Link..."),
        (classify(Text("https://youtu.be/dQw4w9WgXcQ")), CLOUD, "Watching Video..."),
        (VideoBytes(b"v"), CLOUD, "Analyzing Video..."),
        (ImageBytes(b"i"), CLOUD, "Analyzing Image..."),
        (Document(b"d", "application/pdf", "x.pdf"), CLOUD, "Reading Document..."),
        (Code("x", "a.py", "python"), CLOUD, "Reviewing Code..."),
        (Text("hi"), ON_DEVICE, "Processing on device..."),
        (Text("hi"), CLOUD, "Processing..."),
    ],
)
def test_loading_labels(kind, mode, label):
    assert loading_label(kind, mode) == label


def test_mode_labels():
    assert ON_DEVICE.display_name == "On-Device"
    assert CLOUD.display_name == "Cloud"
    assert ON_DEVICE.privacy_caption == "Private On-Device Processing"
    assert CLOUD.privacy_caption == "Secured Cloud Processing"
    assert RESTORED_LABEL == "Restored from History"
