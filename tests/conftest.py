import json

import pytest

from screen_audit.models import Config, ImageInput
from screen_audit.providers.base import VisionProvider

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c63000100000500010d0a2db40000000049454e44ae426082"
)


def full_response(**overrides) -> dict:
    data = {
        "uiType": "Dashboard",
        "designSystem": "Material Design",
        "strengths": ["Clear navigation", "Consistent spacing"],
        "weaknesses": ["Dense tables"],
        "accessibilityIssues": ["Low contrast footer text"],
        "recommendations": ["Increase footer contrast", "Enlarge icon buttons"],
        "colorSchemeAnalysis": "Cool palette with one accent",
        "layoutAnalysis": "Card grid with clear hierarchy",
        "typographyAnalysis": "Single sans-serif family",
        "userExperience": "Efficient for power users",
        "targetAudienceMatch": "Operations teams",
        "overallQuality": 78,
        "contrastScore": 72,
        "wcagComplianceScore": 70,
        "colorPalette": {
            "primary": ["#1A73E8"],
            "secondary": ["#5F6368"],
            "accent": ["#FBBC04"],
            "text": ["#202124"],
            "background": ["#FFFFFF"],
        },
    }
    data.update(overrides)
    return data


class FakeError(Exception):
    def __init__(self, message: str = "boom", status_code=None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class FakeProvider(VisionProvider):
    """Replays a script of responses; exceptions in the script are raised"""

    def __init__(self, script):
        self.script = list(script)
        self.calls = []

    @property
    def name(self) -> str:
        return "fake"

    def is_available(self) -> bool:
        return True

    async def generate(self, prompt, image, *, temperature=0.4, max_tokens=8192):
        self.calls.append({"prompt": prompt, "temperature": temperature, "max_tokens": max_tokens})
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class SleepRecorder:
    def __init__(self):
        self.waits = []

    async def __call__(self, seconds):
        self.waits.append(seconds)


@pytest.fixture
def image():
    return ImageInput(data=PNG_BYTES, mime_type="image/png")


@pytest.fixture
def config():
    return Config(max_attempts=3, initial_delay=2.0, call_timeout=5.0)


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def good_text():
    return "Here is the analysis:\n```json\n" + json.dumps(full_response()) + "\n```"


def region(element, x0, y0, x1, y1, **extra):
    data = {"element": element, "bbox": {"x0": x0, "y0": y0, "x1": x1, "y1": y1}}
    data.update(extra)
    return data
