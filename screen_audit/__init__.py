"""
Screen Audit - UI Screenshot Quality Report

Scores a UI screenshot for accessibility, contrast, typography, layout
hierarchy and sizing feasibility, optionally adding a qualitative
critique from a vision model.

Supports multiple vision providers:
- Google Gemini
- Anthropic Claude
- OpenAI GPT-4o
- Local LLMs (Ollama/LLaVA)
"""

__version__ = "0.1.0"

from .assembler import ReportAssembler
from .client import GenerativeClient
from .models import CompositeReport, GenerativeReport, ImageInput, Region

__all__ = [
    "CompositeReport",
    "GenerativeClient",
    "GenerativeReport",
    "ImageInput",
    "Region",
    "ReportAssembler",
]
