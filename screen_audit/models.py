"""
Data Models for Screen Audit

Type-safe Pydantic models for every value flowing through the pipeline.
All models are frozen: each request builds fresh values and nothing is
mutated after construction. Field names are snake_case in Python and
camelCase on the wire (see ``model_dump(by_alias=True)``).
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class AuditModel(BaseModel):
    """Shared configuration: immutable, camelCase aliases, accepts either name"""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ImageInput(AuditModel):
    """
    Screenshot bytes handed to the pipeline.

    Owned by the caller; the pipeline only reads it.
    """

    data: bytes = Field(min_length=1, repr=False)
    mime_type: str = "image/png"

    @field_validator("mime_type")
    @classmethod
    def check_mime(cls, v: str) -> str:
        if not v.startswith("image/"):
            raise ValueError(f"Not an image mime type: {v}")
        return v


class BoundingBox(AuditModel):
    """Axis-aligned box in screenshot pixels"""

    x0: float = Field(allow_inf_nan=False)
    y0: float = Field(allow_inf_nan=False)
    x1: float = Field(allow_inf_nan=False)
    y1: float = Field(allow_inf_nan=False)

    @model_validator(mode="after")
    def check_corners(self) -> "BoundingBox":
        if self.x1 < self.x0 or self.y1 < self.y0:
            raise ValueError("Bounding box corners are inverted")
        return self

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0


class Region(AuditModel):
    """
    A detected interactive element.

    Attributes:
        element: Label of the element (button text, link name, ...)
        bbox: Bounding box of the element
        font_size: Optional detector hint for the element's text size in px
    """

    element: str
    bbox: BoundingBox
    font_size: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)


# Heuristic reports

class ClickTarget(AuditModel):
    element: str
    size: int
    meets_44px: bool


class FontSizeCheck(AuditModel):
    element: str
    size: int
    acceptable: bool


class SizingReport(AuditModel):
    """
    Click target sizing and implementation feasibility.

    ``problem_areas`` never holds more than 10 entries.
    """

    click_targets: list[ClickTarget] = Field(default_factory=list)
    font_sizes: list[FontSizeCheck] = Field(default_factory=list)
    padding_issues: list[str] = Field(default_factory=list)
    feasibility: Literal["Possible", "Needs Adjustments"] = "Possible"
    problem_areas: list[str] = Field(default_factory=list, max_length=10)


class FocusEntry(AuditModel):
    element: str
    tab_index: int = Field(ge=1)


class InteractiveElement(AuditModel):
    element: str
    accessible: bool = True


class KeyboardReport(AuditModel):
    """Estimated keyboard navigation quality"""

    focus_order: list[FocusEntry] = Field(default_factory=list)
    focus_visibility: bool = True
    interactive_elements: list[InteractiveElement] = Field(default_factory=list)
    missing_labels: list[str] = Field(default_factory=list)
    pass_or_warn: Literal["pass", "warn"] = "warn"


# Generative report

class ColorPalette(AuditModel):
    primary: list[str] = Field(default_factory=list)
    secondary: list[str] = Field(default_factory=list)
    accent: list[str] = Field(default_factory=list)
    text: list[str] = Field(default_factory=list)
    background: list[str] = Field(default_factory=list)


class GenerativeReport(AuditModel):
    """
    Qualitative critique produced by the vision model.

    The schema is total: every field has a default and the validator
    coerces malformed values instead of failing.

    Scores are 0-100. A fallback report uses 0 for "rate limited, no
    analysis happened" and 50 for "insufficient information".
    """

    ui_type: str = "Unknown"
    design_system: str = "Custom"
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    accessibility_issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    color_scheme_analysis: str = ""
    layout_analysis: str = ""
    typography_analysis: str = ""
    user_experience: str = ""
    target_audience_match: str = ""
    overall_quality: float = Field(default=50, ge=0, le=100)
    contrast_score: float = Field(default=50, ge=0, le=100)
    wcag_compliance_score: float = Field(default=50, ge=0, le=100)
    color_palette: ColorPalette = Field(default_factory=ColorPalette)


class GenerativeOk(AuditModel):
    status: Literal["ok"] = "ok"
    report: GenerativeReport


class GenerativeRateLimited(AuditModel):
    status: Literal["rate_limited"] = "rate_limited"
    report: GenerativeReport
    error: str


class GenerativeDegraded(AuditModel):
    status: Literal["degraded"] = "degraded"
    report: GenerativeReport
    error: str


GenerativeOutcome = Annotated[
    Union[GenerativeOk, GenerativeRateLimited, GenerativeDegraded],
    Field(discriminator="status"),
]


class DesignSystemGuess(AuditModel):
    name: str
    confidence: float = Field(ge=0, le=100)
    reasoning: str = ""


# Scoring collaborators

class ContrastPasses(AuditModel):
    aa: bool
    aaa: bool


class ContrastPair(AuditModel):
    foreground: str
    background: str
    ratio: float
    passes: ContrastPasses


class ContrastRecommendation(AuditModel):
    color: str
    suggestion: str


class ContrastReport(AuditModel):
    light_mode: list[ContrastPair] = Field(default_factory=list)
    recommendations: list[ContrastRecommendation] = Field(default_factory=list)

    @property
    def passing_pairs(self) -> int:
        return sum(1 for pair in self.light_mode if pair.passes.aa)


class WcagReport(AuditModel):
    level: Literal["AAA", "AA", "A"]
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class TypographyReport(AuditModel):
    readability_score: int = Field(ge=0, le=100)
    issues: list[str] = Field(default_factory=list)


class HierarchyReport(AuditModel):
    priority_score: int = Field(ge=0, le=100)
    rows: int = Field(default=0, ge=0)


class AuditSignals(AuditModel):
    """Everything the aggregator scores, gathered by the assembler"""

    sizing: SizingReport
    keyboard: KeyboardReport
    contrast: ContrastReport = Field(default_factory=ContrastReport)
    typography: TypographyReport
    hierarchy: HierarchyReport
    wcag: Optional[WcagReport] = None


# Final report

Category = Literal["wcag", "contrast", "typography", "hierarchy", "sizing"]
CATEGORIES: tuple[str, ...] = ("wcag", "contrast", "typography", "hierarchy", "sizing")


class OverallScore(AuditModel):
    score: int = Field(ge=0, le=100)
    label: Literal["Excellent", "Good", "Fair", "Poor"]
    breakdown: dict[Category, int]

    @field_validator("breakdown")
    @classmethod
    def check_categories(cls, v: dict) -> dict:
        if set(v) != set(CATEGORIES):
            raise ValueError(f"Breakdown must cover exactly {CATEGORIES}")
        for key, value in v.items():
            if not 0 <= value <= 100:
                raise ValueError(f"Category {key} out of range: {value}")
        return v


class CompositeReport(AuditModel):
    """
    Complete audit result.

    This is the single source of truth for both successful and degraded
    runs: ``generative_status`` tells whether the AI section is a real
    critique ("ok"), a rate-limit placeholder, a neutral fallback, or
    was not requested ("disabled").
    """

    overall_score: OverallScore
    sizing: SizingReport
    keyboard: KeyboardReport
    contrast: ContrastReport
    typography: TypographyReport
    hierarchy: HierarchyReport
    wcag: Optional[WcagReport] = None
    generative: Optional[GenerativeReport] = None
    generative_status: Literal["ok", "rate_limited", "degraded", "disabled"] = "disabled"
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())

    def summary(self) -> str:
        """Generate a human-readable summary"""
        score = self.overall_score
        summary = f"Overall: {score.score}/100 ({score.label})\n"
        for category, value in score.breakdown.items():
            summary += f"  {category}: {value}\n"
        summary += f"AI analysis: {self.generative_status}\n"
        return summary


class Config(BaseModel):
    """
    Configuration for screen-audit.

    Created once at process start (see ``load_config``) and passed to the
    providers, the generative client and the assembler. Read-only.

    Attributes:
        gemini_api_key: Google Gemini API key (optional)
        gemini_model: Gemini model name
        anthropic_api_key: Anthropic API key (optional)
        openai_api_key: OpenAI API key (optional)
        ollama_host: Ollama server URL for local LLMs
        ollama_model: Model name for Ollama
        vision_provider: Which provider to use by default
        max_attempts: Model call attempts before falling back
        initial_delay: Backoff before the second attempt, in seconds
        call_timeout: Upper bound for a single model call, in seconds
        viewport_width: Screenshot viewport width for URL capture
        viewport_height: Screenshot viewport height for URL capture
    """

    model_config = ConfigDict(frozen=True)

    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llava"
    vision_provider: Literal["gemini", "anthropic", "openai", "local"] = "gemini"
    max_attempts: int = Field(default=3, ge=1, le=10)
    initial_delay: float = Field(default=2.0, ge=0, le=60)
    call_timeout: float = Field(default=60.0, gt=0, le=600)
    viewport_width: int = Field(default=1920, ge=800, le=3840)
    viewport_height: int = Field(default=1080, ge=600, le=2160)

    def has_gemini(self) -> bool:
        """Check if Gemini is configured"""
        return bool(self.gemini_api_key)

    def has_anthropic(self) -> bool:
        """Check if Anthropic is configured"""
        return bool(self.anthropic_api_key)

    def has_openai(self) -> bool:
        """Check if OpenAI is configured"""
        return bool(self.openai_api_key)

    @property
    def worst_case_latency(self) -> float:
        """Upper bound on a full retry cycle, in seconds"""
        backoff = sum(self.initial_delay * 2 ** i for i in range(self.max_attempts - 1))
        return self.max_attempts * self.call_timeout + backoff
