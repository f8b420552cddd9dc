"""
Image Acquisition

Turns a screenshot file or a live URL into an ImageInput. URL capture
uses a headless Playwright browser and keeps the PNG in memory.
"""

import mimetypes
from pathlib import Path
from typing import Optional

from playwright.async_api import Page, async_playwright, TimeoutError as PlaywrightTimeout

from .models import ImageInput

DEFAULT_VIEWPORT = {"width": 1920, "height": 1080}

# Extra settle time after the page reports idle, in ms
RENDER_SETTLE_MS = 500


def load_image(path: Path) -> ImageInput:
    """
    Read a screenshot file from disk.

    The mime type is guessed from the file extension.

    Raises:
        ValueError: If the file is not a recognised image type or is empty
        OSError: If the file cannot be read
    """
    mime_type, _ = mimetypes.guess_type(str(path))
    if mime_type is None or not mime_type.startswith("image/"):
        raise ValueError(f"Not an image file: {path}")

    data = Path(path).read_bytes()
    if not data:
        raise ValueError(f"Image file is empty: {path}")

    return ImageInput(data=data, mime_type=mime_type)


class ScreenshotCapturer:
    """
    Renders a web page in headless Chromium and returns it as an ImageInput.

    A selector can be clicked first (to open a tab or modal) and another
    awaited, so the capture shows the state being audited.

    Example:
        capturer = ScreenshotCapturer(viewport={"width": 1440, "height": 900})
        image = await capturer.capture("https://example.com/settings", wait_for="main")
        report = await assembler.assemble(image)
    """

    def __init__(self, viewport: Optional[dict] = None):
        self.viewport = viewport or dict(DEFAULT_VIEWPORT)

    async def capture(
        self,
        url: str,
        selector: Optional[str] = None,
        wait_for: Optional[str] = None,
        full_page: bool = True,
        wait_timeout: int = 5000
    ) -> ImageInput:
        """
        Capture a PNG screenshot of a web page.

        Args:
            url: Page URL to capture (file:// or http(s)://)
            selector: CSS selector to click before capture
            wait_for: CSS selector to wait for before capture
            full_page: Whole scrollable page (True) or the viewport only
            wait_timeout: Milliseconds allowed for navigation and each selector

        Returns:
            ImageInput holding PNG bytes

        Raises:
            RuntimeError: If the page or a selector cannot be reached in time
        """
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            try:
                page = await browser.new_page(viewport=self.viewport)
                await self._prepare(page, url, selector, wait_for, wait_timeout)
                png = await page.screenshot(full_page=full_page, type="png")
            finally:
                await browser.close()

        return ImageInput(data=png, mime_type="image/png")

    @staticmethod
    async def _prepare(
        page: Page,
        url: str,
        selector: Optional[str],
        wait_for: Optional[str],
        wait_timeout: int
    ) -> None:
        try:
            await page.goto(url, wait_until="networkidle", timeout=wait_timeout)
        except PlaywrightTimeout as e:
            raise RuntimeError(f"Page did not load in time: {url}") from e

        if selector:
            try:
                await page.click(selector, timeout=wait_timeout)
            except PlaywrightTimeout as e:
                raise RuntimeError(f"Failed to find clickable element: {selector}") from e

        if wait_for:
            try:
                await page.wait_for_selector(wait_for, timeout=wait_timeout)
            except PlaywrightTimeout as e:
                raise RuntimeError(f"Timeout waiting for element: {wait_for}") from e

        await page.wait_for_timeout(RENDER_SETTLE_MS)
