"""
Settings for the Chrome instance that prints lesson plans.

Page geometry is in centimetres, the unit Selenium's PrintOptions uses.
The defaults give an A4 portrait page with a half-centimetre margin.
"""

from dataclasses import dataclass
from typing import Tuple


A4_CM = (21.0, 29.7)


@dataclass(frozen=True)
class BrowserConfig:
    """
    Browser and page settings for PdfExporter.

    Attributes:
        headless: Start Chrome without a window
        window_size: Window (width, height) in pixels, roughly A4 at 150 dpi
        timeout: Seconds to wait for the page to load
        page_width_cm: Printed page width
        page_height_cm: Printed page height
        margin_cm: Margin applied to all four sides
        print_background: Keep table shading in the PDF
    """

    headless: bool = True
    window_size: Tuple[int, int] = (1240, 1754)
    timeout: int = 30
    page_width_cm: float = A4_CM[0]
    page_height_cm: float = A4_CM[1]
    margin_cm: float = 0.5
    print_background: bool = True

    def __post_init__(self):
        problems = []

        if len(self.window_size) != 2 or min(self.window_size) <= 0:
            problems.append(f"window_size must be two positive numbers, got {self.window_size}")
        if self.timeout <= 0:
            problems.append(f"timeout must be positive, got {self.timeout}")
        if min(self.page_width_cm, self.page_height_cm) <= 0:
            problems.append(f"page size must be positive, got {self.page_width_cm}x{self.page_height_cm}cm")
        elif not 0 <= 2 * self.margin_cm < min(self.page_width_cm, self.page_height_cm):
            problems.append(f"margin_cm leaves no printable area: {self.margin_cm}")

        if problems:
            raise ValueError("; ".join(problems))

    @classmethod
    def from_settings(cls, headless: bool, timeout: int) -> 'BrowserConfig':
        """Build from BROWSER_HEADLESS and BROWSER_TIMEOUT."""
        return cls(headless=headless, timeout=timeout)

    @classmethod
    def for_testing(cls) -> 'BrowserConfig':
        return cls(headless=True, timeout=5)
