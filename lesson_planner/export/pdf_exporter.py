"""
PDF export using Selenium WebDriver.

The plan is rendered to HTML, opened in headless Chrome from a
temporary file and printed with Chrome's own print-to-PDF, which lays
out Arabic right-to-left text correctly.
"""

import base64
import logging
import tempfile
from pathlib import Path
from typing import Callable, Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.print_page_options import PrintOptions
from selenium.webdriver.support.ui import WebDriverWait
from webdriver_manager.chrome import ChromeDriverManager

from .browser_config import BrowserConfig
from .html_renderer import render_lesson_plan_html
from .. import messages
from ..errors import ExportError
from ..interfaces import PlanExporter
from ..models.lesson_plan import LessonPlan
from ..utils.file_utils import safe_filename


logger = logging.getLogger(__name__)


def create_chrome_driver(config: BrowserConfig) -> webdriver.Chrome:
    """
    Start a Chrome WebDriver configured for printing.

    Args:
        config: Browser configuration

    Returns:
        Running Chrome WebDriver

    Raises:
        WebDriverException: If ChromeDriver initialization fails
    """
    options = Options()

    if config.headless:
        options.add_argument("--headless")
        options.add_argument("--disable-gpu")

    width, height = config.window_size
    options.add_argument(f"--window-size={width},{height}")
    options.add_argument("--no-sandbox")

    service = Service(ChromeDriverManager().install())
    driver = webdriver.Chrome(service=service, options=options)
    driver.set_page_load_timeout(config.timeout)

    logger.info(
        f"PDF browser initialized (headless={config.headless}, "
        f"window_size={config.window_size}, timeout={config.timeout})"
    )
    return driver


class PdfExporter(PlanExporter):
    """
    Exports lesson plans to A4 PDF files with headless Chrome.

    A browser is started for each export and always closed afterwards.

    Examples:
        >>> exporter = PdfExporter(BrowserConfig(headless=True))
        >>> path = exporter.export(plan, Path("output/pdf"))
        >>> path.name
        'الفاعل.pdf'
    """

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        driver_factory: Optional[Callable[[BrowserConfig], object]] = None
    ):
        """
        Initialize PdfExporter.

        Args:
            config: Browser configuration (default: BrowserConfig())
            driver_factory: Callable creating a WebDriver from the config
                (default: create_chrome_driver)
        """
        self.config = config or BrowserConfig()
        self.driver_factory = driver_factory or create_chrome_driver

    def _print_options(self) -> PrintOptions:
        """Build Chrome print options from the page geometry."""
        options = PrintOptions()
        options.orientation = "portrait"
        options.page_width = self.config.page_width_cm
        options.page_height = self.config.page_height_cm
        options.margin_top = self.config.margin_cm
        options.margin_bottom = self.config.margin_cm
        options.margin_left = self.config.margin_cm
        options.margin_right = self.config.margin_cm
        options.background = self.config.print_background
        return options

    def export(self, plan: LessonPlan, output_dir: Path) -> Path:
        """
        Export a lesson plan to PDF.

        The file is named after the lesson title, or a default name when
        the title is empty.

        Args:
            plan: Lesson plan to export
            output_dir: Directory for the PDF file

        Returns:
            Path of the written PDF

        Raises:
            ExportError: If the browser cannot start or printing fails
        """
        output_path = Path(output_dir) / f"{safe_filename(plan.get('lesson_title'), messages.DEFAULT_FILE_TITLE)}.pdf"

        try:
            driver = self.driver_factory(self.config)
        except Exception as e:
            logger.error(f"Failed to initialize browser: {e}", exc_info=True)
            raise ExportError(messages.PDF_LIBRARIES_MISSING) from e

        try:
            with tempfile.TemporaryDirectory() as tmp_dir:
                html_path = Path(tmp_dir) / "lesson_plan.html"
                html_path.write_text(render_lesson_plan_html(plan), encoding="utf-8")

                driver.get(html_path.as_uri())
                WebDriverWait(driver, self.config.timeout).until(
                    lambda d: d.execute_script("return document.readyState") == "complete"
                )

                pdf_base64 = driver.print_page(self._print_options())

            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(base64.b64decode(pdf_base64))

            logger.info(f"Exported plan {plan.get('id')} to {output_path}")
            return output_path

        except TimeoutException as e:
            logger.error(f"Page load timeout after {self.config.timeout}s")
            raise ExportError(messages.PDF_EXPORT_FAILED) from e

        except (WebDriverException, OSError, ValueError) as e:
            logger.error(f"PDF export failed: {e}", exc_info=True)
            raise ExportError(messages.PDF_EXPORT_FAILED) from e

        finally:
            try:
                driver.quit()
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")
