"""Page renderer backed by a Selenium Chrome session.

The rest of the package only talks to `PageRenderer` / `PageElement`, so the
pipeline can be driven by a fake renderer in tests.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from selenium import webdriver
from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_WAIT_SECONDS = 10


class PageElement:
    """Queryable DOM element."""

    @property
    def text(self) -> str:
        raise NotImplementedError

    def outer_markup(self) -> str:
        raise NotImplementedError

    def attribute(self, name: str) -> Optional[str]:
        raise NotImplementedError

    def find_all(self, class_name: str) -> List["PageElement"]:
        raise NotImplementedError

    def first_link(self) -> Optional[str]:
        """href of the first embedded anchor, or None."""
        raise NotImplementedError


class PageRenderer:
    """Loads URLs and exposes the rendered DOM. Usable as a context manager."""

    def navigate(self, url: str) -> None:
        raise NotImplementedError

    def wait_for_visible(self, class_name: str, timeout: float = DEFAULT_WAIT_SECONDS) -> PageElement:
        raise NotImplementedError

    def find_all(self, class_name: str) -> List[PageElement]:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self) -> "PageRenderer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class SeleniumElement(PageElement):
    def __init__(self, element: WebElement):
        self._element = element

    @property
    def text(self) -> str:
        return self._element.text or ""

    def outer_markup(self) -> str:
        return self._element.get_attribute("outerHTML") or ""

    def attribute(self, name: str) -> Optional[str]:
        return self._element.get_attribute(name)

    def find_all(self, class_name: str) -> List[PageElement]:
        return [SeleniumElement(e) for e in self._element.find_elements(By.CLASS_NAME, class_name)]

    def first_link(self) -> Optional[str]:
        try:
            anchor = self._element.find_element(By.TAG_NAME, "a")
        except NoSuchElementException:
            return None
        return anchor.get_attribute("href")


class ChromeRenderer(PageRenderer):
    """One Chrome session per pipeline run; `close()` always quits the driver."""

    def __init__(
        self,
        *,
        incognito: bool = True,
        headless: bool = True,
        driver_path: Optional[str] = None,
        page_load_timeout: int = 60,
    ):
        options = Options()
        options.add_argument("--remote-allow-origins=*")
        options.add_argument(f"--user-agent={USER_AGENT}")
        options.add_argument("--disable-blink-features=AutomationControlled")
        options.add_argument("--window-size=1920,1080")
        options.add_experimental_option("excludeSwitches", ["enable-logging", "enable-automation"])
        if headless:
            options.add_argument("--headless=new")
            options.add_argument("--no-sandbox")
            options.add_argument("--disable-dev-shm-usage")
        if incognito:
            options.add_argument("--incognito")

        service = Service(executable_path=driver_path) if driver_path else Service()
        logger.info(f"Starting Chrome (headless={headless}, incognito={incognito})")
        self.driver = webdriver.Chrome(service=service, options=options)
        self.driver.set_page_load_timeout(page_load_timeout)

    def navigate(self, url: str) -> None:
        self.driver.get(url)

    def wait_for_visible(self, class_name: str, timeout: float = DEFAULT_WAIT_SECONDS) -> PageElement:
        wait = WebDriverWait(self.driver, timeout)
        element = wait.until(EC.visibility_of_element_located((By.CLASS_NAME, class_name)))
        return SeleniumElement(element)

    def find_all(self, class_name: str) -> List[PageElement]:
        return [SeleniumElement(e) for e in self.driver.find_elements(By.CLASS_NAME, class_name)]

    def close(self) -> None:
        if self.driver is None:
            return
        try:
            self.driver.quit()
            logger.info("Chrome session closed")
        except Exception as e:
            logger.warning(f"Error while closing Chrome session: {e}")
        finally:
            self.driver = None


def chrome_renderer_from_config(config) -> ChromeRenderer:
    return ChromeRenderer(
        incognito=config.incognito,
        headless=config.headless,
        driver_path=config.chromedriver_path or None,
    )
