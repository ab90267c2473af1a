from __future__ import annotations

import logging
from typing import List

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from .config import BrowserConfig

LOGGER = logging.getLogger(__name__)


def create_driver(conf: BrowserConfig) -> webdriver.Chrome:
    options = Options()
    for argument in conf.chrome_arguments:
        options.add_argument(argument)
    if conf.headless:
        options.add_argument("--headless=new")
        options.add_argument("--window-size=1920,1080")

    driver_path = conf.resolved_driver_path
    if driver_path is not None:
        if not driver_path.exists():
            raise FileNotFoundError(f"chromedriver not found: {driver_path}")
        service = Service(executable_path=str(driver_path))
    else:
        service = Service()
    LOGGER.debug("Starting Chrome with arguments %s", options.arguments)
    return webdriver.Chrome(service=service, options=options)


class SeleniumBrowser:
    """The handful of browser operations the keyword processor relies on.

    Waits raise ``selenium.common.exceptions.TimeoutException`` when the
    condition does not hold within ``timeout`` seconds.
    """

    def __init__(self, driver: webdriver.Remote, timeout: float) -> None:
        self._driver = driver
        self._wait = WebDriverWait(driver, timeout)

    @classmethod
    def launch(cls, conf: BrowserConfig) -> "SeleniumBrowser":
        return cls(create_driver(conf), conf.wait_timeout)

    def navigate(self, url: str) -> None:
        self._driver.get(url)

    def wait_for_clickable(self, name: str) -> WebElement:
        return self._wait.until(EC.element_to_be_clickable((By.NAME, name)))

    def wait_for_presence(self, css_selector: str) -> WebElement:
        return self._wait.until(EC.presence_of_element_located((By.CSS_SELECTOR, css_selector)))

    def find_all(self, css_selector: str) -> List[WebElement]:
        return self._driver.find_elements(By.CSS_SELECTOR, css_selector)

    def clear(self, element: WebElement) -> None:
        element.clear()

    def send_keys(self, element: WebElement, text: str) -> None:
        element.send_keys(text)

    def submit(self, element: WebElement) -> None:
        element.send_keys(Keys.RETURN)

    def read_text(self, element: WebElement) -> str:
        return (element.text or "").strip()

    def close(self) -> None:
        try:
            self._driver.quit()
        except Exception:  # pragma: no cover - shutdown best effort
            LOGGER.warning("Browser did not shut down cleanly", exc_info=True)
