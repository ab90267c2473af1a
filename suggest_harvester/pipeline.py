from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from .browser import SeleniumBrowser
from .config import BrowserConfig
from .models import KeywordRow, ResultPair, RunSummary, SuggestionSet
from .pacing import KEYSTROKE, KEYWORD, PacingPolicy
from .workbook import KeywordSheet

LOGGER = logging.getLogger("suggest_harvester.pipeline")


def reduce_suggestions(keyword: str, suggestions: Iterable[str]) -> ResultPair | None:
    """Pick the longest and shortest suggestion in a single ordered pass.

    ``longest`` starts empty and ``shortest`` starts at the keyword itself, and
    both only move on a strictly greater/lesser length so the first of equally
    long candidates wins. Returns None when no non-blank suggestion remains.
    """

    candidates = [text.strip() for text in suggestions if text and text.strip()]
    if not candidates:
        return None

    longest = ""
    shortest = keyword
    for text in candidates:
        if len(text) > len(longest):
            longest = text
        if len(text) < len(shortest):
            shortest = text
    return ResultPair(longest=longest, shortest=shortest)


def type_keyword(
    browser: SeleniumBrowser,
    element: object,
    keyword: str,
    pacing: PacingPolicy,
) -> None:
    browser.clear(element)
    for char in keyword:
        browser.send_keys(element, char)
        pacing.pause(KEYSTROKE)
    browser.submit(element)


def capture_suggestions(browser: SeleniumBrowser, conf: BrowserConfig) -> SuggestionSet:
    """Wait for the autocomplete list and return its non-empty item texts in order."""

    browser.wait_for_presence(conf.suggestion_container_css)
    suggestions: SuggestionSet = []
    for item in browser.find_all(conf.suggestion_item_css):
        text = browser.read_text(item)
        if text:
            suggestions.append(text)
    return suggestions


def search_keyword(
    browser: SeleniumBrowser,
    keyword: str,
    conf: BrowserConfig,
    pacing: PacingPolicy,
) -> ResultPair | None:
    browser.navigate(conf.home_url)
    try:
        search_box = browser.wait_for_clickable(conf.search_input_name)
        type_keyword(browser, search_box, keyword, pacing)
        suggestions = capture_suggestions(browser, conf)
    except Exception as exc:
        LOGGER.debug("Suggestion capture failed for '%s': %s", keyword, exc)
        suggestions = []

    pair = reduce_suggestions(keyword, suggestions)
    if pair is None:
        LOGGER.info("No suggestions found for keyword: %s", keyword)
    return pair


def process_sheet(
    sheet: KeywordSheet,
    browser: SeleniumBrowser,
    conf: BrowserConfig,
    pacing: PacingPolicy,
    *,
    limit: Optional[int] = None,
) -> Tuple[List[KeywordRow], RunSummary]:
    """Search every keyword of the sheet top to bottom and write results in place."""

    summary = RunSummary()
    processed: List[KeywordRow] = []
    for row in sheet.rows():
        if limit is not None and len(processed) >= limit:
            LOGGER.info("Reached limit of %s keywords; remaining rows left untouched", limit)
            break
        summary.rows_visited += 1

        keyword = row.search_text
        if not keyword:
            summary.skipped_empty += 1
            continue

        LOGGER.debug("Searching row %s: %s", row.row_index, keyword)
        pair = search_keyword(browser, keyword, conf, pacing)
        if pair is None:
            summary.no_suggestions += 1
        else:
            sheet.write_result(row, pair)
            summary.written += 1
            LOGGER.info(
                "Row %s '%s': longest='%s' shortest='%s'",
                row.row_index,
                keyword,
                pair.longest,
                pair.shortest,
            )
        processed.append(row)
        pacing.pause(KEYWORD)

    if summary.no_suggestions:
        LOGGER.warning("No suggestions captured for %s keywords", summary.no_suggestions)
    LOGGER.info(
        "Completed sheet %s: %s rows visited, %s without keyword, "
        "%s keywords searched, %s rows written",
        sheet.name,
        summary.rows_visited,
        summary.skipped_empty,
        len(processed),
        summary.written,
    )
    return processed, summary
