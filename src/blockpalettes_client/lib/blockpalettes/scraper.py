"""HTML extraction for Block Palettes palette pages.

Parses a ``/palette/{id}`` page with lxml and pulls out:

* the block names rendered in ``.single-block`` elements, and
* the ids of similar palettes linked from ``.palette-card`` elements.

Elements that carry no usable data are skipped rather than treated as
errors, so a partially rendered page still yields whatever it contains.
"""

import re

import lxml.html
from cssselect import SelectorError
from loguru import logger
from lxml import etree
from lxml.cssselect import CSSSelector

from blockpalettes_client.lib.blockpalettes.errors import SelectorCompileError
from blockpalettes_client.lib.blockpalettes.models import PalettePageExtract

BLOCK_SELECTOR = ".single-block"
CARD_SELECTOR = ".palette-card"

# Palette ids are unsigned 64-bit; 2**64 - 1 has 20 digits.
_MAX_PALETTE_ID = 2**64 - 1
_NUMERIC_SEGMENT = re.compile(r"[0-9]{1,20}")


def compile_selector(expression: str) -> CSSSelector:
    """Compile a CSS selector for HTML documents.

    Raises:
        SelectorCompileError: If the expression is not valid CSS.
    """
    try:
        return CSSSelector(expression, translator="html")
    except SelectorError as exc:
        raise SelectorCompileError(expression, str(exc)) from exc


def _block_name(element: lxml.html.HtmlElement) -> str | None:
    """Return the trailing text of a block element, or None if it has none.

    Block elements nest a label and a value; the value is the last
    non-blank text fragment inside the element.
    """
    # Whitespace-only fragments (indentation between nested tags) are not names.
    fragments = [text.strip() for text in element.itertext()]
    fragments = [text for text in fragments if text]
    return fragments[-1] if fragments else None


def palette_id_from_href(href: str | None) -> int | None:
    """Parse the palette id from the final path segment of ``href``.

    ``/palette/42`` gives ``42``; a missing href, a trailing slash, a
    non-numeric segment or a value outside the unsigned 64-bit range gives None.
    """
    if not href:
        return None
    segment = href.split("/")[-1]
    if not _NUMERIC_SEGMENT.fullmatch(segment):
        return None
    palette_id = int(segment)
    if palette_id > _MAX_PALETTE_ID:
        return None
    return palette_id


class PalettePageScraper:
    """Extracts block names and similar palette ids from palette page HTML.

    Selectors are compiled once at construction, so a malformed selector
    fails immediately with :class:`SelectorCompileError`.

    Args:
        block_selector: CSS selector for block name elements.
        card_selector: CSS selector for similar palette card links.
    """

    def __init__(self, block_selector: str = BLOCK_SELECTOR, card_selector: str = CARD_SELECTOR) -> None:
        self._block_selector = compile_selector(block_selector)
        self._card_selector = compile_selector(card_selector)

    def extract(self, html: str) -> PalettePageExtract:
        """Extract page data from an HTML document.

        Args:
            html: Raw HTML text of a palette page.

        Returns:
            Block names in document order and similar palette ids in card order.
        """
        if not html.strip():
            return PalettePageExtract()

        try:
            document = lxml.html.document_fromstring(html)
        except etree.ParserError:
            logger.debug("Palette page has no parseable elements")
            return PalettePageExtract()

        blocks: list[str] = []
        for element in self._block_selector(document):
            name = _block_name(element)
            if name is None:
                logger.debug("Skipping block element with no text")
                continue
            blocks.append(name)

        similar: list[int] = []
        for element in self._card_selector(document):
            href = element.get("href")
            palette_id = palette_id_from_href(href)
            if palette_id is None:
                logger.debug("Skipping palette card with unusable href {!r}", href)
                continue
            similar.append(palette_id)

        return PalettePageExtract(blocks=blocks, similar_palette_ids=similar)


_default_scraper = PalettePageScraper()


def extract_palette_page(html: str) -> PalettePageExtract:
    """Extract page data using the default ``.single-block`` / ``.palette-card`` selectors."""
    return _default_scraper.extract(html)
