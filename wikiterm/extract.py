"""Reduce MediaWiki article HTML to readable plain text."""

import re

from bs4 import BeautifulSoup, Comment

from .errors import DecodeError

# Elements that never carry article prose
DROP_SELECTORS = [
    "style", "script", "noscript", "table.infobox", "table.navbox", ".navbox",
    ".metadata", ".ambox", ".hatnote", ".toc", "#toc", ".mw-editsection",
    ".thumb", "figure", ".shortdescription", ".mw-empty-elt", "sup.reference",
]
BLOCK_TAGS = [
    "p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "dt", "dd",
    "pre", "blockquote", "tr", "table", "ul", "ol", "dl",
]
HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def readable_text(html: str) -> str:
    """Return the human-readable text of an article body.

    Headings come out upper-cased on a line of their own so the viewer can
    show them in bold. External links keep their target in parentheses.
    Paragraphs are separated by a single blank line.

    Raises:
        DecodeError: if no text is left after cleanup.
    """
    soup = BeautifulSoup(html, "html.parser")
    content = soup.find("div", class_="mw-parser-output") or soup

    for c in content.find_all(string=lambda t: isinstance(t, Comment)):
        c.extract()
    for sel in DROP_SELECTORS:
        for el in content.select(sel):
            el.decompose()

    for a in content.find_all("a", class_="external", href=True):
        href = a["href"]
        if href.startswith("//"):
            href = "https:" + href
        label = a.get_text(" ", strip=True)
        if href.startswith("http") and label and label != href:
            a.append(f" ({href})")

    for h in content.find_all(HEADING_TAGS):
        h.string = h.get_text(" ", strip=True).upper()
    for tag in content.find_all(BLOCK_TAGS):
        tag.insert_before("\n\n")
        tag.insert_after("\n\n")
    for cell in content.find_all(["td", "th"]):
        cell.insert_after(" ")
    for br in content.find_all("br"):
        br.replace_with("\n")

    text = content.get_text()
    lines = [re.sub(r"[ \t\u00a0]+", " ", line).strip() for line in text.split("\n")]
    text = re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()
    if not text:
        raise DecodeError("failed to make content readable: no text found")
    return text
