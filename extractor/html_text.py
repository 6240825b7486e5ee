from typing import Union

from bs4 import BeautifulSoup

DROP_TAGS = ["script", "style", "ix:header"]
BLOCK_TAGS = [
    "p",
    "div",
    "tr",
    "li",
    "table",
    "section",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
]
HTML_MARKERS = ("<html", "<body", "<table", "<div", "<p>", "<ix:")


def looks_like_html(text: str) -> bool:
    head = text[:5000].lower()
    return any(marker in head for marker in HTML_MARKERS)


def html_to_text(content: Union[str, bytes]) -> str:
    """
    Flatten filing HTML into line-oriented text.

    Table rows become one line with cells separated by spaces so a label and
    its amounts stay together; block elements end a line. Whitespace is
    collapsed and blank lines dropped.
    """
    soup = BeautifulSoup(content, "html.parser")
    for tag in soup.find_all(DROP_TAGS):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for cell in soup.find_all(["td", "th"]):
        cell.append(" ")
    for block in soup.find_all(BLOCK_TAGS):
        block.append("\n")
    lines = [" ".join(line.split()) for line in soup.get_text().splitlines()]
    return "\n".join(line for line in lines if line)
