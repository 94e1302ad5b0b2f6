"""HTML helpers for mounting the widget into a page."""

from bs4 import BeautifulSoup


def mount_widget(page_html: str, widget_html: str, container_id: str) -> tuple[str, bool]:
    """Place widget markup inside the page's container element.

    Args:
        page_html: Page to mount into
        widget_html: Rendered widget markup
        container_id: Id of the container element

    Returns:
        Tuple of (page HTML, whether the widget was mounted). The page is
        returned unchanged when the container is not present.
    """
    soup = BeautifulSoup(page_html, "html.parser")
    container = soup.find(id=container_id)
    if container is None:
        return page_html, False

    container.clear()
    fragment = BeautifulSoup(widget_html, "html.parser")
    for node in list(fragment.contents):
        container.append(node.extract())
    return str(soup), True
