from __future__ import annotations

from enum import Enum

from siteinfo.models.site_info.record import SiteInfo
from siteinfo.pipeline.tree import DocumentTree, Node, NodeKind


class HeadTag(str, Enum):
    TITLE = "title"
    META = "meta"
    LINK = "link"

    @classmethod
    def of(cls, node: Node) -> HeadTag | None:
        if node.kind is not NodeKind.ELEMENT:
            return None
        for member in cls:
            if node.tag == member.value:
                return member
        return None


def extract_site_info(
    tree: DocumentTree, head: Node, *, only_basic_info: bool = False
) -> SiteInfo:
    """Collect title, description, keywords and icon from *head*'s children.

    Only direct children are examined.  When several candidates match, the
    last one in document order wins.  With *only_basic_info*, keywords and
    icon are not looked up.
    """
    title = description = keywords = icon_url = ""

    for child in tree.children_of(head):
        tag = HeadTag.of(child)
        if tag is HeadTag.TITLE:
            title = _title_text(tree, child)
        elif tag is HeadTag.META:
            meta = child.attributes()
            name = meta.get("name", "")
            if name == "description":
                description = meta.get("content", "")
            elif name == "keywords" and not only_basic_info:
                keywords = meta.get("content", "")
        elif tag is HeadTag.LINK:
            if only_basic_info:
                continue
            link = child.attributes()
            if link.get("rel", "") == "icon":
                icon_url = link.get("href", "")

    return SiteInfo(
        title=title,
        description=description,
        keywords=keywords,
        icon_url=icon_url,
    )


def _title_text(tree: DocumentTree, title: Node) -> str:
    first = tree.first_child(title)
    if first is None or first.kind is not NodeKind.TEXT:
        return ""
    return first.text
