"""Markdown syntax tree access and plain-text extraction.

Every parser works on the text produced here, never on raw markdown:
headings, paragraphs, list items and table cells are flattened to plain
text with formatting markers, link targets and table structure removed.
"""

from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

# Leaf node kinds whose ``content`` is document text
_TEXT_TYPES = frozenset({"text", "code_inline", "code_block", "fence"})

_BREAK_TYPES = frozenset({"softbreak", "hardbreak"})

# Nodes whose content is not prose: raw HTML and image alt text
_SKIPPED_TYPES = frozenset({"html_inline", "html_block", "image"})

_LIST_TYPES = frozenset({"bullet_list", "ordered_list"})

_STRONG_MARKER = "**"


@lru_cache
def get_markdown_parser() -> MarkdownIt:
    """Get the shared CommonMark parser with GFM tables enabled."""
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


def parse_markdown(markdown: str) -> SyntaxTreeNode:
    """Parse markdown text into a syntax tree.

    Args:
        markdown: Markdown source

    Returns:
        Root node of the syntax tree
    """
    tokens = get_markdown_parser().parse(markdown or "")
    return SyntaxTreeNode(tokens)


def get_text_content(node: SyntaxTreeNode, keep_strong: bool = False) -> str:
    """Flatten a node to the text of all its leaves, in document order.

    Line breaks inside a paragraph become newlines. Unknown node kinds
    contribute only their children's text. The walk is iterative, so
    arbitrarily deep trees are fine.

    Args:
        node: Any node of a parsed tree
        keep_strong: Re-emit ``**`` around strong spans so bold names can
            be recognised by the connection grammars

    Returns:
        Plain text of the node
    """
    parts: list[str] = []
    stack: list[SyntaxTreeNode | str] = [node]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        kind = item.type
        if kind in _TEXT_TYPES:
            parts.append(item.content or "")
        elif kind in _BREAK_TYPES:
            parts.append("\n")
        elif kind in _SKIPPED_TYPES:
            continue
        else:
            children = list(item.children or [])
            if keep_strong and kind == "strong":
                stack.append(_STRONG_MARKER)
                stack.extend(reversed(children))
                stack.append(_STRONG_MARKER)
            else:
                stack.extend(reversed(children))

    return "".join(parts)


def block_text(node: SyntaxTreeNode) -> str:
    """Trimmed plain text of a block node."""
    return get_text_content(node).strip()


def heading_level(node: SyntaxTreeNode) -> int | None:
    """Return 1-6 for heading nodes, None for anything else."""
    if node.type != "heading":
        return None
    try:
        return int(node.tag[1:])
    except (TypeError, ValueError):
        return None


def is_heading(node: SyntaxTreeNode, level: int) -> bool:
    return heading_level(node) == level


def is_paragraph(node: SyntaxTreeNode) -> bool:
    return node.type == "paragraph"


def is_list(node: SyntaxTreeNode) -> bool:
    return node.type in _LIST_TYPES


def is_table(node: SyntaxTreeNode) -> bool:
    return node.type == "table"


def list_item_texts(node: SyntaxTreeNode, keep_strong: bool = False) -> list[str]:
    """Trimmed text of each non-empty item of a list node."""
    texts = []
    for item in node.children:
        if item.type != "list_item":
            continue
        text = get_text_content(item, keep_strong=keep_strong).strip()
        if text:
            texts.append(text)
    return texts


def table_rows(node: SyntaxTreeNode) -> list[list[str]]:
    """Cell texts of every row of a table, header row first."""
    rows: list[list[str]] = []
    stack = [node]
    while stack:
        item = stack.pop()
        if item.type == "tr":
            rows.append(
                [block_text(cell) for cell in item.children if cell.type in ("th", "td")]
            )
            continue
        stack.extend(reversed(list(item.children or [])))
    return rows
