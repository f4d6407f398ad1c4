from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional
import re

from bs4 import BeautifulSoup, Comment, NavigableString, Tag


_INLINE_TAGS = {
    "span", "a", "strong", "b", "em", "i", "u", "s", "strike", "del",
    "code", "img", "br", "sup", "sub", "small", "mark", "abbr", "cite",
}
_CONTAINER_TAGS = {"div", "section", "article", "main", "header", "footer", "figure", "aside"}
_RAW_HTML_TAGS = {"table", "iframe", "video", "audio", "embed", "object"}


def _collapse_ws(text: str) -> str:
    return re.sub(r"\s+", " ", (text or "").replace("\xa0", " "))


def _wrap(text: str, marker: str) -> str:
    # Keep surrounding spaces outside the markers: "** bold**" does not render.
    core = text.strip()
    if not core:
        return text
    lead = text[: len(text) - len(text.lstrip())]
    trail = text[len(text.rstrip()):]
    return f"{lead}{marker}{core}{marker}{trail}"


def _finish_inline(text: str) -> str:
    lines = [re.sub(r" {2,}", " ", line).strip() for line in text.split("\n")]
    return "  \n".join(line for line in lines if line).strip()


def convert_html_to_markdown_local(
    html: str,
    *,
    image_src_rewriter: Optional[Callable[[str], str]] = None,
) -> str:
    """
    Convert HTML from a WordPress post body to Markdown.

    Covered:
    - Headings, paragraphs, links, inline emphasis, strikethrough, inline
      code, images, nested lists, blockquotes, dividers (hr), code blocks
      (pre), figures with captions.
    - Tables and embeds (iframe, video, audio) are kept as raw HTML blocks.

    ``image_src_rewriter`` is applied to every image ``src`` before it is
    written, e.g. to point at a local copy of the file.
    """
    # Pre-process to remove WordPress shortcodes like [caption]
    cleaned_html = re.sub(r'\[/?caption[^\]]*\]', '', html or "", flags=re.IGNORECASE)

    soup = BeautifulSoup(cleaned_html, "html.parser")

    # Remove scripts/styles
    for bad in soup.find_all(["script", "style"]):
        bad.decompose()

    def image_markdown(el: Tag) -> str:
        src = el.get("src") or ""
        if not src:
            return ""
        if image_src_rewriter:
            src = image_src_rewriter(src)
        alt = el.get("alt") or ""
        return f"![{alt}]({src})"

    def render_inline(children: Iterable[Any]) -> str:
        parts: List[str] = []
        for child in children:
            if isinstance(child, Comment):
                continue
            if isinstance(child, NavigableString):
                parts.append(_collapse_ws(str(child)))
                continue
            if not isinstance(child, Tag):
                continue
            name = (child.name or "").lower()

            # Line breaks survive as hard breaks
            if name == "br":
                parts.append("\n")
                continue
            if name == "img":
                parts.append(image_markdown(child))
                continue
            if name == "code":
                code = child.get_text()
                fence = "``" if "`" in code else "`"
                parts.append(f"{fence}{code}{fence}")
                continue

            inner = render_inline(child.children)
            if name in ("strong", "b"):
                parts.append(_wrap(inner, "**"))
            elif name in ("em", "i"):
                parts.append(_wrap(inner, "_"))
            elif name in ("s", "strike", "del"):
                parts.append(_wrap(inner, "~~"))
            elif name == "a":
                href = child.get("href")
                label = inner.strip()
                parts.append(f"[{label}]({href})" if href and label else inner)
            else:
                parts.append(inner)
        return "".join(parts)

    def render_list(el: Tag, depth: int) -> str:
        ordered = (el.name or "").lower() == "ol"
        lines: List[str] = []
        indent = "    " * depth
        for index, li in enumerate(el.find_all("li", recursive=False), start=1):
            marker = f"{index}." if ordered else "-"
            inline_children: List[Any] = []
            nested: List[str] = []
            for child in li.children:
                if isinstance(child, Tag) and (child.name or "").lower() in ("ul", "ol"):
                    nested.append(render_list(child, depth + 1))
                else:
                    inline_children.append(child)
            text = _finish_inline(render_inline(inline_children))
            lines.append(f"{indent}{marker} {text}".rstrip())
            lines.extend(n for n in nested if n)
        return "\n".join(lines)

    def handle_block(el: Tag) -> List[str]:
        name = (el.name or "").lower()
        if name in {"p", "figcaption"}:
            text = _finish_inline(render_inline(el.children))
            return [text] if text else []
        if name in {"h1", "h2", "h3", "h4", "h5", "h6"}:
            text = _finish_inline(render_inline(el.children))
            return [f"{'#' * int(name[1])} {text}"] if text else []
        if name in {"ul", "ol"}:
            text = render_list(el, 0)
            return [text] if text else []
        if name == "blockquote":
            inner = "\n\n".join(walk(el))
            if not inner:
                return []
            return ["\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))]
        if name == "hr":
            return ["---"]
        if name == "pre":
            # preformatted text, try to extract code text and its language
            code_child = el.find("code")
            source = code_child if isinstance(code_child, Tag) else el
            language = ""
            for cls in source.get("class") or []:
                if cls.startswith("language-"):
                    language = cls[len("language-"):]
                    break
            text = source.get_text().strip("\n")
            return [f"```{language}\n{text}\n```"]
        if name in _RAW_HTML_TAGS:
            return [str(el)]
        if name in _CONTAINER_TAGS:
            return walk(el)

        # Fallback: treat unknown blocks as paragraph text
        txt = el.get_text(" ", strip=True)
        return [_collapse_ws(txt)] if txt else []

    def walk(container: Tag) -> List[str]:
        # Coalesce inline siblings into a single paragraph
        blocks: List[str] = []
        inline_run: List[Any] = []

        def flush_inline_run() -> None:
            if not inline_run:
                return
            text = _finish_inline(render_inline(inline_run))
            if text:
                blocks.append(text)
            inline_run.clear()

        for child in container.children:
            if isinstance(child, Comment):
                continue
            if isinstance(child, NavigableString):
                inline_run.append(child)
                continue
            if isinstance(child, Tag) and (child.name or "").lower() in _INLINE_TAGS:
                inline_run.append(child)
                continue
            # Block-level element encountered
            flush_inline_run()
            if isinstance(child, Tag):
                blocks.extend(handle_block(child))

        # flush any trailing inline run
        flush_inline_run()
        return blocks

    return "\n\n".join(walk(soup))


class HtmlToMarkdown:
    """
    Reusable HTML to Markdown converter.

    One instance is built per parse run and handed to every call of
    :func:`wxr_parser.parsers.translator.get_post_content`.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert("<p>Hello <strong>world</strong></p>")
    """

    def __init__(self, *, image_src_rewriter: Optional[Callable[[str], str]] = None) -> None:
        self.image_src_rewriter = image_src_rewriter

    def convert(self, html: str) -> str:
        if not html or not html.strip():
            return ""
        return convert_html_to_markdown_local(html, image_src_rewriter=self.image_src_rewriter)
